import logging


LOG_FORMAT = "%(asctime)s:%(name)s:%(levelname)s:%(message)s"

# libraries whose INFO output drowns the per-stage engine logs
QUIET_LOGGERS = ["urllib3", "pymongo", "filelock"]


def setup_logging(level_name: str) -> int:
    level = getattr(logging, level_name.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return level


def config_logging(app):
    level = setup_logging(app.config["LOG_LEVEL"])
    logging.getLogger("werkzeug").setLevel(level)
