import os


def config_env(app):
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO")

    app.config["ADMIN_USER"] = os.environ.get("ADMIN_USER", "admin")
    app.config["ADMIN_PASS"] = os.environ.get("ADMIN_PASS", "changeme")

    app.config["MONGODB_URI"] = os.environ.get("MONGODB_URI", "")
    app.config["MONGODB_COLLECTION"] = os.environ.get("MONGODB_COLLECTION", "links")

    app.config["CRAWLER_CONFIG"] = os.environ.get("CRAWLER_CONFIG", "")
