from apiflask import APIFlask
from passkey_crawler.config.env import config_env
from passkey_crawler.config.logging import config_logging
from passkey_crawler.config.mongodb import config_mongodb
from passkey_crawler.config.crawler import config_crawler
from passkey_crawler.blueprints.bp_api import bp_api


def create_app(overrides: dict = None):
    app = APIFlask(__name__, title="Passkey Crawler")

    config_env(app)
    if overrides:
        app.config.update(overrides)
    config_logging(app)
    config_mongodb(app)
    config_crawler(app)

    app.url_map.strict_slashes = False
    app.register_blueprint(bp_api)

    return app


if __name__ == "__main__":
    create_app().run()
