from flask_pymongo import PyMongo
from passkey_crawler.modules.sinks import MongoLinkSink


def config_mongodb(app):
    app.extensions["links"] = None
    if not app.config["MONGODB_URI"]:
        app.logger.info("No MongoDB configured, positive verdicts are not persisted")
        return

    app.config["MONGO_URI"] = app.config["MONGODB_URI"]
    try:
        mongo = PyMongo(app)
        app.extensions["links"] = MongoLinkSink(mongo.db[app.config["MONGODB_COLLECTION"]])
        app.logger.info("Successfully configured MongoDB link sink")
    except Exception as e:
        app.logger.error(f"Error initializing database: {e}")
