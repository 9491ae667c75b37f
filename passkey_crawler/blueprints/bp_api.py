from apiflask import APIBlueprint
from passkey_crawler.blueprints.api.bp_detect import bp_detect
from passkey_crawler.blueprints.api.bp_ping import bp_ping


bp_api = APIBlueprint("api", __name__, url_prefix="/api")


bp_api.register_blueprint(bp_detect)
bp_api.register_blueprint(bp_ping)
