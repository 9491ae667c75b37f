from apiflask import APIBlueprint
from flask import current_app
from passkey_crawler import __version__


bp_ping = APIBlueprint("ping", __name__, url_prefix="/ping")


@bp_ping.get("/")
def ping():
    """ Liveness check, also reports whether positive verdicts are persisted """
    return {"success": True, "error": None, "data": {
        "message": "pong",
        "version": __version__,
        "persistence": current_app.extensions.get("links") is not None
    }}
