from apiflask import APIBlueprint
from apiflask.fields import String, Boolean
from apiflask.validators import Length
from flask import current_app
from passkey_crawler.modules.auth import admin_auth
from passkey_crawler.modules.sinks import build_link_record


bp_detect = APIBlueprint("detect", __name__, url_prefix="/detect")


@bp_detect.post("/")
@bp_detect.auth_required(admin_auth)
@bp_detect.input({
    "query": String(required=True, validate=Length(min=1, max=2048), metadata={"description": "domain, free-text query or absolute url"}),
    "multiple": Boolean(load_default=False, metadata={"description": "also try raw url variants of the query"})
}, location="json")
def detect(json_data):
    query = json_data["query"].strip()
    if not query:
        return {"success": False, "error": "Query must not be blank", "data": None}, 400

    orchestrator = current_app.extensions["orchestrator_factory"](json_data["multiple"])
    verdicts = orchestrator.evaluate(query)

    return {"success": True, "error": None, "data": {
        "query": query,
        "verdicts": [v.to_dict() for v in verdicts],
        "links": [build_link_record(v, query) for v in verdicts if v.has_passkey]
    }}
