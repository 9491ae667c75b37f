from apiflask import HTTPBasicAuth
from flask import current_app


admin_auth = HTTPBasicAuth(description="Admin Authentication")


@admin_auth.verify_password
def verify_admin_auth(username, password):
    if username == current_app.config["ADMIN_USER"] and password == current_app.config["ADMIN_PASS"]: return True
    else: return False
