from flask import Blueprint, current_app, request, session

meds_bp = Blueprint("meds", __name__, url_prefix="/meds")
doses_bp = Blueprint("doses", __name__, url_prefix="/doses")
calendar_bp = Blueprint("calendar", __name__, url_prefix="/calendar")
appointments_bp = Blueprint("appointments", __name__, url_prefix="/appointments")
settings_bp = Blueprint("settings", __name__, url_prefix="/settings")

NO_LOGIN = {"error": "no-login"}, 401


def get_logged_user_id():
    return session.get("user_id")


def get_settings_store():
    return current_app.extensions["settings_store"]


def get_payload():
    """Cuerpo JSON del request, o el formulario si no vino JSON."""
    payload = request.get_json(silent=True)
    if payload is not None:
        return payload
    payload = request.form.to_dict()
    if "times" in request.form:
        payload["times"] = request.form.getlist("times")
    return payload


from . import meds, doses, calendar, appointments, settings
