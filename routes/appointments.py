from datetime import datetime

from flask import current_app

from services import appointments as appointment_service
from . import NO_LOGIN, appointments_bp, get_logged_user_id, get_payload


@appointments_bp.get("/")
def list_appointments():
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    apps = appointment_service.list_appointments(user_id)
    return {"consultas": [a.to_dict() for a in apps]}


@appointments_bp.get("/proximas")
def proximas():
    """Las próximas consultas/exámenes, la más cercana primero."""
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    limit = current_app.config["UPCOMING_APPOINTMENTS_LIMIT"]
    apps = appointment_service.upcoming_appointments(user_id, datetime.now(), limit)
    return {"consultas": [a.to_dict() for a in apps]}


@appointments_bp.post("/crear")
def crear_appointment():
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    try:
        app = appointment_service.create_appointment(user_id, get_payload())
    except ValueError as e:
        return {"error": str(e)}, 400

    return app.to_dict(), 201


@appointments_bp.put("/<int:appointment_id>")
def editar_appointment(appointment_id):
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    try:
        app = appointment_service.update_appointment(user_id, appointment_id, get_payload())
    except ValueError as e:
        return {"error": str(e)}, 400

    return app.to_dict()


@appointments_bp.post("/borrar/<int:appointment_id>")
def borrar_appointment(appointment_id):
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    appointment_service.delete_appointment(user_id, appointment_id)
    return {"message": "Consulta eliminada correctamente."}
