from datetime import date

from domain.rules import (
    days_until_expiry,
    expiry_status,
    medication_alerts,
    stock_status,
)
from domain.stock import days_of_stock_left, doses_per_day
from services import medications as med_service
from . import NO_LOGIN, get_logged_user_id, get_payload, get_settings_store, meds_bp


def _med_out(med, today, settings):
    """Medicación serializada con sus indicadores de stock y validez."""
    days_left = days_of_stock_left(med)
    out = med.to_dict()
    out.update({
        "daily_rate": doses_per_day(med),
        "days_left": days_left,
        "stock_status": stock_status(med, days_left, settings.threshold_running_out).value,
        "expiry_status": expiry_status(med, today, settings.threshold_expiring).value,
        "days_until_expiry": days_until_expiry(med.expiry_date, today),
        "alerts": [a.to_dict() for a in medication_alerts(med, today, settings)],
    })
    return out


@meds_bp.get("/")
def list_meds():
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    today = date.today()
    settings = get_settings_store().settings
    meds = med_service.list_medications(user_id)

    return {"meds": [_med_out(m, today, settings) for m in meds]}


@meds_bp.get("/alertas")
def alertas_meds():
    """Sólo las medicaciones que tienen alguna alerta de stock o validez."""
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    today = date.today()
    settings = get_settings_store().settings

    items = []
    for med in med_service.list_medications(user_id):
        alerts = medication_alerts(med, today, settings)
        if alerts:
            items.append({
                "med_id": med.id,
                "name": med.name,
                "current_stock": med.current_stock,
                "unit": med.unit,
                "alerts": [a.to_dict() for a in alerts],
            })

    return {"alertas": items}


@meds_bp.post("/crear")
def crear_med():
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    try:
        med = med_service.create_medication(user_id, get_payload())
    except ValueError as e:
        return {"error": str(e)}, 400

    return _med_out(med, date.today(), get_settings_store().settings), 201


@meds_bp.get("/<int:med_id>")
def ver_med(med_id):
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    med = med_service.get_medication(user_id, med_id)
    return _med_out(med, date.today(), get_settings_store().settings)


@meds_bp.put("/<int:med_id>")
def editar_med(med_id):
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    try:
        med = med_service.update_medication(user_id, med_id, get_payload())
    except ValueError as e:
        return {"error": str(e)}, 400

    return _med_out(med, date.today(), get_settings_store().settings)


@meds_bp.post("/borrar/<int:med_id>")
def borrar_med(med_id):
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    med_service.delete_medication(user_id, med_id)
    return {"message": "Medicacion eliminada correctamente."}
