from datetime import date, datetime

from domain.dates import parse_time, to_date
from domain.schedule import slot_to_dict, slots_for_date, summarize
from services import doses as dose_service
from services import medications as med_service
from services.errors import DoseGuardError
from . import NO_LOGIN, doses_bp, get_logged_user_id, get_payload, get_settings_store


@doses_bp.get("/hoy")
def meds_hoy():
    """
    Agenda de HOY con el estado de cada toma.

    - Las tomas sin registro cuyo horario ya pasó se informan como 'missed'
      (no se guardan).
    - PRN no aparece en la agenda fija.
    """
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    now = datetime.now()
    today = now.date()

    meds = med_service.list_medications(user_id)
    doses = dose_service.list_doses(user_id, day=today)
    slots = slots_for_date(meds, doses, today, now, include_prn=False)
    summary = summarize(slots)

    settings = get_settings_store().settings
    return {
        "fecha": today.isoformat(),
        "tomas": [slot_to_dict(s) for s in slots],
        "resumen": summary.to_dict(),
        "mostrar_aviso_atraso": summary.missed > 0 and settings.show_delay_disclaimer,
    }


@doses_bp.post("/toggle")
def toggle_toma():
    """
    Marca o desmarca una toma. Se identifica por:
      - dose_id (registro existente), o
      - medication_id + scheduled_time (+ date, por defecto hoy)
    """
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    data = get_payload()
    try:
        scheduled_time = parse_time(data["scheduled_time"]) if data.get("scheduled_time") else None
        target_date = to_date(data.get("date"))
        medication_id = int(data["medication_id"]) if data.get("medication_id") else None
        dose_id = int(data["dose_id"]) if data.get("dose_id") else None
    except (AttributeError, TypeError, ValueError):
        return {"error": "No se pudo interpretar la toma (fecha YYYY-MM-DD, hora HH:MM)."}, 400

    try:
        plan, dose, med = dose_service.toggle_dose(
            user_id,
            dose_id=dose_id,
            medication_id=medication_id,
            scheduled_time=scheduled_time,
            target_date=target_date,
            force=bool(data.get("force")),
            today=date.today(),
        )
    except DoseGuardError as e:
        return {
            "error": e.reason,
            "medication_id": e.medication_id,
            "recovery": e.recovery,
        }, 409

    return {
        "accion": plan.action.value,
        "status": plan.new_status,
        "dose": dose.to_dict() if dose is not None else None,
        "current_stock": med.current_stock if med is not None else None,
    }


@doses_bp.get("/historial")
def historial_meds():
    """Todas las medicaciones del usuario con sus tomas registradas."""
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    return {
        "historial": [
            {"med": item["med"].to_dict(), "tomas": [d.to_dict() for d in item["doses"]]}
            for item in dose_service.history(user_id)
        ]
    }


@doses_bp.get("/resumen/data")
def resumen_data():
    """Cantidad de tomas registradas por estado, para el gráfico de torta."""
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    return dose_service.status_counts(user_id)
