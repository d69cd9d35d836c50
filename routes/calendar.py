from datetime import datetime, timedelta

from flask import request

from domain.calendar import day_indicator
from domain.dates import to_date
from domain.schedule import is_active_on, schedule_for_range, slot_to_dict, slots_for_date
from services import appointments as appointment_service
from services import doses as dose_service
from services import medications as med_service
from . import NO_LOGIN, calendar_bp, get_logged_user_id

MAX_RANGE_DAYS = 62


def _query_date(name, default=None):
    raw = request.args.get(name)
    if not raw:
        return default
    return to_date(raw)


@calendar_bp.get("/dia")
def calendario_dia():
    """Medicaciones, tomas y consultas de un día del calendario."""
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    now = datetime.now()
    try:
        day = _query_date("fecha", now.date())
    except ValueError:
        return {"error": "La fecha no es válida (YYYY-MM-DD)."}, 400

    meds = med_service.list_medications(user_id)
    doses = dose_service.list_doses(user_id, day=day)
    slots = slots_for_date(meds, doses, day, now)

    items = []
    for med in meds:
        if not is_active_on(med, day, doses):
            continue
        items.append({
            "med_id": med.id,
            "name": med.name,
            "color": med.color,
            "indicator": day_indicator(med, day, now.date(), now, doses).to_dict(),
            "tomas": [slot_to_dict(s) for s in slots if s.medication_id == med.id],
        })

    appointments = [
        a.to_dict() for a in appointment_service.list_appointments(user_id) if a.date == day
    ]

    return {"fecha": day.isoformat(), "medicaciones": items, "consultas": appointments}


@calendar_bp.get("/rango")
def calendario_rango():
    """Agenda día por día para una semana o un mes."""
    user_id = get_logged_user_id()
    if not user_id:
        return NO_LOGIN

    now = datetime.now()
    try:
        start = _query_date("desde", now.date())
        end = _query_date("hasta", start + timedelta(days=6))
    except ValueError:
        return {"error": "Las fechas no son válidas (YYYY-MM-DD)."}, 400

    if end < start:
        return {"error": "'hasta' no puede ser anterior a 'desde'."}, 400
    if (end - start).days >= MAX_RANGE_DAYS:
        return {"error": f"El rango no puede superar {MAX_RANGE_DAYS} días."}, 400

    meds = med_service.list_medications(user_id)
    doses = dose_service.list_doses_between(user_id, start, end)
    schedule = schedule_for_range(meds, doses, start, end, now)

    return {
        "desde": start.isoformat(),
        "hasta": end.isoformat(),
        "dias": {
            day.isoformat(): [slot_to_dict(s) for s in slots]
            for day, slots in schedule.items()
        },
    }
