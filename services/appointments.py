from datetime import datetime

from domain.dates import parse_time, to_date
from models import db, Appointment, AppointmentTypeEnum
from services.errors import NotFoundError, commit_or_raise

FIELDS = ("type", "doctor", "specialty", "location", "notes", "date", "time")
APPOINTMENT_TYPES = [t.value for t in AppointmentTypeEnum]


def _clean(values):
    if values.get("type") not in APPOINTMENT_TYPES:
        raise ValueError("El tipo debe ser 'Consulta' o 'Exame'.")

    try:
        day = to_date(values.get("date"))
    except (TypeError, ValueError):
        raise ValueError("La fecha no es válida (YYYY-MM-DD).")
    if day is None:
        raise ValueError("La fecha es obligatoria.")

    try:
        time = parse_time(values.get("time") or "")
    except ValueError:
        raise ValueError("La hora no es válida (HH:MM).")

    clean = {"type": values["type"], "date": day, "time": time}
    for key in ("doctor", "specialty", "location", "notes"):
        raw = values.get(key)
        clean[key] = (str(raw).strip() or None) if raw is not None else None
    return clean


def list_appointments(user_id):
    return (
        Appointment.query.filter_by(usuario_id=user_id)
        .order_by(Appointment.date.asc(), Appointment.time.asc())
        .all()
    )


def get_appointment(user_id, appointment_id):
    app = Appointment.query.filter_by(id=appointment_id, usuario_id=user_id).first()
    if not app:
        raise NotFoundError("La consulta no existe o no te pertenece.")
    return app


def select_upcoming(appointments, now, limit):
    """Consultas desde ahora en adelante, la más cercana primero."""
    future = [
        a for a in appointments
        if datetime.combine(a.date, datetime.strptime(a.time, "%H:%M").time()) >= now
    ]
    future.sort(key=lambda a: (a.date, a.time))
    return future[:limit]


def upcoming_appointments(user_id, now, limit):
    return select_upcoming(list_appointments(user_id), now, limit)


def create_appointment(user_id, data):
    app = Appointment(usuario_id=user_id, **_clean(data))
    db.session.add(app)
    commit_or_raise("la consulta")
    return app


def update_appointment(user_id, appointment_id, data):
    app = get_appointment(user_id, appointment_id)

    values = {key: getattr(app, key) for key in FIELDS}
    values.update({k: v for k, v in data.items() if k in FIELDS})

    for key, value in _clean(values).items():
        setattr(app, key, value)
    commit_or_raise("la consulta")
    return app


def delete_appointment(user_id, appointment_id):
    app = get_appointment(user_id, appointment_id)
    db.session.delete(app)
    commit_or_raise("la eliminación de la consulta")
