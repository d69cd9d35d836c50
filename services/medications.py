import logging
import random
from datetime import date, timedelta

from domain.categories import (
    CONTRACEPTIVE_TYPES,
    DOSES_PER_DAY_TOKENS,
    INTERVAL_PRESETS,
    MEDICATION_UNITS,
    UsageCategory,
)
from domain.dates import generate_times, parse_time, to_date
from models import db, DoseEvent, Medication
from services.errors import NotFoundError, commit_or_raise

logger = logging.getLogger("medmanager.medications")

COLORS = [
    "bg-blue-500", "bg-green-500", "bg-purple-500", "bg-rose-500",
    "bg-amber-500", "bg-cyan-500", "bg-indigo-500",
]

FIELDS = (
    "name", "dosage", "unit", "usage_category", "doses_per_day", "interval_days",
    "interval_type", "contraceptive_type", "times", "start_date", "end_date",
    "duration_days", "max_doses_per_day", "total_stock", "current_stock",
    "expiry_date", "notes", "color",
)

# Sólo estas categorías reparten los horarios automáticamente según 'Nx'.
AUTO_TIMES = (UsageCategory.CONTINUOUS, UsageCategory.PERIOD)


def _int(values, key, minimum, default=None):
    raw = values.get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' debe ser un número entero.")
    if value < minimum:
        raise ValueError(f"'{key}' debe ser mayor o igual a {minimum}.")
    return value


def _date(values, key):
    try:
        return to_date(values.get(key))
    except (TypeError, ValueError):
        raise ValueError(f"La fecha '{key}' no es válida (YYYY-MM-DD).")


def _text(values, key):
    raw = values.get(key)
    if raw is None:
        return None
    raw = str(raw).strip()
    return raw or None


def _clean(values, today):
    """Valida y normaliza los campos de una medicación ya combinados."""
    name = _text(values, "name")
    if not name:
        raise ValueError("El nombre de la medicación es obligatorio.")

    try:
        category = UsageCategory(values.get("usage_category") or UsageCategory.CONTINUOUS.value)
    except ValueError:
        raise ValueError("Categoría de uso desconocida.")

    unit = values.get("unit") or "comprimido"
    if unit not in MEDICATION_UNITS:
        raise ValueError("Unidad desconocida.")

    doses_per_day = values.get("doses_per_day") or "1x"
    if doses_per_day not in DOSES_PER_DAY_TOKENS:
        raise ValueError("'doses_per_day' debe ser '1x'..'5x' o 'custom'.")

    contraceptive_type = values.get("contraceptive_type")
    if contraceptive_type and contraceptive_type not in CONTRACEPTIVE_TYPES:
        raise ValueError("Tipo de anticonceptivo desconocido.")

    interval_type = values.get("interval_type")
    if interval_type in INTERVAL_PRESETS:
        interval_days = INTERVAL_PRESETS[interval_type]
    elif interval_type in (None, "", "custom"):
        interval_days = _int(values, "interval_days", 1, default=1)
    else:
        raise ValueError("Tipo de intervalo desconocido.")

    try:
        times = [parse_time(t) for t in (values.get("times") or [])]
    except (AttributeError, TypeError, ValueError):
        raise ValueError("Los horarios deben tener el formato HH:MM.")
    # Sólo se reparte el día cuando viene el primer horario; una lista completa se respeta.
    if category in AUTO_TIMES and doses_per_day != "custom" and len(times) == 1:
        times = generate_times(doses_per_day, times[0])
    if category is not UsageCategory.PRN and not times:
        raise ValueError("Tenés que indicar al menos un horario.")

    start_date = _date(values, "start_date")
    end_date = _date(values, "end_date")
    duration_days = _int(values, "duration_days", 1)
    if category is UsageCategory.PERIOD:
        start_date = start_date or today
        duration_days = duration_days or 7
        end_date = start_date + timedelta(days=duration_days - 1)
    if start_date and end_date and end_date < start_date:
        raise ValueError("La fecha de fin no puede ser anterior a la de inicio.")

    total_stock = _int(values, "total_stock", 0, default=0)
    current_stock = _int(values, "current_stock", 0, default=total_stock)

    return {
        "name": name,
        "dosage": _text(values, "dosage"),
        "unit": unit,
        "usage_category": category.value,
        "doses_per_day": doses_per_day,
        "interval_days": interval_days,
        "interval_type": interval_type or None,
        "contraceptive_type": contraceptive_type or None,
        "times": times,
        "start_date": start_date,
        "end_date": end_date,
        "duration_days": duration_days,
        "max_doses_per_day": _int(values, "max_doses_per_day", 1),
        "total_stock": total_stock,
        "current_stock": current_stock,
        "expiry_date": _date(values, "expiry_date"),
        "notes": _text(values, "notes"),
        "color": _text(values, "color") or random.choice(COLORS),
    }


# ---------------------------- CONSULTAS ----------------------------

def list_medications(user_id):
    return (
        Medication.query.filter_by(usuario_id=user_id)
        .order_by(Medication.created_at.desc(), Medication.id.desc())
        .all()
    )


def get_medication(user_id, med_id):
    med = Medication.query.filter_by(id=med_id, usuario_id=user_id).first()
    if not med:
        raise NotFoundError("La medicación no existe o no te pertenece.")
    return med


# ---------------------------- ESCRITURAS ----------------------------

def create_medication(user_id, data, today=None):
    values = {k: v for k, v in data.items() if k in FIELDS}
    # Una medicación nueva arranca hoy salvo que se diga otra cosa.
    values["start_date"] = values.get("start_date") or (today or date.today())

    med = Medication(usuario_id=user_id, **_clean(values, today or date.today()))
    db.session.add(med)
    commit_or_raise("la medicación")

    logger.info("Medicación %s creada para el usuario %s", med.id, user_id)
    return med


def update_medication(user_id, med_id, data, today=None):
    """Actualización parcial: sólo cambia los campos presentes en data."""
    med = get_medication(user_id, med_id)

    values = {key: getattr(med, key) for key in FIELDS}
    values.update({k: v for k, v in data.items() if k in FIELDS})
    if "interval_days" in data and "interval_type" not in data and med.interval_type in INTERVAL_PRESETS:
        values["interval_type"] = "custom"

    for key, value in _clean(values, today or date.today()).items():
        setattr(med, key, value)
    commit_or_raise("la medicación")
    return med


def delete_medication(user_id, med_id):
    med = get_medication(user_id, med_id)

    # Borrar las tomas asociadas en la misma transacción
    deleted = DoseEvent.query.filter_by(medication_id=med.id, usuario_id=user_id).delete()
    db.session.delete(med)
    commit_or_raise("la eliminación de la medicación")

    logger.info("Medicación %s eliminada junto con %s tomas", med_id, deleted)
