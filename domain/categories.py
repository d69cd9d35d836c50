"""
Categorías de uso de una medicación y el comportamiento que cada una elige.

Cada preocupación (ritmo de consumo, si aparece en un día, qué horarios
tiene ese día, si muestra estado en el calendario) tiene una sola tabla de
despacho acá. El resto del paquete consulta estas tablas en lugar de
preguntar por la categoría.
"""
from enum import Enum

from domain.dates import days_between, to_date


class UsageCategory(str, Enum):
    CONTINUOUS    = "continuous"
    PERIOD        = "period"
    INTERVALS     = "intervals"
    CONTRACEPTIVE = "contraceptive"
    PRN           = "prn"

    @classmethod
    def of(cls, medication):
        """Categoría de la medicación, o None si no tiene o no se reconoce."""
        raw = getattr(medication, "usage_category", None)
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            return None


MEDICATION_UNITS = ("comprimido", "gota", "ml", "dose")
DOSES_PER_DAY_TOKENS = ("1x", "2x", "3x", "4x", "5x", "custom")
CONTRACEPTIVE_TYPES = ("daily", "21_7", "24_4", "28_continuous")

INTERVAL_PRESETS = {
    "weekly": 7,
    "biweekly": 15,
    "monthly": 30,
    "quarterly": 90,
    "quadrimesterly": 120,
}


def interval_of(medication):
    return getattr(medication, "interval_days", None) or 1


def _times_count(medication):
    return len(medication.times or []) or 1


# ---------------------------- RITMO DE CONSUMO ----------------------------

def _rate_by_times(medication):
    return _times_count(medication) / interval_of(medication)


def _rate_one_per_interval(medication):
    return 1 / interval_of(medication)


def _rate_daily(medication):
    return 1


def _rate_none(medication):
    return 0


CONSUMPTION_RATE = {
    UsageCategory.CONTINUOUS: _rate_by_times,
    UsageCategory.PERIOD: _rate_by_times,
    UsageCategory.INTERVALS: _rate_one_per_interval,
    UsageCategory.CONTRACEPTIVE: _rate_daily,
    UsageCategory.PRN: _rate_none,
}


def consumption_rate(medication):
    strategy = CONSUMPTION_RATE.get(UsageCategory.of(medication), _rate_daily)
    return strategy(medication)


# ---------------------------- ACTIVIDAD EN UN DÍA ----------------------------

def _logged_doses(medication, day, doses):
    return [
        d for d in doses
        if d.medication_id == medication.id and to_date(d.date) == day
    ]


def _is_logged_on(medication, day, doses):
    return bool(_logged_doses(medication, day, doses))


def _recurs_on(medication, day, doses):
    start = to_date(medication.start_date)
    end = to_date(medication.end_date)

    if start is None:
        return True
    if day < start:
        return False
    if end is not None and day > end:
        return False

    return days_between(start, day) % interval_of(medication) == 0


ACTIVITY_TEST = {
    UsageCategory.PRN: _is_logged_on,
}


def activity_test(medication):
    return ACTIVITY_TEST.get(UsageCategory.of(medication), _recurs_on)


# ---------------------------- HORARIOS DEL DÍA ----------------------------

def _logged_times(medication, day, doses):
    return sorted(d.scheduled_time for d in _logged_doses(medication, day, doses))


def _nominal_times(medication, day, doses):
    return list(medication.times or [])


SLOT_TIMES = {
    UsageCategory.PRN: _logged_times,
}


def slot_times_strategy(medication):
    return SLOT_TIMES.get(UsageCategory.of(medication), _nominal_times)


# ---------------------------- CALENDARIO ----------------------------

# PRN no tiene disponibilidad "programada": sólo historial de consumo.
SHOWS_STATUS = {
    UsageCategory.PRN: False,
}


def is_prn(medication):
    return not SHOWS_STATUS.get(UsageCategory.of(medication), True)
