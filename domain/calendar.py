from dataclasses import dataclass
from enum import Enum

from domain import categories
from domain.dates import is_future, is_past, is_today, time_str, to_date
from domain.rules import is_expired
from domain.schedule import MISSED, TAKEN, find_dose, slot_times
from domain.stock import is_out_of_stock_on_date


class DisplayMode(str, Enum):
    STATUS      = "STATUS"
    CONSUMPTION = "CONSUMPTION"


class Indicator(str, Enum):
    # modo STATUS
    EXPIRED      = "EXPIRED"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    AVAILABLE    = "AVAILABLE"
    # modo CONSUMPTION
    PRN_DOSE     = "PRN_DOSE"
    MISSED       = "MISSED"
    NOT_TAKEN    = "NOT_TAKEN"
    TAKEN        = "TAKEN"
    NONE         = "NONE"


INDICATOR_LABELS = {
    Indicator.EXPIRED: "Vencido",
    Indicator.OUT_OF_STOCK: "Acabado",
    Indicator.AVAILABLE: "Disponível",
    Indicator.PRN_DOSE: "Dose Eventual",
    Indicator.MISSED: "Dose Atrasada",
    Indicator.NOT_TAKEN: "Não tomado",
    Indicator.TAKEN: "Tomado",
    Indicator.NONE: "",
}


def calendar_display_mode(day, today, has_activity, is_prn):
    """
    Decide si la celda del calendario muestra el estado del medicamento
    o el registro de consumo.
    """
    if is_future(day, today):
        return DisplayMode.STATUS

    # Hoy sin nada registrado todavía: mostramos disponibilidad actual.
    if is_today(day, today) and not is_prn and not has_activity:
        return DisplayMode.STATUS

    return DisplayMode.CONSUMPTION


@dataclass(frozen=True)
class DayIndicator:
    mode: DisplayMode
    indicator: Indicator

    @property
    def label(self):
        return INDICATOR_LABELS[self.indicator]

    def to_dict(self):
        return {
            "mode": self.mode.value,
            "indicator": self.indicator.value,
            "label": self.label,
        }


def _availability(medication, day, today):
    if is_expired(medication.expiry_date, day):
        return Indicator.EXPIRED
    if is_out_of_stock_on_date(medication, day, today):
        return Indicator.OUT_OF_STOCK
    return Indicator.AVAILABLE


def _consumption(medication, day, now, doses):
    if categories.is_prn(medication):
        return Indicator.PRN_DOSE

    has_missed = has_taken = has_pending_past = False
    for time in slot_times(medication, day, doses):
        dose = find_dose(doses, medication.id, time, day)
        if dose is not None and dose.status == TAKEN:
            has_taken = True
        elif dose is not None and dose.status == MISSED:
            has_missed = True
        elif is_past(day, now) or (is_today(day, now) and time < time_str(now)):
            has_pending_past = True

    if has_missed:
        return Indicator.MISSED
    if has_pending_past:
        return Indicator.NOT_TAKEN
    if has_taken:
        return Indicator.TAKEN
    return Indicator.NONE


def day_indicator(medication, day, today, now, doses):
    """Anotación de una medicación en una celda del calendario."""
    day = to_date(day)
    has_activity = any(
        d.medication_id == medication.id and to_date(d.date) == day for d in doses
    )
    mode = calendar_display_mode(day, today, has_activity, categories.is_prn(medication))

    if mode is DisplayMode.STATUS:
        return DayIndicator(mode, _availability(medication, day, today))

    indicator = _consumption(medication, day, now, doses)
    # Hoy sin nada tomado ni atrasado todavía: vuelve a la disponibilidad.
    if indicator is Indicator.NONE and is_today(day, today):
        return DayIndicator(DisplayMode.STATUS, _availability(medication, day, today))
    return DayIndicator(mode, indicator)
