"""
Generador de agenda.

Expande la recurrencia de cada medicación en horarios concretos para un
día y los cruza con los registros de toma. Los horarios sin registro son
"virtuales": existen sólo acá hasta que alguien los marca.
"""
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Union

from domain.categories import activity_test, is_prn, slot_times_strategy
from domain.dates import is_future, is_past, time_str, to_date

PENDING = "pending"
TAKEN   = "taken"
MISSED  = "missed"


@dataclass(frozen=True)
class PersistedSlot:
    dose: Any
    medication: Any
    date: Any
    time: str
    status: str

    kind = "persisted"

    @property
    def medication_id(self):
        return self.medication.id

    @property
    def dose_id(self):
        return self.dose.id


@dataclass(frozen=True)
class VirtualSlot:
    medication: Any
    date: Any
    time: str
    status: str

    kind = "virtual"

    @property
    def medication_id(self):
        return self.medication.id

    dose_id = None


DoseSlot = Union[PersistedSlot, VirtualSlot]


def slot_to_dict(slot):
    return {
        "kind": slot.kind,
        "dose_id": slot.dose_id,
        "medication_id": slot.medication_id,
        "medication": slot.medication.name,
        "color": slot.medication.color,
        "date": slot.date.isoformat(),
        "time": slot.time,
        "status": slot.status,
    }


def is_active_on(medication, day, doses=()):
    return activity_test(medication)(medication, to_date(day), doses)


def slot_times(medication, day, doses=()):
    return slot_times_strategy(medication)(medication, to_date(day), doses)


def find_dose(doses, medication_id, scheduled_time, day):
    day = to_date(day)
    for dose in doses:
        if (
            dose.medication_id == medication_id
            and dose.scheduled_time == scheduled_time
            and to_date(dose.date) == day
        ):
            return dose
    return None


def slot_status(dose, day, time, now):
    """
    Estado de un horario.

    Un registro 'taken' o 'missed' manda. Sin registro (o con 'pending') el
    horario queda pendiente hasta que pasa su hora; después es 'missed'
    sin necesidad de guardarlo.
    """
    if dose is not None and dose.status == TAKEN:
        return TAKEN
    if dose is not None and dose.status == MISSED:
        return MISSED

    if is_future(day, now):
        return PENDING
    if is_past(day, now):
        return MISSED
    return MISSED if time < time_str(now) else PENDING


def slots_for_date(medications, doses, day, now, include_prn=True):
    """Todos los horarios del día, ordenados por hora."""
    day = to_date(day)
    slots = []

    for med in medications:
        if not include_prn and is_prn(med):
            continue
        if not is_active_on(med, day, doses):
            continue

        for time in slot_times(med, day, doses):
            dose = find_dose(doses, med.id, time, day)
            status = slot_status(dose, day, time, now)
            if dose is not None:
                slots.append(PersistedSlot(dose, med, day, time, status))
            else:
                slots.append(VirtualSlot(med, day, time, status))

    return sorted(slots, key=lambda s: s.time)


def schedule_for_range(medications, doses, start, end, now):
    """Agenda día por día entre start y end (ambos inclusive)."""
    start, end = to_date(start), to_date(end)
    schedule = {}
    day = start
    while day <= end:
        schedule[day] = slots_for_date(medications, doses, day, now)
        day += timedelta(days=1)
    return schedule


@dataclass(frozen=True)
class DaySummary:
    taken: int
    pending: int
    missed: int

    @property
    def total(self):
        return self.taken + self.pending + self.missed

    @property
    def completion(self):
        if not self.total:
            return 0
        return round(self.taken / self.total * 100)

    def to_dict(self):
        return {
            "taken": self.taken,
            "pending": self.pending,
            "missed": self.missed,
            "total": self.total,
            "completion": self.completion,
        }


def summarize(slots):
    counts = {TAKEN: 0, PENDING: 0, MISSED: 0}
    for slot in slots:
        counts[slot.status] += 1
    return DaySummary(taken=counts[TAKEN], pending=counts[PENDING], missed=counts[MISSED])
