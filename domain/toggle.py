"""
Transición de una toma al tocarla: taken <-> pending, con el stock
acompañando el cambio.

Acá sólo se decide qué hay que hacer. Aplicarlo (un único commit para la
toma y el stock) es trabajo de services.doses.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from domain.categories import is_prn
from domain.dates import to_date
from domain.schedule import PENDING, TAKEN
from domain.stock import updated_stock


class ToggleAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NOOP   = "noop"


@dataclass(frozen=True)
class TogglePlan:
    action: ToggleAction
    dose: Any = None
    medication_id: Optional[int] = None
    date: Any = None
    scheduled_time: Optional[str] = None
    new_status: Optional[str] = None
    stock_before: Optional[int] = None
    stock_after: Optional[int] = None

    @property
    def changes_stock(self):
        return self.stock_before is not None and self.stock_before != self.stock_after


NOOP = TogglePlan(ToggleAction.NOOP)


def _stock_change(medication, new_status):
    if medication is None:
        return None, None
    return medication.current_stock, updated_stock(medication.current_stock, new_status)


def plan_toggle(medication, dose=None, medication_id=None, scheduled_time=None,
                target_date=None, today=None):
    """
    Planifica el toque de una toma.

    - Con registro: taken pasa a pending (devuelve 1 al stock) y cualquier
      otro estado pasa a taken (descuenta 1, nunca por debajo de 0). En PRN,
      desmarcar borra el registro.
    - Sin registro: hace falta medication_id y horario; se crea como taken
      en target_date (o hoy).
    - Sin registro ni datos suficientes: no hace nada.

    No controla si hay stock: eso lo decide quien llama.
    """
    if dose is not None:
        new_status = PENDING if dose.status == TAKEN else TAKEN
        before, after = _stock_change(medication, new_status)
        action = ToggleAction.UPDATE
        if new_status == PENDING and medication is not None and is_prn(medication):
            action = ToggleAction.DELETE
        return TogglePlan(
            action=action,
            dose=dose,
            medication_id=dose.medication_id,
            date=to_date(dose.date),
            scheduled_time=dose.scheduled_time,
            new_status=new_status,
            stock_before=before,
            stock_after=after,
        )

    if medication_id and scheduled_time:
        before, after = _stock_change(medication, TAKEN)
        return TogglePlan(
            action=ToggleAction.CREATE,
            medication_id=medication_id,
            date=to_date(target_date) or to_date(today),
            scheduled_time=scheduled_time,
            new_status=TAKEN,
            stock_before=before,
            stock_after=after,
        )

    return NOOP
