import logging
from datetime import date

from domain.rules import is_expired
from domain.schedule import MISSED, PENDING, TAKEN
from domain.toggle import ToggleAction, plan_toggle
from models import db, DoseEvent, Medication
from services.errors import DoseGuardError, NotFoundError, commit_or_raise

logger = logging.getLogger("medmanager.doses")


def list_doses(user_id, day=None, medication_id=None):
    query = DoseEvent.query.filter_by(usuario_id=user_id)
    if day is not None:
        query = query.filter(DoseEvent.date == day)
    if medication_id is not None:
        query = query.filter(DoseEvent.medication_id == medication_id)
    return query.order_by(DoseEvent.date.desc(), DoseEvent.scheduled_time.desc()).all()


def list_doses_between(user_id, start, end):
    return (
        DoseEvent.query
        .filter(
            DoseEvent.usuario_id == user_id,
            DoseEvent.date >= start,
            DoseEvent.date <= end,
        )
        .all()
    )


def _find_existing(user_id, dose_id, medication_id, scheduled_time, day):
    """Primero por id; si no, el registro real equivalente al horario."""
    if dose_id:
        dose = DoseEvent.query.filter_by(id=dose_id, usuario_id=user_id).first()
        if dose:
            return dose

    if medication_id and scheduled_time:
        return DoseEvent.query.filter_by(
            usuario_id=user_id,
            medication_id=medication_id,
            scheduled_time=scheduled_time,
            date=day,
        ).first()
    return None


def check_guard(plan, medication, today, force=False):
    """
    Sólo se controla al pasar a 'taken'. Sin stock o vencido se rechaza
    salvo que el usuario lo confirme (force).
    """
    if force or medication is None or plan.new_status != TAKEN:
        return
    if medication.current_stock <= 0:
        raise DoseGuardError("sin_stock", medication.id)
    if is_expired(medication.expiry_date, today):
        raise DoseGuardError("vencido", medication.id)


def toggle_dose(user_id, dose_id=None, medication_id=None, scheduled_time=None,
                target_date=None, force=False, today=None):
    """
    Marca o desmarca una toma.

    El registro de la toma y el stock de la medicación se escriben en un
    único commit: si la base falla no queda ninguno de los dos cambios.
    Devuelve (plan, dose, medication); dose es None si se borró o no hubo
    nada que hacer.
    """
    today = today or date.today()
    day = target_date or today

    dose = _find_existing(user_id, dose_id, medication_id, scheduled_time, day)

    med_id = dose.medication_id if dose is not None else medication_id
    medication = None
    if med_id:
        medication = Medication.query.filter_by(id=med_id, usuario_id=user_id).first()
        if medication is None and dose is None:
            raise NotFoundError("La medicación no existe o no te pertenece.")

    plan = plan_toggle(
        medication,
        dose=dose,
        medication_id=medication_id,
        scheduled_time=scheduled_time,
        target_date=target_date,
        today=today,
    )
    if plan.action is ToggleAction.NOOP:
        return plan, None, medication

    check_guard(plan, medication, today, force=force)

    if plan.action is ToggleAction.CREATE:
        dose = DoseEvent(
            usuario_id=user_id,
            medication_id=plan.medication_id,
            date=plan.date,
            scheduled_time=plan.scheduled_time,
            status=plan.new_status,
        )
        db.session.add(dose)
    elif plan.action is ToggleAction.UPDATE:
        dose.status = plan.new_status
    elif plan.action is ToggleAction.DELETE:
        db.session.delete(dose)
        dose = None

    if plan.changes_stock:
        medication.current_stock = plan.stock_after

    commit_or_raise("la toma")

    logger.info(
        "Toma %s de medicación %s (%s %s): %s, stock %s -> %s",
        plan.action.value, plan.medication_id, plan.date, plan.scheduled_time,
        plan.new_status, plan.stock_before, plan.stock_after,
    )
    return plan, dose, medication


# ---------------------------- HISTORIAL / RESUMEN ----------------------------

def history(user_id):
    """Todas las medicaciones del usuario con sus tomas registradas."""
    meds = (
        Medication.query
        .filter_by(usuario_id=user_id)
        .order_by(Medication.name.asc())
        .all()
    )
    return [{"med": med, "doses": list_doses(user_id, medication_id=med.id)} for med in meds]


def status_counts(user_id):
    taken = pending = missed = 0

    for dose in DoseEvent.query.filter_by(usuario_id=user_id).all():
        if dose.status == TAKEN:
            taken += 1
        elif dose.status == MISSED:
            missed += 1
        elif dose.status == PENDING:
            pending += 1

    return {"taken": taken, "pending": pending, "missed": missed}
