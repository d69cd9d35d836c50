import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db

error_logger = logging.getLogger("medmanager.errors")


class NotFoundError(LookupError):
    pass


class PersistenceError(RuntimeError):
    """La base rechazó una escritura; la sesión ya fue revertida."""


class DoseGuardError(Exception):
    """Se intentó marcar como tomada una toma que no debería descontarse."""

    RECOVERY_HINTS = {
        "sin_stock": "Editá la medicación para cargar más stock antes de registrar la toma.",
        "vencido": "El medicamento está vencido. Revisá la fecha de validez antes de registrar la toma.",
    }

    def __init__(self, reason, medication_id):
        super().__init__(reason)
        self.reason = reason
        self.medication_id = medication_id

    @property
    def recovery(self):
        return self.RECOVERY_HINTS.get(self.reason)


def commit_or_raise(what):
    """Commit de la sesión actual; si falla, rollback y PersistenceError."""
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        error_logger.exception("Error al guardar %s: %s", what, exc)
        raise PersistenceError(f"No se pudo guardar {what}.") from exc
