import math

from domain.categories import UsageCategory, consumption_rate
from domain.dates import days_between, midnight


def doses_per_day(medication):
    """Cuántas unidades se consumen por día según la categoría de uso."""
    return consumption_rate(medication)


def days_of_stock_left(medication):
    """
    Días completos que cubre el stock actual.

    None para PRN (no tiene ritmo fijo). Un día parcial no cuenta como día
    cubierto, por eso se redondea hacia abajo.
    """
    if UsageCategory.of(medication) is UsageCategory.PRN:
        return None

    rate = doses_per_day(medication)
    if rate <= 0:
        return None
    if medication.current_stock <= 0:
        return 0

    return math.floor(medication.current_stock / rate)


def project_stock_on_date(medication, target_date, today):
    """Stock estimado para target_date. Nunca proyecta hacia atrás."""
    if midnight(target_date) <= midnight(today):
        return medication.current_stock

    days_ahead = days_between(today, target_date)
    projected = medication.current_stock - days_ahead * doses_per_day(medication)
    return max(0, projected)


def is_out_of_stock_on_date(medication, target_date, today):
    return project_stock_on_date(medication, target_date, today) <= 0


def updated_stock(current_stock, new_status):
    """Stock después de marcar una toma como 'taken' (-1) o 'pending' (+1)."""
    delta = -1 if new_status == "taken" else 1
    return max(0, current_stock + delta)
