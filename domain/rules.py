from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.dates import days_between, to_date
from domain.stock import days_of_stock_left


class StockStatus(str, Enum):
    OUT_OF_STOCK = "OUT_OF_STOCK"
    RUNNING_OUT  = "RUNNING_OUT"
    AVAILABLE    = "AVAILABLE"


class ExpiryStatus(str, Enum):
    NO_DATE       = "NO_DATE"
    EXPIRED       = "EXPIRED"
    EXPIRING_SOON = "EXPIRING_SOON"
    VALID         = "VALID"


# La validez se cuenta por día calendario: un vencimiento "hoy" todavía sirve.

def days_until_expiry(expiry_date, reference_date):
    expiry = to_date(expiry_date)
    if expiry is None:
        return None
    return days_between(reference_date, expiry)


def is_expired(expiry_date, reference_date):
    days = days_until_expiry(expiry_date, reference_date)
    return days is not None and days < 0


def is_expiring_soon(expiry_date, reference_date, threshold_days):
    days = days_until_expiry(expiry_date, reference_date)
    return days is not None and 0 <= days <= threshold_days


def has_stock(current_stock):
    return current_stock > 0


def is_stock_running_out(days_left, threshold_days):
    return days_left is not None and days_left <= threshold_days


def stock_status(medication, days_left, threshold_days):
    if not has_stock(medication.current_stock):
        return StockStatus.OUT_OF_STOCK
    if is_stock_running_out(days_left, threshold_days):
        return StockStatus.RUNNING_OUT
    return StockStatus.AVAILABLE


def expiry_status(medication, reference_date, threshold_days):
    if not medication.expiry_date:
        return ExpiryStatus.NO_DATE
    if is_expired(medication.expiry_date, reference_date):
        return ExpiryStatus.EXPIRED
    if is_expiring_soon(medication.expiry_date, reference_date, threshold_days):
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.VALID


@dataclass(frozen=True)
class Alert:
    code: str
    label: str
    days: Optional[int] = None

    def to_dict(self):
        return {"code": self.code, "label": self.label, "days": self.days}


def medication_alerts(medication, reference_date, settings):
    """
    Alertas del tablero para una medicación: a lo sumo una de stock y una
    de validez, en ese orden.
    """
    alerts = []

    days_left = days_of_stock_left(medication)
    stock = stock_status(medication, days_left, settings.threshold_running_out)
    if stock is StockStatus.OUT_OF_STOCK:
        alerts.append(Alert(stock.value, "Estoque Esgotado"))
    elif stock is StockStatus.RUNNING_OUT:
        alerts.append(Alert(stock.value, f"Estoque Acabando ({days_left}d)", days_left))

    expiry = expiry_status(medication, reference_date, settings.threshold_expiring)
    if expiry is ExpiryStatus.EXPIRED:
        alerts.append(Alert(expiry.value, "Medicamento Vencido"))
    elif expiry is ExpiryStatus.EXPIRING_SOON:
        days = days_until_expiry(medication.expiry_date, reference_date)
        alerts.append(Alert(expiry.value, f"Vencendo em {days}d", days))

    return alerts
