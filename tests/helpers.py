from datetime import date

from models import DoseEvent, Medication


def make_med(**overrides):
    values = dict(
        id=1,
        name="Losartana",
        usage_category="continuous",
        doses_per_day="1x",
        interval_days=1,
        times=["08:00"],
        start_date=date(2024, 1, 1),
        end_date=None,
        total_stock=30,
        current_stock=30,
        expiry_date=None,
        color="bg-blue-500",
    )
    values.update(overrides)
    return Medication(**values)


def make_dose(medication_id=1, day=date(2024, 1, 1), time="08:00", status="taken", id=None):
    return DoseEvent(id=id, medication_id=medication_id, date=day, scheduled_time=time, status=status)
