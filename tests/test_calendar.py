from datetime import date, datetime

from domain.calendar import DisplayMode, Indicator, calendar_display_mode, day_indicator
from helpers import make_dose, make_med

TODAY = date(2024, 1, 1)
NOW = datetime(2024, 1, 1, 9, 0)


def test_futuro_siempre_status():
    future = date(2024, 1, 2)
    assert calendar_display_mode(future, TODAY, has_activity=True, is_prn=True) is DisplayMode.STATUS
    assert calendar_display_mode(future, TODAY, has_activity=False, is_prn=False) is DisplayMode.STATUS


def test_hoy_sin_actividad_status():
    assert calendar_display_mode(TODAY, TODAY, has_activity=False, is_prn=False) is DisplayMode.STATUS


def test_hoy_con_actividad_o_prn_consumo():
    assert calendar_display_mode(TODAY, TODAY, has_activity=True, is_prn=False) is DisplayMode.CONSUMPTION
    assert calendar_display_mode(TODAY, TODAY, has_activity=False, is_prn=True) is DisplayMode.CONSUMPTION


def test_pasado_consumo():
    past = date(2023, 12, 31)
    assert calendar_display_mode(past, TODAY, has_activity=False, is_prn=False) is DisplayMode.CONSUMPTION


def test_indicador_futuro_vencido():
    med = make_med(expiry_date=date(2024, 1, 3))

    result = day_indicator(med, date(2024, 1, 5), TODAY, NOW, [])

    assert result.mode is DisplayMode.STATUS
    assert result.indicator is Indicator.EXPIRED
    assert result.label == "Vencido"


def test_indicador_futuro_sin_stock_proyectado():
    med = make_med(current_stock=2)

    assert day_indicator(med, date(2024, 1, 5), TODAY, NOW, []).indicator is Indicator.OUT_OF_STOCK
    assert day_indicator(med, date(2024, 1, 2), TODAY, NOW, []).indicator is Indicator.AVAILABLE


def test_indicador_pasado():
    med = make_med(start_date=date(2023, 12, 1))
    past = date(2023, 12, 31)

    taken = [make_dose(day=past, status="taken")]
    missed = [make_dose(day=past, status="missed")]

    assert day_indicator(med, past, TODAY, NOW, taken).indicator is Indicator.TAKEN
    assert day_indicator(med, past, TODAY, NOW, missed).indicator is Indicator.MISSED
    assert day_indicator(med, past, TODAY, NOW, []).indicator is Indicator.NOT_TAKEN


def test_indicador_hoy_sin_registros_muestra_disponibilidad():
    med = make_med(times=["10:00"])

    result = day_indicator(med, TODAY, TODAY, NOW, [])

    assert result.to_dict() == {"mode": "STATUS", "indicator": "AVAILABLE", "label": "Disponível"}


def test_indicador_prn():
    med = make_med(usage_category="prn", times=[])
    doses = [make_dose(day=TODAY, time="08:30")]

    result = day_indicator(med, TODAY, TODAY, NOW, doses)

    assert result.mode is DisplayMode.CONSUMPTION
    assert result.indicator is Indicator.PRN_DOSE


def test_indicador_hoy_con_registro_pendiente_vuelve_a_disponibilidad():
    med = make_med(times=["20:00"], current_stock=0)
    doses = [make_dose(day=TODAY, time="20:00", status="pending")]

    result = day_indicator(med, TODAY, TODAY, NOW, doses)

    assert result.mode is DisplayMode.STATUS
    assert result.indicator is Indicator.OUT_OF_STOCK
    assert result.label == "Acabado"
