from datetime import date, datetime

from domain.dates import (
    days_between,
    generate_times,
    is_future,
    is_past,
    is_today,
    midnight,
    parse_time,
    to_date,
)


def test_midnight_trunca_la_hora():
    assert midnight(datetime(2024, 3, 5, 17, 45, 12, 999)) == datetime(2024, 3, 5)
    assert midnight(date(2024, 3, 5)) == datetime(2024, 3, 5)
    assert midnight("2024-03-05") == datetime(2024, 3, 5)


def test_comparaciones_ignoran_la_hora():
    today = datetime(2024, 3, 5, 23, 59)

    assert is_today(datetime(2024, 3, 5, 0, 1), today)
    assert is_past(date(2024, 3, 4), today)
    assert is_future(date(2024, 3, 6), today)
    assert not is_past(date(2024, 3, 5), today)
    assert not is_future(date(2024, 3, 5), today)


def test_days_between_con_signo():
    assert days_between(date(2024, 1, 1), date(2024, 1, 7)) == 6
    assert days_between(date(2024, 1, 7), date(2024, 1, 1)) == -6
    assert days_between(datetime(2024, 1, 1, 23, 0), datetime(2024, 1, 2, 1, 0)) == 1


def test_to_date_y_parse_time():
    assert to_date(None) is None
    assert to_date("") is None
    assert to_date(" 2024-02-29 ") == date(2024, 2, 29)
    assert parse_time("8:05") == "08:05"


def test_generate_times_reparte_el_dia():
    assert generate_times("1x", "08:00") == ["08:00"]
    assert generate_times("2x", "08:00") == ["08:00", "20:00"]
    assert generate_times("3x", "08:00") == ["08:00", "16:00", "00:00"]
    assert generate_times("5x", "06:00") == ["06:00", "10:48", "15:36", "20:24", "01:12"]
    assert generate_times("custom", "09:30") == ["09:30"]
