from datetime import date, datetime, timedelta


def to_date(value):
    """Acepta date, datetime o 'YYYY-MM-DD' y devuelve un date (o None)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def parse_time(value):
    """Valida una hora 'HH:MM' de 24h y la devuelve normalizada con ceros."""
    parsed = datetime.strptime(value.strip(), "%H:%M")
    return parsed.strftime("%H:%M")


def time_str(moment):
    return moment.strftime("%H:%M")


def midnight(value):
    """Copia de la fecha con la hora truncada a 00:00:00.000."""
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime.combine(to_date(value), datetime.min.time())


def days_between(start, end):
    """Días enteros (con signo) entre las medianoches de start y end."""
    delta = midnight(end) - midnight(start)
    return delta // timedelta(days=1)


def is_past(day, today):
    return midnight(day) < midnight(today)


def is_future(day, today):
    return midnight(day) > midnight(today)


def is_today(day, today):
    return midnight(day) == midnight(today)


def generate_times(doses_per_day, first_time):
    """
    Horarios repartidos en el día a partir del primero: '3x' desde 08:00
    da 08:00, 16:00, 00:00. Con 'custom' (o algo no numérico) devuelve
    sólo el primero.
    """
    try:
        count = int(doses_per_day.rstrip("x"))
    except (AttributeError, ValueError):
        return [first_time]

    start = datetime.strptime(first_time, "%H:%M")
    step = timedelta(hours=24 / count)
    return [(start + step * i).strftime("%H:%M") for i in range(count)]
