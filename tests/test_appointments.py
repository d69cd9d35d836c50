from datetime import date, datetime, timedelta

from models import Appointment
from services.appointments import select_upcoming


def consulta(day, time, type="Consulta"):
    return Appointment(type=type, date=day, time=time)


def test_select_upcoming_ordena_y_limita():
    now = datetime(2024, 5, 10, 12, 0)
    apps = [
        consulta(date(2024, 5, 20), "09:00"),
        consulta(date(2024, 5, 10), "11:00"),   # ya pasó
        consulta(date(2024, 5, 10), "15:00"),
        consulta(date(2024, 5, 12), "08:00", type="Exame"),
        consulta(date(2024, 6, 1), "10:00"),
    ]

    upcoming = select_upcoming(apps, now, 3)

    assert [(a.date.day, a.time) for a in upcoming] == [(10, "15:00"), (12, "08:00"), (20, "09:00")]


def test_select_upcoming_vacio():
    assert select_upcoming([], datetime(2024, 5, 10), 3) == []


def crear(client, **overrides):
    data = {
        "type": "Consulta",
        "doctor": "Dra. Silva",
        "specialty": "Cardiología",
        "date": (date.today() + timedelta(days=5)).isoformat(),
        "time": "10:30",
    }
    data.update(overrides)
    return client.post("/appointments/crear", json=data)


def test_appointments_requiere_sesion(client):

    assert client.get("/appointments/").status_code == 401
    assert client.get("/appointments/proximas").status_code == 401


def test_crear_y_listar(logged_client):

    response = crear(logged_client)

    assert response.status_code == 201
    assert response.get_json()["doctor"] == "Dra. Silva"

    consultas = logged_client.get("/appointments/").get_json()["consultas"]
    assert len(consultas) == 1
    assert consultas[0]["time"] == "10:30"


def test_crear_invalida(logged_client):

    assert crear(logged_client, type="Cirugía").status_code == 400
    assert crear(logged_client, date="").status_code == 400
    assert crear(logged_client, time="25:00").status_code == 400


def test_proximas_respeta_limite(logged_client):

    hoy = date.today()
    crear(logged_client, date=(hoy - timedelta(days=1)).isoformat())
    for dias in (9, 3, 6, 1):
        crear(logged_client, date=(hoy + timedelta(days=dias)).isoformat())

    consultas = logged_client.get("/appointments/proximas").get_json()["consultas"]

    esperadas = [(hoy + timedelta(days=d)).isoformat() for d in (1, 3, 6)]
    assert [c["date"] for c in consultas] == esperadas


def test_editar_parcial(logged_client):

    app_id = crear(logged_client).get_json()["id"]

    response = logged_client.put(f"/appointments/{app_id}", json={"type": "Exame", "location": "Lab Centro"})

    body = response.get_json()
    assert response.status_code == 200
    assert body["type"] == "Exame"
    assert body["location"] == "Lab Centro"
    assert body["doctor"] == "Dra. Silva"


def test_borrar(logged_client):

    app_id = crear(logged_client).get_json()["id"]

    response = logged_client.post(f"/appointments/borrar/{app_id}")

    assert response.status_code == 200
    assert logged_client.get("/appointments/").get_json()["consultas"] == []
    assert logged_client.post(f"/appointments/borrar/{app_id}").status_code == 404
