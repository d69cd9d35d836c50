import json

import pytest

from services.settings_store import DEFAULT_SETTINGS, SettingsStore


def test_sin_archivo_usa_valores_por_defecto(tmp_path):
    store = SettingsStore(str(tmp_path / "settings.json"))

    assert store.load() == DEFAULT_SETTINGS


def test_update_guarda_en_disco(tmp_path):
    path = tmp_path / "settings.json"
    store = SettingsStore(str(path))
    store.load()

    store.update({"threshold_running_out": 7})

    assert json.loads(path.read_text(encoding="utf-8"))["threshold_running_out"] == 7
    assert SettingsStore(str(path)).load().threshold_running_out == 7


def test_update_rechaza_valores_invalidos(tmp_path):
    store = SettingsStore(str(tmp_path / "settings.json"))

    with pytest.raises(ValueError):
        store.update({"threshold_expiring": -1})
    with pytest.raises(ValueError):
        store.update({"show_delay_disclaimer": "si"})
    with pytest.raises(ValueError):
        store.update({"tema": "oscuro"})

    assert store.settings == DEFAULT_SETTINGS


def test_archivo_corrupto_vuelve_a_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{no es json", encoding="utf-8")

    assert SettingsStore(str(path)).load() == DEFAULT_SETTINGS


def test_claves_viejas_se_ignoran_al_cargar(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"threshold_expiring": 10, "tema": "oscuro"}), encoding="utf-8")

    assert SettingsStore(str(path)).load().threshold_expiring == 10


def test_settings_requiere_sesion(client):

    assert client.get("/settings/").status_code == 401


def test_settings_rutas(logged_client):

    assert logged_client.get("/settings/").get_json() == {
        "threshold_expiring": 3,
        "threshold_running_out": 3,
        "show_delay_disclaimer": True,
    }

    response = logged_client.put("/settings/", json={"show_delay_disclaimer": False})
    assert response.get_json()["show_delay_disclaimer"] is False

    assert logged_client.put("/settings/", json={"threshold_expiring": "x"}).status_code == 400

    response = logged_client.post("/settings/reset")
    assert response.get_json()["show_delay_disclaimer"] is True


def test_umbral_cambia_las_alertas(logged_client):

    logged_client.post("/meds/crear", json={"name": "Losartana", "times": ["08:00"], "total_stock": 5})
    assert logged_client.get("/meds/alertas").get_json()["alertas"] == []

    logged_client.put("/settings/", json={"threshold_running_out": 5})

    alertas = logged_client.get("/meds/alertas").get_json()["alertas"]
    assert alertas[0]["alerts"][0]["code"] == "RUNNING_OUT"
