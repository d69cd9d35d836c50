from dataclasses import asdict

from . import NO_LOGIN, get_logged_user_id, get_payload, get_settings_store, settings_bp


@settings_bp.get("/")
def ver_settings():
    if not get_logged_user_id():
        return NO_LOGIN
    return asdict(get_settings_store().settings)


@settings_bp.put("/")
def editar_settings():
    if not get_logged_user_id():
        return NO_LOGIN

    try:
        settings = get_settings_store().update(get_payload())
    except ValueError as e:
        return {"error": str(e)}, 400

    return asdict(settings)


@settings_bp.post("/reset")
def reset_settings():
    if not get_logged_user_id():
        return NO_LOGIN
    return asdict(get_settings_store().reset())
