import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace

logger = logging.getLogger("medmanager.settings")


@dataclass(frozen=True)
class AppSettings:
    threshold_expiring: int = 3
    threshold_running_out: int = 3
    show_delay_disclaimer: bool = True


DEFAULT_SETTINGS = AppSettings()


class SettingsStore:
    """
    Preferencias de toda la app, guardadas en un JSON.

    Se carga una vez al arrancar (create_app) y se guarda en cada cambio.
    Las rutas lo obtienen desde current_app.extensions["settings_store"].
    """

    def __init__(self, path):
        self.path = path
        self.settings = DEFAULT_SETTINGS

    def load(self):
        if not os.path.exists(self.path):
            self.settings = DEFAULT_SETTINGS
            return self.settings

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            self.settings = replace(DEFAULT_SETTINGS, **self._clean(raw, strict=False))
        except (OSError, json.JSONDecodeError, ValueError) as exc:
            logger.error("No se pudieron cargar las preferencias de %s: %s", self.path, exc)
            self.settings = DEFAULT_SETTINGS
        return self.settings

    def save(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(asdict(self.settings), f, indent=2)

    def update(self, changes):
        self.settings = replace(self.settings, **self._clean(changes, strict=True))
        self.save()
        logger.info("Preferencias actualizadas: %s", asdict(self.settings))
        return self.settings

    def reset(self):
        self.settings = DEFAULT_SETTINGS
        self.save()
        return self.settings

    @staticmethod
    def _clean(raw, strict):
        if not isinstance(raw, dict):
            raise ValueError("Las preferencias deben ser un objeto JSON.")

        known = {f.name for f in fields(AppSettings)}
        unknown = set(raw) - known
        if unknown and strict:
            raise ValueError(f"Preferencias desconocidas: {', '.join(sorted(unknown))}")

        clean = {}
        for key in ("threshold_expiring", "threshold_running_out"):
            if key in raw:
                value = raw[key]
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ValueError(f"'{key}' debe ser un entero mayor o igual a 0.")
                clean[key] = value

        if "show_delay_disclaimer" in raw:
            value = raw["show_delay_disclaimer"]
            if not isinstance(value, bool):
                raise ValueError("'show_delay_disclaimer' debe ser true o false.")
            clean["show_delay_disclaimer"] = value

        return clean
