import os

basedir = os.path.abspath(os.path.dirname(__file__))

# Render/Heroku dan DATABASE_URL con "postgres://..."; SQLAlchemy 2.x pide "postgresql://".
_raw_db_url = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{os.path.join(basedir, 'instance', 'medmanager.sqlite')}",
)


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_change_me")

    SQLALCHEMY_DATABASE_URI = _raw_db_url.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Preferencias de la app (umbrales de alertas, aviso de atrasos)
    SETTINGS_PATH = os.getenv("SETTINGS_PATH", os.path.join(basedir, "instance", "settings.json"))

    # Si no hay LOG_DIR los errores van a stderr
    LOG_DIR = os.getenv("LOG_DIR", "")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    UPCOMING_APPOINTMENTS_LIMIT = int(os.getenv("UPCOMING_APPOINTMENTS_LIMIT", "3"))
