import logging
import os

from flask import Flask, request, session

from config import Config
from models import db, Usuario
from routes import appointments_bp, calendar_bp, doses_bp, meds_bp, settings_bp
from services.errors import NotFoundError, PersistenceError, commit_or_raise, error_logger
from services.settings_store import SettingsStore


def configure_logging(app):
    logging.getLogger("medmanager").setLevel(app.config["LOG_LEVEL"])

    if error_logger.handlers:
        return

    log_dir = app.config.get("LOG_DIR")
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(os.path.join(log_dir, "errors.log"), encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    error_logger.setLevel(logging.ERROR)
    error_logger.addHandler(handler)
    error_logger.propagate = False


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    configure_logging(app)

    os.makedirs(os.path.join(os.path.dirname(os.path.abspath(__file__)), "instance"), exist_ok=True)
    db.init_app(app)
    with app.app_context():
        db.create_all()

    # Preferencias: se cargan una vez acá y se guardan en cada cambio
    settings_store = SettingsStore(app.config["SETTINGS_PATH"])
    settings_store.load()
    app.extensions["settings_store"] = settings_store

    # BLUEPRINTS
    app.register_blueprint(meds_bp)
    app.register_blueprint(doses_bp)
    app.register_blueprint(calendar_bp)
    app.register_blueprint(appointments_bp)
    app.register_blueprint(settings_bp)

    # ---------------------------- ERRORES ----------------------------
    @app.errorhandler(NotFoundError)
    def not_found(e):
        return {"error": str(e)}, 404

    @app.errorhandler(PersistenceError)
    def persistence_failed(e):
        # El detalle ya quedó en el log de errores
        return {"error": "No se pudieron guardar los cambios. Intentá de nuevo."}, 503

    # ---------------------------- ROOT ----------------------------
    @app.get("/")
    def root():
        return {"status": "ok", "service": "MedManager", "logged_in": "user_id" in session}

    # ---------------------------- REGISTER ----------------------------
    @app.post("/register")
    def register():
        data = request.get_json(silent=True) or request.form
        nombre = data.get("nombre")
        email = (data.get("email") or "").lower().strip()
        password = data.get("password")

        if not email or not password:
            return {"error": "Email y contraseña son obligatorios."}, 400

        if Usuario.query.filter_by(email=email).first():
            return {"error": "Ese email ya está registrado."}, 409

        nuevo = Usuario(nombre=nombre, email=email)
        nuevo.set_password(password)

        db.session.add(nuevo)
        commit_or_raise("el usuario")

        return {"message": "Registro exitoso. Ahora iniciá sesión.", "id": nuevo.id}, 201

    # ---------------------------- LOGIN ----------------------------
    @app.post("/login")
    def login():
        data = request.get_json(silent=True) or request.form
        email = (data.get("email") or "").lower().strip()
        password = data.get("password") or ""

        usuario = Usuario.query.filter_by(email=email).first()

        if usuario and usuario.check_password(password):
            session["user_id"] = usuario.id
            return {"message": "ok", "id": usuario.id, "nombre": usuario.nombre}

        return {"error": "Email o contraseña incorrectos."}, 401

    # ---------------------------- LOGOUT ----------------------------
    @app.get("/logout")
    def logout():
        session.clear()
        return {"message": "ok"}

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
