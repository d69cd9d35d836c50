from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from enum import Enum
from werkzeug.security import generate_password_hash, check_password_hash

db = SQLAlchemy()


class AppointmentTypeEnum(Enum):
    CONSULTA = "Consulta"
    EXAME    = "Exame"


def _iso(value):
    return value.isoformat() if value else None


class Usuario(db.Model):
    id = db.Column(db.Integer, primary_key=True)

    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    nombre = db.Column(db.String(200))

    fecha_creacion_usuario = db.Column(db.DateTime, default=datetime.utcnow)

    # Métodos para manejar contraseñas
    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)


class Medication(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    usuario_id = db.Column(db.Integer, db.ForeignKey('usuario.id'), nullable=False, index=True)

    name = db.Column(db.String(200), nullable=False)
    dosage = db.Column(db.String(50))
    unit = db.Column(db.String(16), default="comprimido")

    # Agenda
    usage_category = db.Column(db.String(16), nullable=False, default="continuous")
    doses_per_day = db.Column(db.String(8), default="1x")        # '1x'..'5x' o 'custom'
    interval_days = db.Column(db.Integer, nullable=False, default=1)
    interval_type = db.Column(db.String(16))                      # weekly, monthly, ..., custom
    contraceptive_type = db.Column(db.String(16))                 # daily, 21_7, 24_4, 28_continuous
    times = db.Column(db.JSON, nullable=False, default=list)      # ["08:00", "20:00"]
    start_date = db.Column(db.Date)
    end_date = db.Column(db.Date)
    duration_days = db.Column(db.Integer)
    max_doses_per_day = db.Column(db.Integer)

    # Stock y validez
    total_stock = db.Column(db.Integer, nullable=False, default=0)
    current_stock = db.Column(db.Integer, nullable=False, default=0)
    expiry_date = db.Column(db.Date)

    notes = db.Column(db.String(500))
    color = db.Column(db.String(32))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "dosage": self.dosage,
            "unit": self.unit,
            "usage_category": self.usage_category,
            "doses_per_day": self.doses_per_day,
            "interval_days": self.interval_days,
            "interval_type": self.interval_type,
            "contraceptive_type": self.contraceptive_type,
            "times": list(self.times or []),
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "duration_days": self.duration_days,
            "max_doses_per_day": self.max_doses_per_day,
            "total_stock": self.total_stock,
            "current_stock": self.current_stock,
            "expiry_date": _iso(self.expiry_date),
            "notes": self.notes,
            "color": self.color,
        }


class DoseEvent(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    usuario_id = db.Column(db.Integer, db.ForeignKey('usuario.id'), nullable=False, index=True)
    medication_id = db.Column(db.Integer, db.ForeignKey('medication.id'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    scheduled_time = db.Column(db.String(5), nullable=False)
    status = db.Column(db.String(10), nullable=False)  # pending/taken/missed

    def to_dict(self):
        return {
            "id": self.id,
            "medication_id": self.medication_id,
            "date": _iso(self.date),
            "scheduled_time": self.scheduled_time,
            "status": self.status,
        }


class Appointment(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    usuario_id = db.Column(db.Integer, db.ForeignKey('usuario.id'), nullable=False, index=True)
    type = db.Column(db.String(16), nullable=False)    # Consulta / Exame
    doctor = db.Column(db.String(200))
    specialty = db.Column(db.String(120))
    location = db.Column(db.String(255))
    notes = db.Column(db.String(500))
    date = db.Column(db.Date, nullable=False, index=True)
    time = db.Column(db.String(5), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "doctor": self.doctor,
            "specialty": self.specialty,
            "location": self.location,
            "notes": self.notes,
            "date": _iso(self.date),
            "time": self.time,
        }
