# app/models/job_application.py

from datetime import datetime
from app.extensions import db


class JobApplication(db.Model):
    __tablename__ = "form_postulaciones"

    id = db.Column(db.Integer, primary_key=True)

    nombre = db.Column(db.String(100), nullable=False)
    apellido = db.Column(db.String(100), nullable=False)
    edad = db.Column(db.Integer)
    telefono = db.Column(db.String(40))
    email = db.Column(db.String(255), nullable=False)
    provincia = db.Column(db.String(100))
    localidad = db.Column(db.String(100))

    dni = db.Column(db.String(20), nullable=False, index=True)
    direccion = db.Column(db.String(255))

    # nombre original del CV (el archivo en si se envia por mail y se borra)
    cv_filename = db.Column(db.String(255))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
