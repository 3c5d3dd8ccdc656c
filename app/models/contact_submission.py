# app/models/contact_submission.py

from datetime import datetime
from app.extensions import db


class ContactSubmission(db.Model):
    __tablename__ = "form_contactos"

    id = db.Column(db.Integer, primary_key=True)

    nombre = db.Column(db.String(100), nullable=False)
    apellido = db.Column(db.String(100), nullable=False)
    edad = db.Column(db.Integer)
    telefono = db.Column(db.String(40))
    email = db.Column(db.String(255), nullable=False)
    provincia = db.Column(db.String(100))
    localidad = db.Column(db.String(100))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
