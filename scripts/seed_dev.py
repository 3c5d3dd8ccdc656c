# scripts/seed_dev.py

from app import create_app
from app.extensions import db
from app.services.repository import KIND_CONTACTO, SubmissionGateway, SubmissionRecord

app = create_app(start_sweeper=False)

with app.app_context():
    db.create_all()
    record = SubmissionRecord.from_form(KIND_CONTACTO, {
        "nombre": "Ana",
        "apellido": "Gomez",
        "edad": 30,
        "telefono": "123",
        "email": "ana@ejemplo.com",
        "provincia": "Buenos Aires",
        "localidad": "La Plata",
    })
    print("Contacto creado:", SubmissionGateway(db).insert(record))
