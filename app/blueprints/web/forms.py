# app/blueprints/web/forms.py

from flask import current_app
from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, Email, Optional, ValidationError
from flask_wtf.file import FileField


class ContactForm(FlaskForm):
    # Formulario publico, lo postea un sitio de otro origen
    class Meta:
        csrf = False

    nombre = StringField("Nombre", validators=[DataRequired()])
    apellido = StringField("Apellido", validators=[DataRequired()])
    edad = IntegerField("Edad", validators=[Optional()])
    telefono = StringField("Teléfono", validators=[Optional()])
    email = StringField("Email", validators=[DataRequired(), Email()])
    provincia = StringField("Provincia", validators=[Optional()])
    localidad = StringField("Localidad", validators=[Optional()])

    def fields_data(self) -> dict:
        return {name: field.data for name, field in self._fields.items() if name != "cv"}


class JobApplicationForm(ContactForm):
    dni = StringField("DNI", validators=[DataRequired()])
    direccion = StringField("Dirección", validators=[Optional()])

    # Sin FileRequired: la falta de CV la resuelve el coordinador (400)
    cv = FileField("CV")

    def validate_cv(self, field):
        if not field.data:
            return
        store = current_app.extensions["attachment_store"]
        if not store.allowed(field.data.filename):
            exts = ", ".join(store.allowed_extensions)
            raise ValidationError(f"Solo se permiten archivos {exts}")
