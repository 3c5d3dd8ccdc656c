# app/blueprints/web/routes.py

from flask import Blueprint, current_app, jsonify

from app.blueprints.web.forms import ContactForm, JobApplicationForm
from app.services.errors import InvalidUpload
from app.services.repository import KIND_CONTACTO, KIND_POSTULACION
from app.utils.logging import get_logger

logger = get_logger("web")

web_bp = Blueprint("web", __name__)

MSG_FORM_INVALIDO = "Formulario inválido. Verifique los campos enviados."
MSG_RATE_LIMIT = "Limite de peticiones por servidor, intentanlo en 10 minutos"


def _coordinator():
    return current_app.extensions["submissions"]


def _store():
    return current_app.extensions["attachment_store"]


def _respond(outcome):
    return outcome.message, outcome.status_code, {"Content-Type": "text/plain; charset=utf-8"}


def _invalid(form):
    logger.info(f"Invalid form fields={sorted(form.errors)}")
    return MSG_FORM_INVALIDO, 400, {"Content-Type": "text/plain; charset=utf-8"}


@web_bp.route("/", methods=["POST"])
def contacto():
    form = ContactForm()
    if not form.validate_on_submit():
        return _invalid(form)

    return _respond(_coordinator().handle(KIND_CONTACTO, form.fields_data()))


@web_bp.route("/postulaciones", methods=["POST"])
def postulacion():
    form = JobApplicationForm()
    if not form.validate_on_submit():
        return _invalid(form)

    attachment = None
    upload = form.cv.data
    if upload:
        # 1) materializar el CV en el directorio de temporales
        store = _store()
        try:
            stored_path = store.save(upload)
        except OSError:
            logger.exception("Could not store upload")
            return InvalidUpload.message, InvalidUpload.http_status

        # 2) envolverlo; si no sirve lo borramos aca mismo
        try:
            attachment = store.open(stored_path, original_name=upload.filename)
        except InvalidUpload as e:
            logger.info(f"Invalid upload: {e}")
            store.discard(stored_path)
            return e.message, e.http_status

    return _respond(_coordinator().handle(KIND_POSTULACION, form.fields_data(), attachment))


@web_bp.app_errorhandler(429)
def rate_limited(e):
    return jsonify({"error": MSG_RATE_LIMIT}), 429


@web_bp.app_errorhandler(413)
def too_large(e):
    return "El archivo adjunto supera el tamaño máximo permitido.", 413
