# app/services/errors.py

"""
Errores del ciclo de vida de un envio de formulario.

Cada error lleva el status HTTP y el mensaje que ve el usuario.
"""


class SubmissionError(Exception):
    """Base de los errores de envio."""

    http_status = 500
    message = "Error procesando el formulario."

    def __init__(self, detail=None):
        self.detail = detail
        super().__init__(detail or self.message)


class MissingAttachment(SubmissionError):
    """La postulacion llego sin CV. No hubo efectos secundarios."""

    http_status = 400
    message = "Falta adjuntar el CV."


class InvalidUpload(SubmissionError):
    """El archivo subido no existe o esta vacio."""

    http_status = 400
    message = "El archivo adjunto es invalido o esta vacio."


class PoolExhausted(SubmissionError):
    """No hubo conexion libre en el pool dentro del timeout."""

    http_status = 500
    message = "Error al obtener una conexion de la base de datos."


class PersistenceFailure(SubmissionError):
    http_status = 500
    message = "Error al insertar datos en la base de datos."


class NotificationFailure(SubmissionError):
    http_status = 500
    message = "Error al enviar el correo con la postulacion."


class ReleaseFailure(SubmissionError):
    """Solo se loguea, nunca llega al usuario."""

    message = "No se pudo borrar el archivo temporal."
