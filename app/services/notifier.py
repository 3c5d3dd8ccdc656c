# app/services/notifier.py

import mimetypes
import smtplib
from dataclasses import dataclass
from typing import List

from flask_mail import Message

from app.services.errors import NotificationFailure
from app.services.repository import SubmissionRecord
from app.services.storage import Attachment
from app.utils.logging import get_logger

logger = get_logger("notifier")

# Etiquetas del cuerpo del mail, en el orden de las columnas
FIELD_LABELS = {
    "nombre": "Nombre",
    "apellido": "Apellido",
    "edad": "Edad",
    "telefono": "Telefono",
    "email": "Email",
    "provincia": "Provincia",
    "localidad": "Localidad",
    "dni": "DNI",
    "direccion": "Direccion",
}


@dataclass(frozen=True)
class Notification:
    sender: str
    recipients: List[str]
    subject: str
    body: str
    attachment: Attachment


class MailNotifier:
    """
    Arma y envia el mail de una postulacion con el CV adjunto.
    Un solo intento; cualquier error de transporte sale como NotificationFailure.
    """

    def __init__(self, mail, sender: str, recipient: str):
        self.mail = mail
        self.sender = sender
        self.recipient = recipient

    def build(self, record: SubmissionRecord, attachment: Attachment) -> Notification:
        data = record.as_dict()

        lines = [
            f"{FIELD_LABELS.get(name, name)}: {'' if value is None else value}"
            for name, value in data.items()
        ]
        lines.append(f"CV: {attachment.original_name}")

        return Notification(
            sender=self.sender,
            recipients=[self.recipient],
            subject=f"Nueva postulación: {data.get('nombre') or ''} {data.get('apellido') or ''}".strip(),
            body="\n".join(lines),
            attachment=attachment,
        )

    def send(self, notification: Notification) -> None:
        att = notification.attachment
        content_type = mimetypes.guess_type(att.original_name)[0] or "application/octet-stream"

        try:
            with open(att.path, "rb") as f:
                data = f.read()

            msg = Message(
                subject=notification.subject,
                sender=notification.sender,
                recipients=notification.recipients,
                body=notification.body,
            )
            msg.attach(att.original_name, content_type, data)
            self.mail.send(msg)

        except (smtplib.SMTPException, OSError) as e:
            # OSError cubre errores de socket/conexion y de lectura del CV
            logger.exception(f"Mail send failed to={notification.recipients}")
            raise NotificationFailure(str(e)) from e

        logger.info(f"Mail sent to={notification.recipients} subject={notification.subject!r}")
