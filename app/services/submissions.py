# app/services/submissions.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.services.errors import (
    MissingAttachment,
    NotificationFailure,
    PersistenceFailure,
    SubmissionError,
)
from app.services.repository import KIND_CONTACTO, KIND_POSTULACION, SubmissionRecord
from app.services.storage import Attachment
from app.utils.logging import get_logger

logger = get_logger("submissions")

MSG_CONTACTO_OK = "Datos insertados correctamente en la base de datos de contactos."
MSG_CONTACTO_DB_ERROR = "Error al insertar datos en la base de datos de contactos."
MSG_POSTULACION_OK = "Postulación recibida correctamente."
MSG_POSTULACION_DB_ERROR = "Error al insertar datos en la base de datos de postulaciones."


@dataclass
class Outcome:
    ok: bool
    status_code: int
    message: str
    errors: List[SubmissionError] = field(default_factory=list)

    @classmethod
    def success(cls, message: str) -> "Outcome":
        return cls(ok=True, status_code=200, message=message)

    @classmethod
    def failure(cls, errors: List[SubmissionError], message: Optional[str] = None) -> "Outcome":
        # gana el ultimo error registrado
        last = errors[-1]
        return cls(ok=False, status_code=last.http_status, message=message or last.message, errors=errors)


class SubmissionCoordinator:
    """
    Orquesta un envio de formulario:

      contacto:    persistir
      postulacion: verificar CV -> persistir -> notificar -> liberar CV

    Persistir y notificar son obligaciones independientes; liberar el CV corre
    siempre (finally), falle lo que falle antes.
    Con notify_requires_persistence=True un fallo al persistir cancela el mail.
    """

    def __init__(self, gateway, notifier, store, notify_requires_persistence: bool = False):
        self.gateway = gateway
        self.notifier = notifier
        self.store = store
        self.notify_requires_persistence = notify_requires_persistence

    def handle(self, kind: str, form_data: Dict[str, Any], attachment: Optional[Attachment] = None) -> Outcome:
        if kind == KIND_POSTULACION:
            return self.handle_job_application(form_data, attachment)
        return self.handle_contact(form_data)

    def handle_contact(self, form_data: Dict[str, Any]) -> Outcome:
        record = SubmissionRecord.from_form(KIND_CONTACTO, form_data)

        try:
            self.gateway.insert(record)
        except PersistenceFailure as e:
            return Outcome.failure([e], MSG_CONTACTO_DB_ERROR)
        except SubmissionError as e:
            return Outcome.failure([e])

        return Outcome.success(MSG_CONTACTO_OK)

    def handle_job_application(self, form_data: Dict[str, Any], attachment: Optional[Attachment]) -> Outcome:
        # 1) sin CV: corta aca, sin efectos secundarios
        if attachment is None:
            logger.info("Job application rejected: missing attachment")
            return Outcome.failure([MissingAttachment()])

        errors: List[SubmissionError] = []
        messages: List[str] = []

        try:
            record = SubmissionRecord.from_form(
                KIND_POSTULACION, form_data, cv_filename=attachment.original_name
            )

            # 2) persistir
            persisted = False
            try:
                record_id = self.gateway.insert(record)
                persisted = True
                logger.info(f"Job application stored id={record_id}")
            except SubmissionError as e:
                errors.append(e)
                messages.append(
                    MSG_POSTULACION_DB_ERROR if isinstance(e, PersistenceFailure) else e.message
                )

            # 3) notificar
            if persisted or not self.notify_requires_persistence:
                try:
                    self.notifier.send(self.notifier.build(record, attachment))
                except NotificationFailure as e:
                    errors.append(e)
                    messages.append(e.message)
            else:
                logger.info("Notification skipped: record was not stored")

        finally:
            # 4) liberar siempre
            self.store.release(attachment)

        if errors:
            logger.warning(
                f"Job application finished with errors: {[type(e).__name__ for e in errors]}"
            )
            return Outcome.failure(errors, messages[-1])

        return Outcome.success(MSG_POSTULACION_OK)
