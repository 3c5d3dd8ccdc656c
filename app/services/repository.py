# app/services/repository.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from sqlalchemy.exc import SQLAlchemyError, TimeoutError as PoolTimeoutError

from app.models import ContactSubmission, JobApplication
from app.services.errors import PersistenceFailure, PoolExhausted
from app.utils.logging import get_logger

logger = get_logger("repository")

KIND_CONTACTO = "contacto"
KIND_POSTULACION = "postulacion"

# Orden fijo de columnas por tipo de formulario
CONTACT_FIELDS: Tuple[str, ...] = (
    "nombre", "apellido", "edad", "telefono", "email", "provincia", "localidad",
)
JOB_FIELDS: Tuple[str, ...] = CONTACT_FIELDS + ("dni", "direccion")

FIELDS_BY_KIND = {
    KIND_CONTACTO: CONTACT_FIELDS,
    KIND_POSTULACION: JOB_FIELDS,
}


@dataclass(frozen=True)
class SubmissionRecord:
    kind: str
    values: Tuple[Any, ...]
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_form(cls, kind: str, form_data: Dict[str, Any], **extra) -> "SubmissionRecord":
        if kind not in FIELDS_BY_KIND:
            raise ValueError(f"Tipo de formulario desconocido: {kind}")
        values = tuple(
            _COERCE.get(name, _clean)(form_data.get(name)) for name in FIELDS_BY_KIND[kind]
        )
        return cls(kind=kind, values=values, extra=dict(extra))

    @property
    def fields(self) -> Tuple[str, ...]:
        return FIELDS_BY_KIND[self.kind]

    def as_dict(self) -> Dict[str, Any]:
        return dict(zip(self.fields, self.values))


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _to_int(value: Any) -> Any:
    value = _clean(value)
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


_COERCE = {"edad": _to_int}


class SubmissionGateway:
    """
    Un insert por tipo de formulario.
    Cada insert toma una conexion del pool y la devuelve al cerrar la sesion,
    salga bien o mal.
    """

    def __init__(self, db):
        self.db = db

    def insert(self, record: SubmissionRecord) -> int:
        if record.kind == KIND_POSTULACION:
            return self.insert_job_application(record)
        return self.insert_contact(record)

    def insert_contact(self, record: SubmissionRecord) -> int:
        return self._insert(ContactSubmission(**record.as_dict()))

    def insert_job_application(self, record: SubmissionRecord) -> int:
        return self._insert(JobApplication(
            **record.as_dict(),
            cv_filename=record.extra.get("cv_filename"),
        ))

    def _insert(self, row) -> int:
        session = self.db.session
        try:
            session.add(row)
            session.commit()
            record_id = row.id
        except PoolTimeoutError as e:
            session.rollback()
            logger.error(f"Pool exhausted inserting into {row.__tablename__}: {e}")
            raise PoolExhausted(str(e)) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception(f"Insert failed table={row.__tablename__}")
            raise PersistenceFailure(str(e)) from e
        finally:
            # devuelve la conexion al pool
            session.close()

        logger.info(f"Inserted {row.__tablename__} id={record_id}")
        return record_id
