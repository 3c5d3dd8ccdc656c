# app/services/storage.py

import os
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from werkzeug.utils import secure_filename

from app.services.errors import InvalidUpload, ReleaseFailure
from app.utils.logging import get_logger

logger = get_logger("storage")


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


@dataclass(frozen=True)
class Attachment:
    """
    Handle del CV subido en una peticion.
    Lo posee el coordinador mientras dura la peticion y se libera una sola vez.
    """
    path: str
    original_name: str
    created_at: datetime
    size: int


class AttachmentStore:
    """
    Directorio de temporales: uploads/<uuid>_<nombre_seguro>
    """

    def __init__(self, upload_folder: str, allowed_extensions: Optional[List[str]] = None):
        self.upload_folder = upload_folder
        self.allowed_extensions = [e.lower().lstrip(".") for e in (allowed_extensions or [])]
        ensure_dir(upload_folder)

    def allowed(self, filename: str) -> bool:
        if not self.allowed_extensions:
            return True
        _, ext = os.path.splitext(filename or "")
        return ext.lower().lstrip(".") in self.allowed_extensions

    def save(self, file_storage) -> str:
        """
        Materializa el archivo subido (werkzeug FileStorage) en disco.
        Nombre temporal unico para que dos peticiones nunca compartan archivo.
        """
        if not file_storage:
            raise InvalidUpload("No file provided")

        original_name = file_storage.filename or "cv"
        safe_name = secure_filename(original_name) or "cv"

        stored_path = os.path.join(self.upload_folder, f"{uuid.uuid4().hex}_{safe_name}")
        try:
            file_storage.save(stored_path)
        except OSError:
            # no dejar un archivo a medio escribir en uploads
            self.discard(stored_path)
            raise

        logger.debug(f"Saved upload name={original_name} path={stored_path}")
        return stored_path

    def open(self, path: str, original_name: Optional[str] = None) -> Attachment:
        try:
            st = os.stat(path)
        except FileNotFoundError:
            raise InvalidUpload(f"Upload not found: {path}")

        if st.st_size == 0:
            raise InvalidUpload(f"Empty upload: {path}")

        return Attachment(
            path=path,
            original_name=original_name or os.path.basename(path),
            created_at=datetime.fromtimestamp(st.st_mtime),
            size=st.st_size,
        )

    def delete(self, path: str) -> bool:
        """
        Borra un archivo. False si ya no existia.
        Levanta ReleaseFailure ante cualquier otro error (ej: permisos).
        """
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug(f"Already removed path={path}")
            return False
        except OSError as e:
            raise ReleaseFailure(f"{path}: {e}") from e
        return True

    def release(self, attachment: Attachment) -> bool:
        return self.discard(attachment.path)

    def discard(self, path: str) -> bool:
        # Un solo intento, sin reintentos. Nunca propaga.
        try:
            removed = self.delete(path)
        except ReleaseFailure as e:
            logger.warning(f"Release failed: {e}")
            return False

        if removed:
            logger.info(f"Released attachment path={path}")
        return removed

    def entries(self) -> Iterator[Tuple[str, float]]:
        """
        (path, mtime) de cada archivo del directorio.
        Errores al listar se propagan (el sweeper aborta el ciclo).
        """
        with os.scandir(self.upload_folder) as it:
            for entry in it:
                try:
                    if not entry.is_file(follow_symlinks=False):
                        continue
                    mtime = entry.stat(follow_symlinks=False).st_mtime
                except FileNotFoundError:
                    # lo borro la peticion entre el listado y el stat
                    continue
                yield entry.path, mtime
