# app/services/sweeper.py

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from app.services.errors import ReleaseFailure
from app.utils.logging import get_logger

logger = get_logger("sweeper")

IDLE = "IDLE"
SCANNING = "SCANNING"
STOPPED = "STOPPED"


@dataclass
class SweepResult:
    scanned: int = 0
    deleted: int = 0
    skipped: int = 0
    errors: int = 0


class TempFileSweeper:
    """
    Borra del directorio de uploads los archivos mas viejos que la retencion.

    No hay locks contra las peticiones en curso: la retencion (horas) debe ser
    mucho mayor que lo que tarda una peticion (segundos).
    """

    def __init__(
        self,
        store,
        retention_seconds: float,
        interval_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.retention_seconds = retention_seconds
        self.interval_seconds = interval_seconds
        self.clock = clock

        self.state = IDLE
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_once(self) -> SweepResult:
        result = SweepResult()
        self.state = SCANNING
        try:
            try:
                entries = list(self.store.entries())
            except OSError as e:
                logger.error(f"Sweep aborted, cannot list {self.store.upload_folder}: {e}")
                result.errors += 1
                return result

            now = self.clock()
            for path, created_at in entries:
                result.scanned += 1

                # estrictamente mayor que la retencion
                if now - created_at <= self.retention_seconds:
                    result.skipped += 1
                    continue

                try:
                    if self.store.delete(path):
                        result.deleted += 1
                except ReleaseFailure as e:
                    logger.warning(f"Sweep could not delete: {e}")
                    result.errors += 1

            logger.info(
                f"Sweep done scanned={result.scanned} deleted={result.deleted} "
                f"skipped={result.skipped} errors={result.errors}"
            )
            return result
        finally:
            self.state = STOPPED if self._stop.is_set() else IDLE

    def run_forever(self) -> None:
        """
        Bloquea hasta stop(). Primer barrido inmediato, luego cada interval.
        """
        while not self._stop.is_set():
            try:
                self.run_once()
            except Exception as e:
                # un ciclo roto no debe matar el sweeper
                logger.exception(f"Sweep cycle failed: {type(e).__name__}: {e}")

            self._stop.wait(self.interval_seconds)

        self.state = STOPPED
        logger.info("Sweeper stopped.")

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            # si se esta deteniendo, el evento queda seteado hasta que termine
            if self._stop.is_set():
                logger.warning("Sweeper still stopping; start ignored")
            return

        self._stop.clear()
        self._thread = threading.Thread(target=self.run_forever, name="temp-file-sweeper", daemon=True)
        self._thread.start()
        logger.info(
            f"Sweeper started dir={self.store.upload_folder} "
            f"retention={self.retention_seconds}s interval={self.interval_seconds}s"
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning(f"Sweeper did not stop within {timeout}s")
                return
            self._thread = None
        self.state = STOPPED

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
