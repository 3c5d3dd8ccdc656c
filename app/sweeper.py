# app/sweeper.py

import signal

from app import build_sweeper, create_app
from app.utils.logging import get_logger

logger = get_logger("sweeper")

SWEEPER = None


def _handle_stop(signum, frame):
    logger.info(f"Señal recibida ({signum}). Deteniendo sweeper...")
    if SWEEPER is not None:
        SWEEPER.stop()


def main():
    global SWEEPER

    # Señales típicas en Render al detener/redeploy
    signal.signal(signal.SIGTERM, _handle_stop)
    signal.signal(signal.SIGINT, _handle_stop)

    # El proceso dedicado hace el barrido; la app web no arranca otro
    app = create_app(start_sweeper=False)
    SWEEPER = build_sweeper(app)

    logger.info(f"Sweeper iniciado sobre {app.config['UPLOAD_FOLDER']}. Esperando...")
    SWEEPER.run_forever()


if __name__ == "__main__":
    main()
