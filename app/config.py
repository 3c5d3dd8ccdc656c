# app/config.py

import os

from dotenv import load_dotenv

# Cargar las variables de entorno desde el archivo .env
load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _database_uri() -> str:
    uri = os.getenv("DATABASE_URL")

    # Sin DATABASE_URL armamos la URI con las credenciales sueltas
    if not uri:
        host = os.getenv("DB_HOST", "localhost")
        user = os.getenv("DB_USER", "")
        password = os.getenv("DB_PASSWORD", "")
        database = os.getenv("DB_DATABASE", "formularios")
        auth = f"{user}:{password}@" if user else ""
        uri = f"postgresql://{auth}{host}/{database}"

    # Render a veces entrega DATABASE_URL como postgres:// (deprecated)
    if uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)

    # Forzar driver pg8000 (para evitar psycopg2 en Render)
    # Si ya viene con driver, no lo tocamos
    if uri.startswith("postgresql://") and "+pg8000" not in uri:
        uri = uri.replace("postgresql://", "postgresql+pg8000://", 1)

    return uri


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Pool acotado: pasado el limite, las peticiones esperan hasta DB_POOL_TIMEOUT
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": int(os.getenv("DB_POOL_SIZE", "10")),
        "max_overflow": 0,
        "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT", "30")),
        "pool_pre_ping": True,
    }

    # Correo
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = _env_bool("MAIL_USE_TLS", "true")
    MAIL_USE_SSL = _env_bool("MAIL_USE_SSL")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", MAIL_USERNAME or "formularios@localhost")
    POSTULACIONES_DESTINATARIO = os.getenv("POSTULACIONES_DESTINATARIO", "rrhh@localhost")

    # Si es True, un fallo al guardar en la base cancela el envio del mail
    NOTIFY_REQUIRES_PERSISTENCE = _env_bool("NOTIFY_REQUIRES_PERSISTENCE")

    # Rutas de archivos
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    ALLOWED_CV_EXTENSIONS = [
        ext.strip().lower()
        for ext in os.getenv("ALLOWED_CV_EXTENSIONS", "pdf,doc,docx").split(",")
        if ext.strip()
    ]

    # Limpieza de temporales huerfanos
    TEMP_RETENTION_HOURS = float(os.getenv("TEMP_RETENTION_HOURS", "24"))
    SWEEP_INTERVAL_HOURS = float(os.getenv("SWEEP_INTERVAL_HOURS", "24"))
    SWEEPER_AUTOSTART = _env_bool("SWEEPER_AUTOSTART", "true")

    # Rate limit general (100 peticiones cada 10 minutos)
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "100 per 10 minutes")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_HEADERS_ENABLED = True

    # Detras del proxy de Render: la IP real viene en X-Forwarded-For (0 = no confiar)
    PROXY_FIX_X_FOR = int(os.getenv("PROXY_FIX_X_FOR", "1"))

    # Limite upload (10MB)
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))


class TestingConfig(Config):
    TESTING = True

    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}

    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = "formularios@test.local"
    POSTULACIONES_DESTINATARIO = "rrhh@test.local"

    SWEEPER_AUTOSTART = False
    RATELIMIT_ENABLED = False
