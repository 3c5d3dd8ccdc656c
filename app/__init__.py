# app/__init__.py

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix
from .config import Config
from .extensions import db, migrate, mail, limiter, cors


def build_store(app):
    from .services.storage import AttachmentStore

    return AttachmentStore(
        app.config["UPLOAD_FOLDER"],
        allowed_extensions=app.config.get("ALLOWED_CV_EXTENSIONS"),
    )


def build_sweeper(app):
    from .services.sweeper import TempFileSweeper

    return TempFileSweeper(
        app.extensions["attachment_store"],
        retention_seconds=app.config["TEMP_RETENTION_HOURS"] * 3600,
        interval_seconds=app.config["SWEEP_INTERVAL_HOURS"] * 3600,
    )


def create_app(config_class=Config, start_sweeper=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # El rate limit usa la IP del cliente, no la del proxy
    if app.config.get("PROXY_FIX_X_FOR"):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=app.config["PROXY_FIX_X_FOR"])

    # Inicializar extensiones
    db.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)
    limiter.init_app(app)
    cors.init_app(app)

    # Dependencias del coordinador (los tests pueden reemplazarlas)
    from .services.notifier import MailNotifier
    from .services.repository import SubmissionGateway
    from .services.submissions import SubmissionCoordinator

    store = build_store(app)
    app.extensions["attachment_store"] = store
    app.extensions["submissions"] = SubmissionCoordinator(
        gateway=SubmissionGateway(db),
        notifier=MailNotifier(
            mail,
            sender=app.config["MAIL_DEFAULT_SENDER"],
            recipient=app.config["POSTULACIONES_DESTINATARIO"],
        ),
        store=store,
        notify_requires_persistence=app.config["NOTIFY_REQUIRES_PERSISTENCE"],
    )

    # Registrar blueprints
    from .blueprints.web.routes import web_bp
    from .blueprints.api.routes import api_bp
    from .blueprints.health.routes import health_bp

    app.register_blueprint(web_bp)
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(health_bp, url_prefix="/health")

    # Barrido de temporales huerfanos en segundo plano
    sweeper = build_sweeper(app)
    app.extensions["sweeper"] = sweeper
    if start_sweeper is None:
        start_sweeper = app.config["SWEEPER_AUTOSTART"]
    if start_sweeper:
        sweeper.start()

    return app
