# app/blueprints/health/routes.py

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db, limiter

health_bp = Blueprint("health", __name__)


@health_bp.route("/")
@limiter.exempt
def health():
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        database = "error"
    finally:
        db.session.close()

    sweeper = current_app.extensions["sweeper"]
    status = "healthy" if database == "ok" else "degraded"
    return jsonify({
        "status": status,
        "database": database,
        "sweeper": sweeper.state if sweeper.running else "NOT_RUNNING",
    }), (200 if database == "ok" else 503)
