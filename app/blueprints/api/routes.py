# app/blueprints/api/routes.py

from flask import Blueprint, current_app, jsonify

from app.extensions import limiter

api_bp = Blueprint("api", __name__)


@api_bp.route("/ping")
@limiter.exempt
def ping():
    return jsonify({"status": "ok"})


@api_bp.route("/sweep", methods=["POST"])
def sweep():
    """
    Dispara un barrido sincrono (ej: desde un cron externo).
    """
    result = current_app.extensions["sweeper"].run_once()
    return jsonify({
        "scanned": result.scanned,
        "deleted": result.deleted,
        "skipped": result.skipped,
        "errors": result.errors,
    })
