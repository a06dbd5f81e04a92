import time
from flask import Blueprint, jsonify

bp = Blueprint("web", __name__)

START_TS = time.time()


@bp.get("/healthz")
def healthz():
    # Liveness: process is up
    return jsonify(status="ok", uptime_seconds=round(time.time() - START_TS, 1))


@bp.get("/readyz")
def readyz():
    # Nothing external to wait for; the engine is stateless
    return jsonify(status="ready")
