# otp_engine/api.py
# Stateless JSON endpoints over the engine. Callers supply every input, including
# the secret; nothing is stored and secrets/codes are never logged.

from flask import Blueprint, current_app, jsonify, request

from .backup import format_backup_codes_text, hash_backup_code, match_backup_code
from .errors import Base32DecodeError, RandomSourceError
from .generator import generate_backup_codes, generate_secret
from .totp import compute_totp, seconds_remaining, verify_totp
from .uri import build_provisioning_uri

bp = Blueprint("otp", __name__, url_prefix="/otp")


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        if request.get_data():
            raise ValueError("request body is not valid JSON")
        return {}
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data


def _str(data: dict, key: str, default=None) -> str:
    v = data.get(key, default)
    if v is None:
        raise ValueError(f"'{key}' is required")
    if not isinstance(v, str):
        raise ValueError(f"'{key}' must be a string")
    return v


def _int(data: dict, key: str, config_key: str) -> int:
    v = data.get(key)
    if v is None:
        return int(current_app.config[config_key])
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"'{key}' must be an integer")
    return v


@bp.errorhandler(Base32DecodeError)
def _bad_secret(e):
    return jsonify(error=f"invalid secret: {e}"), 422


@bp.errorhandler(ValueError)
def _bad_request(e):
    return jsonify(error=str(e)), 400


@bp.errorhandler(RandomSourceError)
def _no_entropy(e):
    current_app.logger.error("random source unavailable: %s", e)
    return jsonify(error="random source unavailable"), 503


@bp.post("/secret")
def new_secret():
    data = _body()
    secret = generate_secret(_int(data, "length", "OTP_SECRET_LENGTH"))
    out = {"secret": secret}
    if data.get("account"):
        step = _int(data, "step", "OTP_STEP_SECONDS")
        issuer = _str(data, "issuer", current_app.config["OTP_ISSUER"])
        out["uri"] = build_provisioning_uri(secret, _str(data, "account"), issuer, step_seconds=step)
    current_app.logger.info("issued new secret (length=%d)", len(secret))
    return jsonify(out), 201


@bp.post("/backup-codes")
def new_backup_codes():
    data = _body()
    codes = generate_backup_codes(_int(data, "count", "OTP_BACKUP_CODE_COUNT"))
    issuer = _str(data, "issuer", current_app.config["OTP_ISSUER"])
    out = {"codes": codes, "text": format_backup_codes_text(codes, issuer)}
    if data.get("hash"):
        rounds = int(current_app.config["BCRYPT_ROUNDS"])
        out["hashes"] = [hash_backup_code(c, rounds=rounds) for c in codes]
    current_app.logger.info("issued %d backup codes", len(codes))
    return jsonify(out), 201


@bp.post("/backup-codes/match")
def match_backup():
    data = _body()
    hashes = data.get("hashes")
    if not isinstance(hashes, list) or not all(isinstance(h, str) for h in hashes):
        raise ValueError("'hashes' must be a list of strings")
    index = match_backup_code(data.get("code"), hashes)
    current_app.logger.info("backup code check: %s", "match" if index is not None else "no match")
    return jsonify(valid=index is not None, index=index)


@bp.post("/totp")
def current_code():
    data = _body()
    step = _int(data, "step", "OTP_STEP_SECONDS")
    code = compute_totp(_str(data, "secret"), step_seconds=step)
    return jsonify(code=code, valid_for=seconds_remaining(step_seconds=step))


@bp.post("/verify")
def verify():
    data = _body()
    ok = verify_totp(
        data.get("code"),
        _str(data, "secret"),
        drift_window=_int(data, "window", "OTP_DRIFT_WINDOW"),
        step_seconds=_int(data, "step", "OTP_STEP_SECONDS"),
    )
    current_app.logger.info("totp verification: %s", "ok" if ok else "rejected")
    return jsonify(valid=ok)


@bp.post("/uri")
def provisioning_uri():
    data = _body()
    uri = build_provisioning_uri(
        _str(data, "secret"),
        _str(data, "account"),
        _str(data, "issuer", current_app.config["OTP_ISSUER"]),
        step_seconds=_int(data, "step", "OTP_STEP_SECONDS"),
    )
    return jsonify(uri=uri)
