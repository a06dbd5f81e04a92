import os
from typing import Any, Mapping, Optional

from flask import Flask
from dotenv import load_dotenv

from .backup import (format_backup_codes_text, hash_backup_code, match_backup_code,
                     normalize_backup_code)
from .base32 import decode as decode_base32, encode as encode_base32
from .errors import Base32DecodeError, OTPError, RandomSourceError
from .generator import generate_backup_codes, generate_secret
from .hotp import compute_hotp
from .totp import compute_totp, seconds_remaining, time_counter, verify_totp
from .uri import build_provisioning_uri

__all__ = [
    "Base32DecodeError", "OTPError", "RandomSourceError",
    "build_provisioning_uri", "compute_hotp", "compute_totp", "create_app",
    "decode_base32", "encode_base32", "format_backup_codes_text",
    "generate_backup_codes", "generate_secret", "hash_backup_code",
    "match_backup_code", "normalize_backup_code", "seconds_remaining",
    "time_counter", "verify_totp",
]


def _load_env(home: str) -> None:
    load_dotenv(dotenv_path=os.path.join(home, ".env"), override=False)

    # Optionally load extra env fragments (e.g., .env.d/*)
    envd = os.path.join(home, ".env.d")
    if os.path.isdir(envd):
        for name in sorted(os.listdir(envd)):
            p = os.path.join(envd, name)
            if os.path.isfile(p):
                load_dotenv(dotenv_path=p, override=True)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    _load_env(os.getenv("OTP_ENGINE_HOME", os.getcwd()))

    app = Flask(__name__)

    app.config["OTP_ISSUER"]            = os.getenv("OTP_ISSUER", "OTP Engine")
    app.config["OTP_STEP_SECONDS"]      = int(os.getenv("OTP_STEP_SECONDS", "30"))
    app.config["OTP_DRIFT_WINDOW"]      = int(os.getenv("OTP_DRIFT_WINDOW", "1"))
    app.config["OTP_SECRET_LENGTH"]     = int(os.getenv("OTP_SECRET_LENGTH", "20"))
    app.config["OTP_BACKUP_CODE_COUNT"] = int(os.getenv("OTP_BACKUP_CODE_COUNT", "10"))
    app.config["BCRYPT_ROUNDS"]         = int(os.getenv("BCRYPT_ROUNDS", "12"))
    app.config["LOG_LEVEL"]             = os.getenv("LOG_LEVEL", "info")
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(str(app.config["LOG_LEVEL"]).upper())

    # Blueprints
    from .api import bp as api_bp
    from .web import bp as web_bp
    app.register_blueprint(api_bp)   # /otp/...
    app.register_blueprint(web_bp)   # /healthz, /readyz

    return app
