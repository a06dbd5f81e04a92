# otpauth:// enrollment URI (Google Authenticator key-uri format).

from urllib.parse import quote

from . import base32
from .hotp import ALGORITHM, DIGITS
from .totp import DEFAULT_STEP_SECONDS


def build_provisioning_uri(secret_b32: str, account_label: str, issuer: str,
                           step_seconds: int = DEFAULT_STEP_SECONDS) -> str:
    if not account_label:
        raise ValueError("account_label is required")
    if not issuer:
        raise ValueError("issuer is required")
    if step_seconds <= 0:
        raise ValueError("step_seconds must be positive")
    secret = base32.canonical(secret_b32)
    issuer_q = quote(issuer, safe="")
    label = f"{issuer_q}:{quote(account_label, safe='')}"
    params = (f"secret={secret}&issuer={issuer_q}"
              f"&algorithm={ALGORITHM}&digits={DIGITS}&period={step_seconds}")
    return f"otpauth://totp/{label}?{params}"
