# otp_engine/totp.py
# TOTP (RFC 6238) on top of HOTP, plus drift-tolerant verification.

import hmac
import logging
import time
from typing import Optional

from . import base32
from .hotp import DIGITS, compute_hotp

log = logging.getLogger(__name__)

DEFAULT_STEP_SECONDS = 30
DEFAULT_DRIFT_WINDOW = 1


def _now(for_time: Optional[float]) -> float:
    return time.time() if for_time is None else for_time


def _check_step(step_seconds: int) -> None:
    if step_seconds <= 0:
        raise ValueError("step_seconds must be positive")


def time_counter(for_time: Optional[float] = None,
                 step_seconds: int = DEFAULT_STEP_SECONDS) -> int:
    _check_step(step_seconds)
    return int(_now(for_time) // step_seconds)


def seconds_remaining(for_time: Optional[float] = None,
                      step_seconds: int = DEFAULT_STEP_SECONDS) -> int:
    """Whole seconds until the code for ``for_time`` rolls over."""
    _check_step(step_seconds)
    return int(step_seconds - (int(_now(for_time)) % step_seconds))


def compute_totp(secret_b32: str, step_seconds: int = DEFAULT_STEP_SECONDS,
                 for_time: Optional[float] = None) -> str:
    counter = time_counter(for_time, step_seconds)
    return compute_hotp(base32.decode_secret(secret_b32), counter)


def _well_formed(code) -> bool:
    return (isinstance(code, str) and len(code) == DIGITS
            and code.isascii() and code.isdigit())


def verify_totp(code: str, secret_b32: str,
                drift_window: int = DEFAULT_DRIFT_WINDOW,
                step_seconds: int = DEFAULT_STEP_SECONDS,
                for_time: Optional[float] = None) -> bool:
    """Check ``code`` against the steps around ``for_time`` (default: now).

    Steps ``-drift_window`` through ``+drift_window`` are tried. A bad code gives
    ``False``; a bad secret raises :class:`~otp_engine.errors.Base32DecodeError`.
    """
    if drift_window < 0:
        raise ValueError("drift_window must not be negative")
    # decode first so a corrupt secret is reported even when the code is junk
    key = base32.decode_secret(secret_b32)
    counter = time_counter(for_time, step_seconds)

    if isinstance(code, str):
        code = code.strip()
    if not _well_formed(code):
        return False

    for offset in range(-drift_window, drift_window + 1):
        candidate = counter + offset
        if candidate < 0:
            continue
        if hmac.compare_digest(compute_hotp(key, candidate), code):
            log.debug("totp matched at step offset %+d", offset)
            return True
    return False
