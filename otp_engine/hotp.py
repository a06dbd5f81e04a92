# otp_engine/hotp.py
# HOTP (RFC 4226) with HMAC-SHA1 and 6-digit codes.

import hashlib
import hmac
import struct

DIGITS = 6
ALGORITHM = "SHA1"
MAX_COUNTER = 2 ** 64 - 1

_MODULUS = 10 ** DIGITS


def int_to_bytes(counter: int) -> bytes:
    if not isinstance(counter, int):
        raise TypeError(f"counter must be an int, not {type(counter).__name__}")
    if not 0 <= counter <= MAX_COUNTER:
        raise ValueError(f"counter must be in 0..{MAX_COUNTER}, got {counter}")
    return struct.pack(">Q", counter)


def dynamic_truncate(hmac_digest: bytes) -> int:
    offset = hmac_digest[-1] & 0x0F
    return ((hmac_digest[offset] & 0x7f) << 24 |
            (hmac_digest[offset + 1] & 0xff) << 16 |
            (hmac_digest[offset + 2] & 0xff) << 8 |
            (hmac_digest[offset + 3] & 0xff))


def compute_hotp(key: bytes, counter: int) -> str:
    digest = hmac.new(key, int_to_bytes(counter), hashlib.sha1).digest()
    return str(dynamic_truncate(digest) % _MODULUS).zfill(DIGITS)
