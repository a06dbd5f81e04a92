# otp_engine/generator.py
# Secrets and recovery codes from the OS CSPRNG.

import logging
import os
from typing import List

from .base32 import ALPHABET as BASE32_ALPHABET
from .errors import RandomSourceError

log = logging.getLogger(__name__)

# No I, O, 1, 0 so codes can be read back without confusion
BACKUP_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
BACKUP_CODE_LENGTH = 10
BACKUP_GROUP = 5

DEFAULT_SECRET_LENGTH = 20
DEFAULT_BACKUP_COUNT = 10


def _urandom(n: int) -> bytes:
    try:
        return os.urandom(n)
    except NotImplementedError as e:
        raise RandomSourceError("no cryptographically secure random source available") from e


def _random_symbols(alphabet: str, n: int) -> str:
    """Draw ``n`` symbols uniformly from ``alphabet``.

    Bytes at or above the largest multiple of ``len(alphabet)`` are rejected and
    redrawn so ``byte % len(alphabet)`` stays unbiased. For 32-symbol alphabets the
    limit is 256 and nothing is rejected.
    """
    size = len(alphabet)
    limit = 256 - (256 % size)
    out: List[str] = []
    while len(out) < n:
        for b in _urandom(n - len(out)):
            if b < limit:
                out.append(alphabet[b % size])
    return "".join(out)


def generate_secret(byte_length: int = DEFAULT_SECRET_LENGTH) -> str:
    if byte_length < 1:
        raise ValueError("byte_length must be at least 1")
    return _random_symbols(BASE32_ALPHABET, byte_length)


def format_backup_code(symbols: str) -> str:
    return f"{symbols[:BACKUP_GROUP]}-{symbols[BACKUP_GROUP:]}"


def generate_backup_codes(count: int = DEFAULT_BACKUP_COUNT) -> List[str]:
    # No dedup across codes; collisions are an accepted risk at 50 bits.
    if count < 0:
        raise ValueError("count must not be negative")
    codes = [format_backup_code(_random_symbols(BACKUP_ALPHABET, BACKUP_CODE_LENGTH))
             for _ in range(count)]
    log.debug("generated %d backup codes", count)
    return codes
