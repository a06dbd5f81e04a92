# otp_engine/backup.py
# Recovery-code helpers. Whether a code has been used is tracked by the caller's store.

import datetime
from typing import Optional, Sequence

import bcrypt

from .generator import BACKUP_ALPHABET, BACKUP_CODE_LENGTH, format_backup_code

DEFAULT_BCRYPT_ROUNDS = 12


def normalize_backup_code(text) -> Optional[str]:
    """Canonical ``XXXXX-XXXXX`` form of a typed code, or ``None`` if it can't be one."""
    if not isinstance(text, str):
        return None
    s = text.strip().upper().replace(" ", "").replace("-", "")
    if len(s) != BACKUP_CODE_LENGTH or any(ch not in BACKUP_ALPHABET for ch in s):
        return None
    return format_backup_code(s)


def hash_backup_code(code: str, rounds: Optional[int] = None) -> str:
    normalized = normalize_backup_code(code)
    if normalized is None:
        raise ValueError("not a backup code")
    salt = bcrypt.gensalt(rounds=rounds or DEFAULT_BCRYPT_ROUNDS)
    return bcrypt.hashpw(normalized.encode("ascii"), salt).decode("ascii")


def match_backup_code(submitted, hashed_codes: Sequence[str]) -> Optional[int]:
    """Index of the stored hash ``submitted`` matches, else ``None``."""
    normalized = normalize_backup_code(submitted)
    if normalized is None:
        return None
    pw = normalized.encode("ascii")
    for i, hashed in enumerate(hashed_codes):
        try:
            ok = bcrypt.checkpw(pw, hashed.encode("ascii"))
        except ValueError:
            # not a bcrypt hash; treat as a non-match
            ok = False
        if ok:
            return i
    return None


def format_backup_codes_text(codes: Sequence[str], issuer: str,
                             generated_at: Optional[datetime.datetime] = None) -> str:
    if generated_at is None:
        generated_at = datetime.datetime.now()
    lines = [f"{issuer} Backup Codes", ""]
    lines.extend(codes)
    lines += [
        "",
        "Keep these safe! If you lose your phone, these are your only recovery option.",
        "Each code can be used once.",
        f"Generated on: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
    ]
    return "\n".join(lines) + "\n"
