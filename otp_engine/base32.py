# otp_engine/base32.py
# RFC 4648 Base32 for OTP secrets. Accepts unpadded input of any length.

from .errors import Base32DecodeError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}


def _normalize(text: str) -> str:
    if not isinstance(text, str):
        raise Base32DecodeError(f"secret must be a string, not {type(text).__name__}")
    s = text.strip().replace(" ", "").upper()
    return s.rstrip("=")


def decode(text: str) -> bytes:
    s = _normalize(text)
    out = bytearray()
    buf = 0
    bits = 0
    for pos, ch in enumerate(s):
        value = _INDEX.get(ch)
        if value is None:
            # '=' here means padding in the middle of the string
            raise Base32DecodeError(f"invalid base32 character {ch!r} at position {pos}")
        buf = ((buf << 5) | value) & 0xFFFF
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buf >> bits) & 0xFF)
    return bytes(out)


def encode(data: bytes) -> str:
    out = []
    buf = 0
    bits = 0
    for byte in data:
        buf = ((buf << 8) | byte) & 0xFFFF
        bits += 8
        while bits >= 5:
            bits -= 5
            out.append(ALPHABET[(buf >> bits) & 0x1F])
    if bits:
        out.append(ALPHABET[(buf << (5 - bits)) & 0x1F])
    return "".join(out)


def decode_secret(text: str) -> bytes:
    key = decode(text)
    if not key:
        raise Base32DecodeError("secret decodes to an empty key")
    return key


def canonical(text: str) -> str:
    """Upper-case, unpadded, space-free form of a secret. Raises if it is not a usable key."""
    decode_secret(text)
    return _normalize(text)
