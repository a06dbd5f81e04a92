class OTPError(Exception):
    """Base class for errors raised by the OTP engine."""


class Base32DecodeError(OTPError, ValueError):
    """A secret is not valid RFC 4648 Base32."""


class RandomSourceError(OTPError, RuntimeError):
    """No cryptographically secure random source is available."""
