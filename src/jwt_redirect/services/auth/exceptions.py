"""Errors raised while issuing, verifying and transporting tokens."""


class JWTRedirectError(Exception):
    """Base class for all jwt_redirect errors."""


class InvalidInputError(JWTRedirectError, ValueError):
    """A required subject, secret or token was missing before any crypto work."""


class KeyResolutionError(JWTRedirectError):
    """Configured key material is absent or malformed."""


class SigningError(JWTRedirectError):
    """The underlying signing operation failed."""


class VerificationError(JWTRedirectError):
    """The token is malformed, carries a bad signature, or is outside its time window."""
