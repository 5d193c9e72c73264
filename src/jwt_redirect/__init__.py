"""Issue signed JWTs for security testing and carry them to a site in the URL fragment."""

from jwt_redirect.services.auth.claims import TokenPolicy, build_claims
from jwt_redirect.services.auth.exceptions import (
    InvalidInputError,
    JWTRedirectError,
    KeyResolutionError,
    SigningError,
    VerificationError,
)
from jwt_redirect.services.auth.keys import KeyPair, load_key_pair, resolve_secret
from jwt_redirect.services.auth.tokens import GeneratedToken, generate, verify_token
from jwt_redirect.utils.url import build_redirect_url, extract_token_from_url

__all__ = [
    "GeneratedToken",
    "InvalidInputError",
    "JWTRedirectError",
    "KeyPair",
    "KeyResolutionError",
    "SigningError",
    "TokenPolicy",
    "VerificationError",
    "build_claims",
    "build_redirect_url",
    "extract_token_from_url",
    "generate",
    "load_key_pair",
    "resolve_secret",
    "verify_token",
]
