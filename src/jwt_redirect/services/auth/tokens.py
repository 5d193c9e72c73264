"""Sign and verify redirect tokens.

Two signing variants share one code path:

* a secret string signs with HS256 after being resolved by
  :func:`jwt_redirect.services.auth.keys.resolve_secret`;
* a :class:`~jwt_redirect.services.auth.keys.KeyPair` signs with RS256 using
  the private key and verifies with the public key.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any

import jwt
from jwt.warnings import InsecureKeyLengthWarning

from jwt_redirect.services.auth.claims import DEFAULT_POLICY, Clock, TokenPolicy, build_claims, system_clock
from jwt_redirect.services.auth.exceptions import SigningError, VerificationError
from jwt_redirect.services.auth.keys import KeyPair, resolve_secret

logger = logging.getLogger(__name__)

# Constants
JWT_PARTS_COUNT = 3
SYMMETRIC_ALGORITHM = "HS256"
ASYMMETRIC_ALGORITHM = "RS256"
TIME_CLAIMS = ("iat", "nbf", "exp")
TOKEN_PREVIEW_LENGTH = 20

KeySource = str | KeyPair


@dataclass(frozen=True)
class GeneratedToken:
    token: str
    expires_at: int
    is_base64: bool | None = None
    algorithm: str = SYMMETRIC_ALGORITHM


def sign(claims: dict[str, Any], key: Any, algorithm: str) -> str:
    """Sign ``claims`` into a compact ``header.payload.signature`` token."""
    try:
        with warnings.catch_warnings():
            # Short test secrets are expected input
            warnings.simplefilter("ignore", InsecureKeyLengthWarning)
            return jwt.encode(claims, key, algorithm=algorithm, headers={"typ": "JWT"})
    except Exception as e:
        logger.exception("Failed to sign %s token", algorithm)
        msg = f"Failed to sign JWT: {e}"
        raise SigningError(msg) from e


def verify(
    token: str | None,
    key: Any,
    algorithm: str,
    *,
    now: Clock | None = None,
    subject_claim: str = "sub",
) -> dict[str, Any]:
    """Check the signature and time window of ``token`` and return its claims.

    The token is rejected when ``now < nbf`` or ``now >= exp``.
    """
    if not token:
        msg = "Token must not be empty"
        raise VerificationError(msg)

    if len(token.split(".")) != JWT_PARTS_COUNT:
        msg = "Invalid JWT format"
        raise VerificationError(msg)

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", InsecureKeyLengthWarning)
            claims = jwt.decode(
                token,
                key,
                algorithms=[algorithm],
                options={
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                    "require": [subject_claim, *TIME_CLAIMS],
                },
            )
    except jwt.PyJWTError as e:
        logger.debug("Token %s... failed verification: %s", token[:TOKEN_PREVIEW_LENGTH], e)
        msg = f"Failed to verify JWT: {e}"
        raise VerificationError(msg) from e

    current_time = int((now or system_clock)())
    not_before = claims["nbf"]
    expires_at = claims["exp"]
    if not isinstance(not_before, int | float) or not isinstance(expires_at, int | float):
        msg = "Token time claims must be numeric"
        raise VerificationError(msg)
    if current_time < not_before:
        msg = "Token is not yet valid"
        raise VerificationError(msg)
    if current_time >= expires_at:
        msg = "Token expired"
        raise VerificationError(msg)

    return claims


def generate(
    subject: str | None,
    key_source: KeySource | None,
    lifetime: int | None = None,
    *,
    policy: TokenPolicy = DEFAULT_POLICY,
    now: Clock | None = None,
) -> GeneratedToken:
    """Issue a token for ``subject``.

    ``key_source`` is either a secret string (HS256) or a pre-loaded
    :class:`KeyPair` (RS256). ``lifetime`` overrides the policy lifetime.
    """
    claims = build_claims(
        subject,
        policy.lifetime_seconds if lifetime is None else lifetime,
        now,
        skew_seconds=policy.not_before_skew_seconds,
        subject_claim=policy.subject_claim,
    )

    if isinstance(key_source, KeyPair):
        token = sign(claims, key_source.private_key, ASYMMETRIC_ALGORITHM)
        result = GeneratedToken(
            token=token, expires_at=claims["exp"], is_base64=None, algorithm=ASYMMETRIC_ALGORITHM
        )
    else:
        resolved = resolve_secret(key_source)
        token = sign(claims, resolved.key, SYMMETRIC_ALGORITHM)
        result = GeneratedToken(
            token=token, expires_at=claims["exp"], is_base64=resolved.is_base64, algorithm=SYMMETRIC_ALGORITHM
        )

    logger.info("Generated %s token for subject %s expiring at %s", result.algorithm, subject, result.expires_at)
    return result


def verify_token(
    token: str | None,
    key_source: KeySource | None,
    *,
    policy: TokenPolicy = DEFAULT_POLICY,
    now: Clock | None = None,
) -> dict[str, Any]:
    """Verify a token issued by :func:`generate` with the same key source."""
    if isinstance(key_source, KeyPair):
        return verify(
            token, key_source.public_key, ASYMMETRIC_ALGORITHM, now=now, subject_claim=policy.subject_claim
        )

    if not token:
        msg = "Token must not be empty"
        raise VerificationError(msg)
    resolved = resolve_secret(key_source)
    return verify(token, resolved.key, SYMMETRIC_ALGORITHM, now=now, subject_claim=policy.subject_claim)


def decode_unverified(token: str | None) -> tuple[dict[str, Any], dict[str, Any]]:
    """Read header and claims without checking signature or time window."""
    if not token:
        msg = "Token must not be empty"
        raise VerificationError(msg)

    try:
        header = jwt.get_unverified_header(token)
        claims = jwt.decode(
            token,
            options={
                "verify_signature": False,
                "verify_exp": False,
                "verify_nbf": False,
                "verify_iat": False,
            },
        )
    except jwt.PyJWTError as e:
        msg = f"Invalid JWT: {e}"
        raise VerificationError(msg) from e
    return header, claims
