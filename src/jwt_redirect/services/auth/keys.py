"""Key material resolution for HS256 secrets and RS256 key pairs."""

from __future__ import annotations

import base64
import binascii
import logging
import re
import textwrap
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import load_pem_private_key, load_pem_public_key

from jwt_redirect.services.auth.exceptions import InvalidInputError, KeyResolutionError

if TYPE_CHECKING:
    from jwt_redirect.services.settings import Settings

logger = logging.getLogger(__name__)

# Constants
BASE64_BLOCK = 4
PEM_LINE_LENGTH = 64
BASE64URL_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


@dataclass(frozen=True)
class ResolvedSecret:
    key: bytes
    is_base64: bool


@dataclass(frozen=True)
class KeyPair:
    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey


def looks_like_base64url(secret: str) -> bool:
    """Check whether a secret is shaped like an unpadded base64url key."""
    return (
        len(secret) >= BASE64_BLOCK
        and len(secret) % BASE64_BLOCK == 0
        and BASE64URL_PATTERN.fullmatch(secret) is not None
    )


def resolve_secret(secret: str | None) -> ResolvedSecret:
    """Turn a caller-supplied secret into HMAC key bytes.

    A secret shaped like base64url (alphabet ``A-Za-z0-9_-``, length a
    positive multiple of 4) is decoded and used as raw bytes. Anything else,
    or anything that fails to decode to at least one byte, is used as its
    UTF-8 encoding. Signing and verification both call this, so the same
    secret string always yields the same key bytes on both sides.
    """
    if not secret:
        msg = "Secret must not be empty"
        raise InvalidInputError(msg)

    if looks_like_base64url(secret):
        try:
            decoded = base64.urlsafe_b64decode(secret.encode("ascii"))
        except (binascii.Error, ValueError):
            logger.debug("Secret matched base64url shape but failed to decode, using plain text")
        else:
            if decoded:
                return ResolvedSecret(key=decoded, is_base64=True)

    return ResolvedSecret(key=secret.encode("utf-8"), is_base64=False)


def normalize_pem(value: str, key_type: str) -> str:
    """Return ``value`` as a PEM block, wrapping a bare base64 body if needed.

    ``key_type`` is the label between BEGIN and KEY, e.g. ``"PRIVATE"`` or
    ``"PUBLIC"``.
    """
    text = value.replace("\\n", "\n").strip()
    if "-----BEGIN " in text:
        return text + "\n"

    body = "".join(text.split())
    lines = textwrap.wrap(body, PEM_LINE_LENGTH)
    return "\n".join([f"-----BEGIN {key_type} KEY-----", *lines, f"-----END {key_type} KEY-----", ""])


def load_key_pair(private_pem: str | None, public_pem: str | None) -> KeyPair:
    """Parse a PKCS8 private key and an SPKI public key for RS256."""
    if not private_pem:
        msg = "Private key is not configured"
        raise KeyResolutionError(msg)
    if not public_pem:
        msg = "Public key is not configured"
        raise KeyResolutionError(msg)

    try:
        private_key = load_pem_private_key(normalize_pem(private_pem, "PRIVATE").encode("ascii"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        msg = f"Failed to load private key: {e}"
        raise KeyResolutionError(msg) from e

    try:
        public_key = load_pem_public_key(normalize_pem(public_pem, "PUBLIC").encode("ascii"))
    except (ValueError, UnsupportedAlgorithm) as e:
        msg = f"Failed to load public key: {e}"
        raise KeyResolutionError(msg) from e

    if not isinstance(private_key, rsa.RSAPrivateKey):
        msg = f"Private key must be an RSA key for RS256, got {type(private_key).__name__}"
        raise KeyResolutionError(msg)
    if not isinstance(public_key, rsa.RSAPublicKey):
        msg = f"Public key must be an RSA key for RS256, got {type(public_key).__name__}"
        raise KeyResolutionError(msg)

    logger.info("Loaded RS256 key pair (%d-bit)", private_key.key_size)
    return KeyPair(private_key=private_key, public_key=public_key)


def key_pair_from_settings(settings: Settings) -> KeyPair:
    """Build the process-wide key pair from configuration."""
    return load_key_pair(settings.private_key, settings.public_key)
