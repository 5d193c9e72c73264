"""Carry a token to a target site in the URL fragment."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from jwt_redirect.services.auth.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# Constants
FRAGMENT_MARKER = "jwt="
HASH_MARKER = "#" + FRAGMENT_MARKER
HTTP_SCHEMES = frozenset({"http", "https"})
# Schemes that cannot be parsed without a host
HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


def build_redirect_url(target_url: str, token: str) -> str:
    """Append ``#jwt=<token>`` to ``target_url`` verbatim."""
    if not token:
        msg = "Token must not be empty"
        raise InvalidInputError(msg)
    return f"{target_url}#{FRAGMENT_MARKER}{token}"


def extract_token_from_url(url: str | None) -> str | None:
    """Return the token carried in the fragment of ``url``, or ``None``.

    Everything after ``jwt=`` up to the end of the fragment is the token.
    Strings that are not absolute URLs yield ``None`` instead of raising.
    """
    if not url or not isinstance(url, str):
        return None

    try:
        parts = urlsplit(url)
    except ValueError:
        logger.debug("Could not parse URL %r", url)
        return None

    if parts.scheme in HOST_SCHEMES and not parts.netloc:
        # "https:example.com" and "https:/example.com" still name a host
        rest = url.split(":", 1)[1].lstrip("/\\")
        try:
            parts = urlsplit(f"{parts.scheme}://{rest}")
        except ValueError:
            return None

    if not parts.scheme or (parts.scheme in HOST_SCHEMES and not parts.netloc):
        return None

    # The first marker starts the token, which runs to the end of the fragment
    hash_part = "#" + parts.fragment
    position = hash_part.find(HASH_MARKER)
    if position == -1:
        return None
    return hash_part[position + len(HASH_MARKER) :] or None


def is_valid_target_url(url: str | None) -> bool:
    """Basic check that ``url`` is an absolute http(s) URL."""
    if not url or not isinstance(url, str):
        return False
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False
    return parts.scheme in HTTP_SCHEMES and bool(parts.netloc)
