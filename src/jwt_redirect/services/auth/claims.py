"""Time-bounded claims for issued tokens."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from jwt_redirect.services.auth.exceptions import InvalidInputError

# Constants
SHORT_LIFETIME_SECONDS = 180
SHORT_SKEW_SECONDS = 5
HOUR_LIFETIME_SECONDS = 3600

Clock = Callable[[], int]


def system_clock() -> int:
    return int(time.time())


@dataclass(frozen=True)
class TokenPolicy:
    """Lifetime, not-before skew and subject claim key used when issuing tokens."""

    lifetime_seconds: int = SHORT_LIFETIME_SECONDS
    not_before_skew_seconds: int = SHORT_SKEW_SECONDS
    subject_claim: str = "sub"


TOKEN_PROFILES: dict[str, TokenPolicy] = {
    "short": TokenPolicy(SHORT_LIFETIME_SECONDS, SHORT_SKEW_SECONDS),
    "hour": TokenPolicy(HOUR_LIFETIME_SECONDS, 0),
}
DEFAULT_POLICY = TOKEN_PROFILES["short"]


def build_claims(
    subject: str | None,
    lifetime_seconds: int,
    now: Clock | None = None,
    *,
    skew_seconds: int = SHORT_SKEW_SECONDS,
    subject_claim: str = "sub",
) -> dict[str, int | str]:
    """Create the subject, iat, nbf and exp claims relative to ``now()``."""
    if not subject:
        msg = "Subject must not be empty"
        raise InvalidInputError(msg)
    if lifetime_seconds <= 0:
        msg = f"Lifetime must be positive, got {lifetime_seconds}"
        raise InvalidInputError(msg)
    if skew_seconds < 0:
        msg = f"Not-before skew must not be negative, got {skew_seconds}"
        raise InvalidInputError(msg)

    issued_at = int((now or system_clock)())
    return {
        subject_claim: subject,
        "iat": issued_at,
        "nbf": issued_at - skew_seconds,
        "exp": issued_at + lifetime_seconds,
    }
