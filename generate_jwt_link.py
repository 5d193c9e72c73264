#!/usr/bin/env python3
"""Generate an HS256 test JWT and the redirect link that carries it."""

import sys
import time

from jwt_redirect.services.auth.claims import TOKEN_PROFILES, TokenPolicy
from jwt_redirect.services.auth.exceptions import JWTRedirectError
from jwt_redirect.services.auth.tokens import generate
from jwt_redirect.utils.url import build_redirect_url, is_valid_target_url

# Constants
DEFAULT_TARGET_URL = "https://example.com"
MIN_ARGS_FOR_SECRET = 2
MIN_ARGS_FOR_TARGET = 3


def format_timestamp(timestamp: int) -> str:
    """Format timestamp as human-readable string."""
    return time.strftime("%Y-%m-%d %H:%M:%S UTC", time.gmtime(timestamp))


def policy_from_flags(flags: list[str]) -> TokenPolicy:
    profile = TOKEN_PROFILES["hour" if "--hour" in flags else "short"]
    if "--uid" in flags:
        return TokenPolicy(profile.lifetime_seconds, profile.not_before_skew_seconds, subject_claim="uid")
    return profile


def main(argv: list[str] | None = None) -> int:
    """Print token, key encoding, expiry and redirect link for SUBJECT SECRET [TARGET_URL]."""
    args = sys.argv[1:] if argv is None else argv
    flags = [arg for arg in args if arg.startswith("--")]
    positional = [arg for arg in args if not arg.startswith("--")]

    if len(positional) < MIN_ARGS_FOR_SECRET:
        print("Usage: generate_jwt_link.py SUBJECT SECRET [TARGET_URL] [--hour] [--uid]")  # noqa: T201
        return 2

    subject, secret = positional[0], positional[1]
    target_url = positional[2] if len(positional) >= MIN_ARGS_FOR_TARGET else DEFAULT_TARGET_URL
    if not is_valid_target_url(target_url):
        print(f"Invalid target URL: {target_url}")  # noqa: T201
        return 2

    try:
        result = generate(subject, secret, policy=policy_from_flags(flags))
    except JWTRedirectError as e:
        print(f"Failed to generate token: {e}")  # noqa: T201
        return 1

    print(f"Token: {result.token}")  # noqa: T201
    print(f"Secret encoding: {'base64url' if result.is_base64 else 'plain text'}")  # noqa: T201
    print(f"Expires: {format_timestamp(result.expires_at)}")  # noqa: T201
    print(f"Generated link: {build_redirect_url(target_url, result.token)}")  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
