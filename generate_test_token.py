"""Generate an RS256 test token from the configured key pair and check it round-trips."""

import json
import sys

from jwt_redirect.services.auth.exceptions import InvalidInputError, JWTRedirectError
from jwt_redirect.services.auth.keys import key_pair_from_settings
from jwt_redirect.services.auth.tokens import decode_unverified, generate, verify_token
from jwt_redirect.services.settings import get_settings
from jwt_redirect.utils.url import build_redirect_url, extract_token_from_url, is_valid_target_url

# Constants
MIN_ARGS_FOR_SUBJECT = 1
MIN_ARGS_FOR_TARGET = 2


def generate_test_token(subject: str = "N100007965", target_url: str | None = None) -> str:
    """Sign a token with the configured keys and return the redirect link."""
    settings = get_settings()
    target_url = target_url or settings.default_target_url or "https://example.com"
    if not is_valid_target_url(target_url):
        msg = f"Invalid target URL: {target_url}"
        raise InvalidInputError(msg)

    key_pair = key_pair_from_settings(settings)
    policy = settings.token_policy()

    result = generate(subject, key_pair, policy=policy)
    link = build_redirect_url(target_url, result.token)

    # The receiving side only has the link
    claims = verify_token(extract_token_from_url(link), key_pair, policy=policy)
    header, _ = decode_unverified(result.token)
    print(f"Header: {json.dumps(header)}")  # noqa: T201
    print(f"Claims: {json.dumps(claims)}")  # noqa: T201
    return link


if __name__ == "__main__":
    # Default values
    subject = "N100007965"
    target_url = None

    # Allow command line arguments
    if len(sys.argv) > MIN_ARGS_FOR_SUBJECT:
        subject = sys.argv[1]
    if len(sys.argv) > MIN_ARGS_FOR_TARGET:
        target_url = sys.argv[2]

    try:
        link = generate_test_token(subject, target_url)
    except JWTRedirectError as e:
        print(f"Failed: {e}")  # noqa: T201
        sys.exit(1)
    print(f"Generated link for subject: {subject}")  # noqa: T201
    print(link)  # noqa: T201
