import pytest

from jwt_redirect.services.auth.claims import DEFAULT_POLICY, TOKEN_PROFILES, TokenPolicy, build_claims
from jwt_redirect.services.auth.exceptions import InvalidInputError
from tests.conftest import FIXED_NOW


def test_build_claims_short_lived(fixed_now):
    claims = build_claims("u1", 180, fixed_now)
    assert claims == {"sub": "u1", "iat": FIXED_NOW, "nbf": FIXED_NOW - 5, "exp": FIXED_NOW + 180}
    assert claims["exp"] - claims["iat"] == 180
    assert claims["iat"] - claims["nbf"] == 5


def test_build_claims_without_skew_and_uid_key(fixed_now):
    claims = build_claims("u1", 3600, fixed_now, skew_seconds=0, subject_claim="uid")
    assert claims == {"uid": "u1", "iat": FIXED_NOW, "nbf": FIXED_NOW, "exp": FIXED_NOW + 3600}


def test_build_claims_uses_system_clock_by_default(monkeypatch):
    monkeypatch.setattr("jwt_redirect.services.auth.claims.time.time", lambda: 1234.9)
    claims = build_claims("u1", 60)
    assert claims["iat"] == 1234
    assert claims["nbf"] <= claims["iat"] <= claims["exp"]


@pytest.mark.parametrize("subject", ["", None])
def test_build_claims_rejects_empty_subject(subject, fixed_now):
    with pytest.raises(InvalidInputError, match="Subject"):
        build_claims(subject, 180, fixed_now)


@pytest.mark.parametrize(("lifetime", "skew"), [(0, 5), (-1, 5), (180, -1)])
def test_build_claims_rejects_bad_window(lifetime, skew, fixed_now):
    with pytest.raises(InvalidInputError):
        build_claims("u1", lifetime, fixed_now, skew_seconds=skew)


def test_profiles():
    assert DEFAULT_POLICY == TokenPolicy(180, 5, "sub")
    assert TOKEN_PROFILES["hour"] == TokenPolicy(3600, 0, "sub")
