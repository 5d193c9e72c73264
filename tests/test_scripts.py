import generate_jwt_link
import generate_test_token
import pytest

from jwt_redirect.services.auth.exceptions import InvalidInputError
from jwt_redirect.services.auth.keys import load_key_pair
from jwt_redirect.services.auth.tokens import decode_unverified, verify_token
from jwt_redirect.utils.url import extract_token_from_url

SECRET = "A0PUZmC1hs82Bdbz5tlxuM7Yw46E9NV3"
SUBJECT = "N100007965"


def _line(output: str, prefix: str) -> str:
    return next(line for line in output.splitlines() if line.startswith(prefix))[len(prefix) :]


def test_generate_jwt_link_prints_link(capsys):
    assert generate_jwt_link.main([SUBJECT, SECRET, "https://example.com"]) == 0
    out = capsys.readouterr().out
    token = _line(out, "Token: ")
    link = _line(out, "Generated link: ")
    assert link == f"https://example.com#jwt={token}"
    assert _line(out, "Secret encoding: ") == "base64url"
    assert verify_token(extract_token_from_url(link), SECRET)["sub"] == SUBJECT


def test_generate_jwt_link_flags(capsys):
    assert generate_jwt_link.main([SUBJECT, "plain secret", "--hour", "--uid"]) == 0
    out = capsys.readouterr().out
    assert _line(out, "Secret encoding: ") == "plain text"
    _, claims = decode_unverified(_line(out, "Token: "))
    assert claims["uid"] == SUBJECT
    assert claims["exp"] - claims["iat"] == 3600
    assert _line(out, "Generated link: ").startswith("https://example.com#jwt=")


def test_generate_jwt_link_usage_errors(capsys):
    assert generate_jwt_link.main([SUBJECT]) == 2
    assert "Usage" in capsys.readouterr().out
    assert generate_jwt_link.main([SUBJECT, SECRET, "invalid-url"]) == 2
    assert "Invalid target URL" in capsys.readouterr().out


def test_format_timestamp():
    assert generate_jwt_link.format_timestamp(0) == "1970-01-01 00:00:00 UTC"


def test_generate_test_token_with_single_line_keys(monkeypatch, rsa_pem_pair, capsys):
    private_pem, public_pem = rsa_pem_pair

    def body(pem: str) -> str:
        return "".join(line for line in pem.splitlines() if not line.startswith("-----"))

    monkeypatch.setenv("JWT_REDIRECT_PRIVATE_KEY", body(private_pem))
    monkeypatch.setenv("JWT_REDIRECT_PUBLIC_KEY", body(public_pem))

    link = generate_test_token.generate_test_token(SUBJECT, "https://example.com/app")
    assert link.startswith("https://example.com/app#jwt=")
    assert verify_token(extract_token_from_url(link), load_key_pair(private_pem, public_pem))["sub"] == SUBJECT
    out = capsys.readouterr().out
    assert '"alg": "RS256"' in out
    assert SUBJECT in out


@pytest.mark.parametrize("target_url", ["example.com", "invalid-url", "ftp://example.com"])
def test_generate_test_token_rejects_bad_target(monkeypatch, rsa_pem_pair, target_url):
    private_pem, public_pem = rsa_pem_pair
    monkeypatch.setenv("JWT_REDIRECT_PRIVATE_KEY", private_pem)
    monkeypatch.setenv("JWT_REDIRECT_PUBLIC_KEY", public_pem)

    with pytest.raises(InvalidInputError, match="Invalid target URL"):
        generate_test_token.generate_test_token("N100007965", target_url)
