import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# Ensure the src package and the root scripts are importable without an install
ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT, ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

FIXED_NOW = 1_700_000_000


@pytest.fixture
def fixed_now():
    return lambda: FIXED_NOW


@pytest.fixture(scope="session")
def rsa_pem_pair():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("ascii")
    )
    return private_pem, public_pem


@pytest.fixture(scope="session")
def key_pair(rsa_pem_pair):
    from jwt_redirect.services.auth.keys import load_key_pair

    return load_key_pair(*rsa_pem_pair)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # Keep developer environment variables out of Settings()
    for name in (
        "JWT_REDIRECT_SIGNING_MODE",
        "JWT_REDIRECT_PRIVATE_KEY",
        "JWT_REDIRECT_PUBLIC_KEY",
        "JWT_REDIRECT_TOKEN_PROFILE",
        "JWT_REDIRECT_SUBJECT_CLAIM",
        "JWT_REDIRECT_DEFAULT_TARGET_URL",
        "JWT_REDIRECT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
