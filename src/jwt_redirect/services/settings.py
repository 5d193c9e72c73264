"""Configuration and logging for the jwt_redirect service."""

from __future__ import annotations

import logging
import sys
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from jwt_redirect.services.auth.claims import TOKEN_PROFILES, TokenPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JWT_REDIRECT_", env_file=".env", env_file_encoding="utf-8")
    log_level: str = "INFO"
    # symmetric signs HS256 with a caller-supplied secret; asymmetric signs RS256 with the configured keys
    signing_mode: Literal["symmetric", "asymmetric"] = "symmetric"
    # PEM strings (PKCS8 private, SPKI public). Bare base64 bodies are wrapped in PEM markers.
    private_key: str | None = None
    public_key: str | None = None
    # short: 180s lifetime, nbf 5s before iat. hour: 3600s lifetime, nbf == iat.
    token_profile: Literal["short", "hour"] = "short"
    subject_claim: Literal["sub", "uid"] = "sub"
    default_target_url: str | None = None
    # Delay the client waits before following the redirect URL
    redirect_delay_seconds: float = 2.0

    def token_policy(self) -> TokenPolicy:
        profile = TOKEN_PROFILES[self.token_profile]
        return TokenPolicy(
            lifetime_seconds=profile.lifetime_seconds,
            not_before_skew_seconds=profile.not_before_skew_seconds,
            subject_claim=self.subject_claim,
        )


def get_settings() -> Settings:
    return Settings()


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt='{"ts":"%(asctime)s","level":"%(levelname)s","msg":"%(message)s","name":"%(name)s"}',
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
