"""Token link endpoint used by the test form."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from jwt_redirect.api.v1.schemas import GeneratedLink, GenerateRequest
from jwt_redirect.services.auth.exceptions import InvalidInputError, KeyResolutionError, SigningError
from jwt_redirect.services.auth.keys import KeyPair
from jwt_redirect.services.auth.tokens import generate
from jwt_redirect.services.settings import Settings
from jwt_redirect.utils.url import build_redirect_url, is_valid_target_url

router = APIRouter(tags=["generate"])

# Constants
TOKEN_PREVIEW_LENGTH = 20


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_key_pair(request: Request) -> KeyPair | None:
    return request.app.state.key_pair


@router.post("/generate", response_model=GeneratedLink)
async def generate_link(
    body: GenerateRequest,
    settings: Annotated[Settings, Depends(get_app_settings)],
    key_pair: Annotated[KeyPair | None, Depends(get_key_pair)],
) -> GeneratedLink:
    """Issue a token for the subject and embed it in the target URL fragment."""
    logger = logging.getLogger(__name__)

    target_url = (body.target_url or settings.default_target_url or "").strip()
    if not is_valid_target_url(target_url):
        logger.error("Invalid target URL: %s", target_url)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Target URL must be an absolute http(s) URL",
        )

    if settings.signing_mode == "asymmetric":
        if key_pair is None:
            logger.error("Signing mode is asymmetric but no key pair was loaded")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Signing keys not configured",
            )
        key_source = key_pair
    else:
        key_source = body.secret

    try:
        result = generate(body.subject.strip(), key_source, policy=settings.token_policy())
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except (KeyResolutionError, SigningError) as e:
        logger.exception("Failed to generate token for subject %s", body.subject)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate token: {e}",
        ) from e

    redirect_url = build_redirect_url(target_url, result.token)
    logger.info("Built redirect URL for %s with token %s...", target_url, result.token[:TOKEN_PREVIEW_LENGTH])

    return GeneratedLink(
        token=result.token,
        algorithm=result.algorithm,
        is_base64=result.is_base64,
        expires_at=result.expires_at,
        redirect_url=redirect_url,
        redirect_delay_seconds=settings.redirect_delay_seconds,
    )
