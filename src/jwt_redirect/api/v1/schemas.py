from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    subject: str = Field(description="Identifier placed in the subject claim")
    secret: str | None = Field(default=None, description="HMAC secret, plain text or base64url (symmetric mode)")
    target_url: str | None = Field(default=None, description="Site that receives the token in its URL fragment")


class GeneratedLink(BaseModel):
    token: str
    algorithm: str
    is_base64: bool | None = None
    expires_at: int
    redirect_url: str
    redirect_delay_seconds: float
