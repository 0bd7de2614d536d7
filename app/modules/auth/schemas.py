from pydantic import BaseModel
from typing import Optional


class UserSession(BaseModel):
    """Authenticated caller, built per request and passed into every workflow call."""
    user_id: str
    email: str
    display_name: Optional[str] = None
    access_token: str
    provider_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @property
    def registry_name(self) -> str:
        return self.display_name or self.email.split("@")[0]


class OAuthLoginResponse(BaseModel):
    provider: str
    url: str
    code_verifier: Optional[str] = None  # send back on /auth/callback (PKCE)


class SessionTokensResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user_id: str
    email: str
    provider_token: Optional[str] = None
    calendar_enabled: bool = False
    message: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: str
