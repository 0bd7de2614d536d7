from fastapi import APIRouter, Depends, Security
from typing import Optional
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.modules.auth.schemas import (
    OAuthLoginResponse, SessionTokensResponse, RefreshRequest, UserSession
)
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_current_session

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.get("/login", response_model=OAuthLoginResponse)
async def login(service: AuthService = Depends(get_auth_service)):
    """Get the Google sign-in URL (requests calendar scope)"""
    return service.sign_in_with_oauth()


@router.get("/callback", response_model=SessionTokensResponse)
def callback(
    code: str,
    code_verifier: Optional[str] = None,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange the OAuth code for a session and acquire the calendar provider token"""
    # Sync route: exchange_code sleeps between retries and must stay off the event loop
    return service.exchange_code(code, code_verifier)


@router.post("/refresh", response_model=SessionTokensResponse)
async def refresh(
    request: RefreshRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Refresh the session (and provider token when the provider supplies one)"""
    return service.refresh_session(request.refresh_token)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Sign out the caller's session"""
    service.sign_out(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_me(session: UserSession = Depends(get_current_session)):
    """Identity of the current session"""
    return {
        "id": session.user_id,
        "email": session.email,
        "name": session.registry_name,
    }
