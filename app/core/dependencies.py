"""
Core dependencies: bearer-token authentication and the per-request session object
"""

from fastapi import Depends, Header, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, get_flow_client_factory
from app.modules.auth.service import AuthService
from app.modules.auth.schemas import UserSession
from supabase import Client
from typing import Any, Callable, Dict, Optional


security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    flow_client_factory: Callable[[Any], Client] = Depends(get_flow_client_factory),
) -> AuthService:
    return AuthService(supabase, flow_client_factory)


def build_session(
    user_data: Dict[str, Any],
    access_token: str,
    provider_token: Optional[str] = None,
    refresh_token: Optional[str] = None,
) -> UserSession:
    metadata = user_data.get("user_metadata") or {}
    return UserSession(
        user_id=user_data["id"],
        email=user_data.get("email") or "",
        display_name=metadata.get("full_name") or metadata.get("name"),
        access_token=access_token,
        provider_token=provider_token,
        refresh_token=refresh_token,
    )


def get_current_session(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service),
    x_provider_token: Optional[str] = Header(default=None),
    x_refresh_token: Optional[str] = Header(default=None),
) -> UserSession:
    """Session object for the caller; provider and refresh tokens come from optional headers"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return build_session(user_data, token, x_provider_token, x_refresh_token)


def get_optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[UserSession]:
    """Like get_current_session, but None for anonymous callers"""
    if credentials is None:
        return None
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return build_session(user_data, token)
