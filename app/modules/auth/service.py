import logging
from supabase import Client
from supabase_auth import SyncMemoryStorage
from app.modules.auth.schemas import OAuthLoginResponse, SessionTokensResponse
from app.modules.auth.provider_token import retry_provider_token, ProviderTokenUnavailable
from app.database.supabase_client import create_flow_client
from app.config.settings import settings
from fastapi import HTTPException
from typing import Callable, Dict, Any, Optional

logger = logging.getLogger(__name__)

CALENDAR_UNAVAILABLE_MESSAGE = "Could not get Google Calendar access; calendar export is disabled"

# Storage key suffix the auth client uses for the PKCE code verifier
CODE_VERIFIER_SUFFIX = "-code-verifier"


class AuthService:
    def __init__(
        self,
        supabase: Client,
        flow_client_factory: Callable[[SyncMemoryStorage], Client] = create_flow_client,
    ):
        self.supabase = supabase
        self.flow_client_factory = flow_client_factory

    def _flow_client(self, storage: Optional[SyncMemoryStorage] = None) -> Client:
        return self.flow_client_factory(storage or SyncMemoryStorage())

    def sign_in_with_oauth(self) -> OAuthLoginResponse:
        """Start the Google sign-in, asking for calendar access.

        The PKCE code verifier is handed back to the caller, who returns it on /callback.
        """
        storage = SyncMemoryStorage()
        try:
            options = {"scopes": settings.oauth_scopes}
            if settings.oauth_redirect_url:
                options["redirect_to"] = settings.oauth_redirect_url
            response = self._flow_client(storage).auth.sign_in_with_oauth({
                "provider": settings.oauth_provider,
                "options": options
            })
        except Exception as e:
            logger.error(f"Error logging in with {settings.oauth_provider} provider: {e}")
            raise HTTPException(
                status_code=502,
                detail=f"Error logging in with {settings.oauth_provider} provider"
            )
        return OAuthLoginResponse(
            provider=settings.oauth_provider,
            url=response.url,
            code_verifier=_stored_code_verifier(storage),
        )

    def exchange_code(self, code: str, code_verifier: Optional[str] = None) -> SessionTokensResponse:
        """Finish the OAuth flow and acquire the provider token for calendar access.

        Blocks for up to attempts * delay while retrying, so callers must not run it on the event loop.
        """
        client = self._flow_client()
        params = {"auth_code": code, "code_verifier": code_verifier}
        if settings.oauth_redirect_url:
            params["redirect_to"] = settings.oauth_redirect_url
        try:
            auth_response = client.auth.exchange_code_for_session(params)
        except Exception as e:
            logger.error(f"OAuth code exchange failed: {e}")
            raise HTTPException(status_code=401, detail="OAuth exchange failed")

        if not auth_response.session or not auth_response.user:
            raise HTTPException(status_code=401, detail="OAuth exchange failed")

        tokens = self._tokens_from_session(auth_response.session, auth_response.user)
        if not tokens.provider_token:
            try:
                tokens.provider_token = retry_provider_token(
                    self._session_refresher(client, tokens),
                    attempts=settings.provider_token_attempts,
                    delay_seconds=settings.provider_token_retry_delay,
                )
            except ProviderTokenUnavailable as e:
                logger.error(f"Calendar access unavailable for {tokens.user_id}: {e}")
                tokens.message = CALENDAR_UNAVAILABLE_MESSAGE
        tokens.calendar_enabled = bool(tokens.provider_token)
        return tokens

    def _session_refresher(self, client: Client, tokens: SessionTokensResponse) -> Callable[[], Optional[str]]:
        """Fetch for the retry loop: refresh the caller's own session and keep its rotated tokens"""
        def fetch() -> Optional[str]:
            if not tokens.refresh_token:
                return None
            refreshed = self._refresh(client, tokens.refresh_token)
            if refreshed.user_id != tokens.user_id:
                logger.warning(f"Refreshed session belongs to {refreshed.user_id}, not {tokens.user_id}")
                return None
            tokens.access_token = refreshed.access_token
            tokens.refresh_token = refreshed.refresh_token
            tokens.expires_in = refreshed.expires_in
            return refreshed.provider_token
        return fetch

    def refresh_session(self, refresh_token: str) -> SessionTokensResponse:
        tokens = self._refresh(self._flow_client(), refresh_token)
        tokens.calendar_enabled = bool(tokens.provider_token)
        return tokens

    def _refresh(self, client: Client, refresh_token: str) -> SessionTokensResponse:
        try:
            auth_response = client.auth.refresh_session(refresh_token)
        except Exception as e:
            logger.error(f"Session refresh failed: {e}")
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

        if not auth_response.session or not auth_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")
        return self._tokens_from_session(auth_response.session, auth_response.user)

    def refresh_provider_token(self, refresh_token: Optional[str]) -> Optional[str]:
        """Manual refresh path used before a calendar export when no provider token is cached"""
        if not refresh_token:
            return None
        try:
            return self.refresh_session(refresh_token).provider_token
        except HTTPException as e:
            logger.warning(f"Provider token refresh failed: {e.detail}")
            return None

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            return {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
            }
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def sign_out(self, token: str) -> bool:
        """Revoke the refresh tokens of the session that issued `token`"""
        try:
            # Access tokens are stateless JWTs and stay valid until they expire
            self.supabase.auth.admin.sign_out(token)
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False

    @staticmethod
    def _tokens_from_session(session, user) -> SessionTokensResponse:
        return SessionTokensResponse(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            user_id=user.id,
            email=user.email or "",
            provider_token=session.provider_token,
        )


def _stored_code_verifier(storage: SyncMemoryStorage) -> Optional[str]:
    for key, value in storage.storage.items():
        if key.endswith(CODE_VERIFIER_SUFFIX):
            return value
    return None
