import asyncio
import time

import httpx
import pytest

from app.config import settings
from app.main import app
from app.modules.auth.provider_token import ProviderTokenUnavailable, retry_provider_token
from app.modules.auth.service import AuthService, CALENDAR_UNAVAILABLE_MESSAGE
from app.tests.fake_supabase import make_auth_response


def test_retry_gives_up_after_three_misses():
    calls, sleeps = [], []

    def fetch():
        calls.append(1)
        return None

    with pytest.raises(ProviderTokenUnavailable):
        retry_provider_token(fetch, attempts=3, delay_seconds=1.0, sleep=sleeps.append)

    assert len(calls) == 3
    assert sleeps == [1.0, 1.0, 1.0]


def test_retry_returns_first_token_and_stops():
    results = iter([None, "google-token", "unused"])
    calls = []

    def fetch():
        calls.append(1)
        return next(results)

    token = retry_provider_token(fetch, sleep=lambda _: None)

    assert token == "google-token"
    assert len(calls) == 2


def test_retry_counts_errors_as_misses():
    def fetch():
        raise RuntimeError("auth server down")

    with pytest.raises(ProviderTokenUnavailable) as exc:
        retry_provider_token(fetch, sleep=lambda _: None)

    assert exc.value.attempts == 3


@pytest.fixture
def no_retry_delay(monkeypatch):
    monkeypatch.setattr(settings, "provider_token_retry_delay", 0.0)


def _service(supabase) -> AuthService:
    return AuthService(supabase, supabase.flow_client)


def test_callback_keeps_provider_token_from_exchange(client, supabase):
    supabase.flow_auth.exchange_result = make_auth_response(
        "alice-id", "alice@example.com", provider_token="google-token"
    )

    response = client.get("/api/v1/auth/callback", params={"code": "abc", "code_verifier": "verifier-123"})

    assert response.status_code == 200
    body = response.json()
    assert body["provider_token"] == "google-token"
    assert body["calendar_enabled"] is True
    assert supabase.flow_auth.exchange_params["code_verifier"] == "verifier-123"
    assert supabase.flow_auth.refresh_calls == []


def test_callback_retries_then_disables_calendar(client, supabase, no_retry_delay):
    supabase.flow_auth.exchange_result = make_auth_response("alice-id", "alice@example.com")
    supabase.flow_auth.refresh_results["refresh"] = make_auth_response("alice-id", "alice@example.com")

    response = client.get("/api/v1/auth/callback", params={"code": "abc"})

    assert response.status_code == 200
    body = response.json()
    assert body["access_token"] == "access"
    assert body["calendar_enabled"] is False
    assert body["message"] == CALENDAR_UNAVAILABLE_MESSAGE
    assert supabase.flow_auth.refresh_calls == ["refresh", "refresh", "refresh"]


def test_callback_picks_up_late_provider_token(supabase, no_retry_delay):
    supabase.flow_auth.exchange_result = make_auth_response("alice-id", "alice@example.com")
    supabase.flow_auth.refresh_results["refresh"] = make_auth_response(
        "alice-id", "alice@example.com", provider_token="late-token",
        access_token="access-2", refresh_token="refresh-2"
    )

    tokens = _service(supabase).exchange_code("abc")

    assert tokens.provider_token == "late-token"
    assert tokens.calendar_enabled is True
    assert tokens.access_token == "access-2"
    assert tokens.refresh_token == "refresh-2"
    assert supabase.flow_auth.refresh_calls == ["refresh"]


def test_callback_never_reads_the_shared_client_session(supabase, no_retry_delay):
    bob_session = make_auth_response("bob-id", "bob@example.com", provider_token="BOB-google-token").session
    supabase.auth.current_session = bob_session
    supabase.flow_auth.exchange_result = make_auth_response("alice-id", "alice@example.com")

    tokens = _service(supabase).exchange_code("alice-code")

    assert tokens.user_id == "alice-id"
    assert tokens.provider_token is None
    assert tokens.calendar_enabled is False
    assert supabase.auth.get_session_calls == 0
    assert supabase.auth.current_session is bob_session


def test_retry_ignores_a_refresh_for_another_user(supabase, no_retry_delay):
    supabase.flow_auth.exchange_result = make_auth_response("alice-id", "alice@example.com")
    supabase.flow_auth.refresh_results["refresh"] = make_auth_response(
        "bob-id", "bob@example.com", provider_token="BOB-google-token"
    )

    tokens = _service(supabase).exchange_code("alice-code")

    assert tokens.provider_token is None
    assert tokens.message == CALENDAR_UNAVAILABLE_MESSAGE


def test_callback_retry_does_not_stall_other_requests(client, supabase, monkeypatch):
    monkeypatch.setattr(settings, "provider_token_retry_delay", 0.3)
    supabase.flow_auth.exchange_result = make_auth_response("alice-id", "alice@example.com")

    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            callback = asyncio.create_task(http.get("/api/v1/auth/callback", params={"code": "abc"}))
            await asyncio.sleep(0.1)
            started = time.monotonic()
            health = await http.get("/health")
            latency = time.monotonic() - started
            return await callback, health, latency

    callback_response, health, latency = asyncio.run(run())

    assert health.status_code == 200
    assert latency < 0.3
    assert callback_response.status_code == 200
    assert callback_response.json()["calendar_enabled"] is False


def test_callback_with_bad_code_is_unauthorized(client):
    response = client.get("/api/v1/auth/callback", params={"code": "bad"})

    assert response.status_code == 401


def test_login_returns_oauth_url_and_code_verifier(client, supabase):
    response = client.get("/api/v1/auth/login")

    assert response.status_code == 200
    body = response.json()
    assert body["provider"] == "google"
    assert body["code_verifier"] == "verifier-123"
    assert supabase.flow_auth.oauth_credentials["options"]["scopes"] == settings.oauth_scopes
    assert not hasattr(supabase.auth, "oauth_credentials")


def test_each_login_gets_its_own_storage(client, supabase):
    client.get("/api/v1/auth/login")
    client.get("/api/v1/auth/login")

    first, second = supabase.flow_storages
    assert first is not second


def test_refresh_route_uses_a_flow_client(client, supabase):
    supabase.flow_auth.refresh_results["refresh-1"] = make_auth_response(
        "alice-id", "alice@example.com", provider_token="google-token"
    )

    response = client.post("/api/v1/auth/refresh", json={"refresh_token": "refresh-1"})

    assert response.status_code == 200
    assert response.json()["calendar_enabled"] is True
    assert supabase.auth.current_session is None


def test_refresh_provider_token_without_refresh_token(supabase):
    assert _service(supabase).refresh_provider_token(None) is None


def test_refresh_provider_token_with_invalid_refresh_token(supabase):
    assert _service(supabase).refresh_provider_token("stale") is None


def test_logout_revokes_the_callers_session(client, supabase):
    response = client.post("/api/v1/auth/logout", headers={"Authorization": "Bearer token-alice"})

    assert response.status_code == 200
    assert supabase.auth.admin.revoked == ["token-alice"]
