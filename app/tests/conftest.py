from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from app.database.supabase_client import get_supabase, get_flow_client_factory
from app.main import app
from app.modules.auth.schemas import UserSession
from app.tests.fake_supabase import FakeSupabase


@pytest.fixture
def supabase() -> FakeSupabase:
    db = FakeSupabase()
    db.auth.add_user("token-alice", "alice-id", "alice@example.com", full_name="Alice Admin")
    db.auth.add_user("token-bob", "bob-id", "bob@example.com")
    db.auth.add_user("token-carol", "carol-id", "carol@example.com", full_name="Carol")
    return db


@pytest.fixture
def client(supabase) -> Generator[TestClient]:
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_flow_client_factory] = lambda: supabase.flow_client
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(name: str, **extra: str) -> dict:
    headers = {"Authorization": f"Bearer token-{name}"}
    headers.update(extra)
    return headers


def make_session(user_id: str, email: str, display_name=None, **kwargs) -> UserSession:
    return UserSession(
        user_id=user_id,
        email=email,
        display_name=display_name,
        access_token=f"token-{user_id}",
        **kwargs,
    )


@pytest.fixture
def alice() -> UserSession:
    return make_session("alice-id", "alice@example.com", "Alice Admin")


@pytest.fixture
def bob() -> UserSession:
    return make_session("bob-id", "bob@example.com")


@pytest.fixture
def carol() -> UserSession:
    return make_session("carol-id", "carol@example.com", "Carol")


@pytest.fixture
def registered(supabase):
    """All three fixture users present in the users table."""
    supabase.tables["users"] = [
        {"user_id": "alice-id", "name": "Alice Admin", "email": "alice@example.com"},
        {"user_id": "bob-id", "name": "bob", "email": "bob@example.com"},
        {"user_id": "carol-id", "name": "Carol", "email": "carol@example.com"},
    ]
    return supabase
