from postgrest.exceptions import APIError

from app.modules.users.service import UserService
from app.tests.conftest import auth_headers


def test_ensure_user_inserts_missing_user(supabase, alice):
    user = UserService(supabase).ensure_user(alice)

    assert user.user_id == "alice-id"
    assert user.name == "Alice Admin"
    assert supabase.rows("users") == [
        {"user_id": "alice-id", "name": "Alice Admin", "email": "alice@example.com", "id": 1}
    ]


def test_ensure_user_falls_back_to_email_local_part(supabase, bob):
    user = UserService(supabase).ensure_user(bob)

    assert user.name == "bob"


def test_ensure_user_is_idempotent(supabase, alice):
    service = UserService(supabase)
    service.ensure_user(alice)
    service.ensure_user(alice)

    assert len(supabase.rows("users")) == 1
    assert supabase.calls.count(("users", "insert")) == 1


def test_ensure_user_lookup_failure_aborts_without_insert(supabase, alice):
    supabase.fail("users", "select", APIError({"code": "08006", "message": "connection failure"}))

    assert UserService(supabase).ensure_user(alice) is None
    assert ("users", "insert") not in supabase.calls


def test_ensure_user_insert_failure_is_swallowed(supabase, alice):
    supabase.fail("users", "insert")

    assert UserService(supabase).ensure_user(alice) is None
    assert supabase.rows("users") == []


def test_get_user_by_email(registered):
    service = UserService(registered)

    assert service.get_user_by_email("bob@example.com").user_id == "bob-id"
    assert service.get_user_by_email("nobody@example.com") is None


def test_users_me_after_sync(client, supabase):
    client.post("/api/v1/session/sync", headers=auth_headers("carol"))

    response = client.get("/api/v1/users/me", headers=auth_headers("carol"))

    assert response.status_code == 200
    assert response.json() == {"user_id": "carol-id", "name": "Carol", "email": "carol@example.com"}


def test_users_me_before_sync_is_not_found(client):
    response = client.get("/api/v1/users/me", headers=auth_headers("carol"))

    assert response.status_code == 404
