import time

import jwt
import pytest
from fastapi import HTTPException

from app.dependencies.auth import upsert_user_from_claims, verify_supabase_token
from app.models.user import User

SECRET = "test-jwt-secret-that-is-long-enough-for-hs256"


def make_token(sub="supabase-user-1", secret=SECRET, **claims):
    payload = {
        "sub": sub,
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        "email": "Focus@Example.com",
        "user_metadata": {"first_name": "Sam", "avatar_url": "https://example.com/a.png"},
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setenv("SUPABASE_JWT_SECRET", SECRET)


def test_valid_hs256_token():
    payload = verify_supabase_token(f"Bearer {make_token()}")
    assert payload["sub"] == "supabase-user-1"


@pytest.mark.parametrize("header", [None, "Token abc", "Bearer ", "Bearer null", "Bearer not-a-jwt"])
def test_malformed_headers_are_unauthorized(header):
    with pytest.raises(HTTPException) as exc:
        verify_supabase_token(header)
    assert exc.value.status_code == 401


def test_wrong_secret_is_unauthorized():
    token = make_token(secret="some-other-secret-that-is-also-long-enough")
    with pytest.raises(HTTPException) as exc:
        verify_supabase_token(f"Bearer {token}")
    assert exc.value.status_code == 401


def test_expired_token_is_unauthorized():
    token = make_token(exp=int(time.time()) - 10)
    with pytest.raises(HTTPException) as exc:
        verify_supabase_token(f"Bearer {token}")
    assert exc.value.status_code == 401


def test_missing_secret_is_server_error(monkeypatch):
    monkeypatch.delenv("SUPABASE_JWT_SECRET")
    with pytest.raises(HTTPException) as exc:
        verify_supabase_token(f"Bearer {make_token()}")
    assert exc.value.status_code == 500


def test_first_sign_in_creates_user(db_session):
    payload = verify_supabase_token(f"Bearer {make_token()}")
    user = upsert_user_from_claims(payload, db_session)
    assert user.id == "supabase-user-1"
    assert user.email == "focus@example.com"
    assert user.first_name == "Sam"
    assert user.is_premium is False
    assert user.created_at is not None


def test_later_sign_in_keeps_trial_anchor(db_session):
    first = upsert_user_from_claims(verify_supabase_token(f"Bearer {make_token()}"), db_session)
    created_at = first.created_at

    again = upsert_user_from_claims(
        verify_supabase_token(f"Bearer {make_token(user_metadata={'first_name': 'Alex'})}"),
        db_session,
    )
    assert again.first_name == "Alex"
    assert again.created_at == created_at
    assert db_session.query(User).count() == 1


def test_email_taken_by_another_account_conflicts(db_session):
    upsert_user_from_claims(verify_supabase_token(f"Bearer {make_token()}"), db_session)
    with pytest.raises(HTTPException) as exc:
        upsert_user_from_claims(
            verify_supabase_token(f"Bearer {make_token(sub='supabase-user-2')}"),
            db_session,
        )
    assert exc.value.status_code == 409
