# tests/test_auth.py
"""Tests for signup, login, logout and the profile view."""

from __future__ import annotations

from fastapi import status

from microblog.core import security
from microblog.models import User
from microblog.repositories.user_repo import UserRepository
from tests.conftest import TEST_PASSWORD


def _signup(client, username: str, password: str = TEST_PASSWORD):
    return client.post(
        "/signup",
        data={"username": username, "password": password},
        follow_redirects=False,
    )


def test_signup_creates_account_and_signs_in(client, db_session, test_settings) -> None:
    response = _signup(client, "bob")
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/profile"
    assert test_settings.session_cookie_name in response.cookies

    user = UserRepository(db_session).get_by_username("bob")
    assert user is not None
    assert user.password_hash != TEST_PASSWORD
    assert security.verify_password(TEST_PASSWORD, user.password_hash)

    profile = client.get("/profile", follow_redirects=False)
    assert profile.status_code == status.HTTP_200_OK
    assert "bob" in profile.text


def test_signup_duplicate_username_rerenders_form(client, db_session, test_user: User) -> None:
    original_hash = test_user.password_hash

    response = _signup(client, "alice", "another password")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert "Username is already taken" in response.text
    assert 'value="alice"' in response.text

    stored = UserRepository(db_session).get_by_username("alice")
    assert stored is not None
    assert stored.password_hash == original_hash
    assert security.verify_password(TEST_PASSWORD, stored.password_hash)


def test_signup_form_renders(client) -> None:
    response = client.get("/signup")
    assert response.status_code == status.HTTP_200_OK
    assert 'action="/signup"' in response.text


def test_login_success_redirects_to_profile(client, test_user: User, test_settings) -> None:
    response = client.post(
        "/login",
        data={"username": "alice", "password": TEST_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/profile"

    token = response.cookies[test_settings.session_cookie_name]
    assert security.decode_session_token(token, test_settings) == test_user.id


def test_login_wrong_password_redirects_to_login(client, test_user: User, test_settings) -> None:
    response = client.post(
        "/login",
        data={"username": "alice", "password": "wrong"},
        follow_redirects=False,
    )
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/login"
    assert test_settings.session_cookie_name not in response.cookies


def test_login_unknown_user_redirects_to_login(client) -> None:
    response = client.post(
        "/login",
        data={"username": "nobody", "password": TEST_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/login"


def test_login_rejects_externally_created_account(client, db_session) -> None:
    """Accounts without a password hash cannot log in with a password."""
    db_session.add(User(username="octocat", external_id="4242", external_username="octocat"))
    db_session.flush()

    response = client.post(
        "/login",
        data={"username": "octocat", "password": "anything"},
        follow_redirects=False,
    )
    assert response.headers["location"] == "/login"


def test_logout_clears_session(client) -> None:
    _signup(client, "carol")
    assert client.get("/profile", follow_redirects=False).status_code == status.HTTP_200_OK

    response = client.get("/logout", follow_redirects=False)
    assert response.status_code == status.HTTP_302_FOUND
    assert response.headers["location"] == "/"

    profile = client.get("/profile", follow_redirects=False)
    assert profile.status_code == status.HTTP_302_FOUND
    assert profile.headers["location"] == "/login"


def test_profile_without_session_redirects_to_login(client) -> None:
    response = client.get("/profile", follow_redirects=False)
    assert response.status_code == status.HTTP_302_FOUND
    assert response.headers["location"] == "/login"


def test_profile_shows_signed_in_user(signed_in_client) -> None:
    response = signed_in_client.get("/profile")
    assert response.status_code == status.HTTP_200_OK
    assert "alice" in response.text


def test_signup_and_login_forms_redirect_when_signed_in(signed_in_client) -> None:
    for path in ("/signup", "/login"):
        response = signed_in_client.get(path, follow_redirects=False)
        assert response.status_code == status.HTTP_302_FOUND
        assert response.headers["location"] == "/profile"


def test_signup_post_redirects_when_signed_in(signed_in_client, db_session) -> None:
    response = _signup(signed_in_client, "dave")
    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/profile"
    assert UserRepository(db_session).get_by_username("dave") is None


def test_invalid_session_cookie_is_anonymous(client, test_settings) -> None:
    client.cookies.set(test_settings.session_cookie_name, "not-a-token")
    response = client.get("/profile", follow_redirects=False)
    assert response.status_code == status.HTTP_302_FOUND
    assert response.headers["location"] == "/login"


def test_session_for_deleted_user_is_anonymous(client, test_settings) -> None:
    client.cookies.set(
        test_settings.session_cookie_name,
        security.create_session_token("0" * 32, test_settings),
    )
    response = client.get("/profile", follow_redirects=False)
    assert response.headers["location"] == "/login"


def test_login_form_hides_provider_link_when_unconfigured(client) -> None:
    response = client.get("/login")
    assert response.status_code == status.HTTP_200_OK
    assert "/auth/external" not in response.text
