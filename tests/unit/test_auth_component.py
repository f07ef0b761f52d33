"""
Unit tests for the auth component (signup, login, token issue/verify).
"""

import pytest

from contact_desk.components.auth import (
    IssueTokenInput,
    LoginInput,
    SignupInput,
    VerifyTokenInput,
    run_issue_token,
    run_login,
    run_signup,
    run_verify_token,
)
from contact_desk.domain.entities import User


class MockUserRepo:
    def __init__(self):
        self.users: dict[str, User] = {}

    def get_by_email(self, email: str) -> User | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_id(self, user_id: object) -> User | None:
        return self.users.get(str(user_id))

    def save(self, user: User) -> User:
        self.users[str(user.id)] = user
        return user


class FakeAuthAdapter:
    """Reversible 'hashing' and tokens that are just the user id."""

    def hash_password(self, plain: str) -> str:
        return f"hashed:{plain}"

    def verify_password(self, plain: str, hashed: str) -> bool:
        return hashed == f"hashed:{plain}"

    def create_token(self, user_id: object, ttl_minutes: int) -> str:
        return f"token:{user_id}"

    def validate_token(self, token: str) -> str | None:
        if not token.startswith("token:"):
            return None
        return token.removeprefix("token:")


@pytest.fixture
def repo():
    return MockUserRepo()


@pytest.fixture
def auth():
    return FakeAuthAdapter()


@pytest.fixture
def signup(repo, auth, clock, rules):
    def _signup(**kwargs):
        fields = {"email": "ada@example.com", "password": "secret1"}
        fields.update(kwargs)
        return run_signup(SignupInput(**fields), repo, auth, clock, rules.auth)

    return _signup


# --- Signup ---


def test_signup_creates_active_user(signup, repo, clock):
    result = signup(email="  Ada@Example.com ", name="Ada", role="super_admin")

    assert result.success is True
    user = result.user
    assert user is not None
    assert user.email == "ada@example.com"
    assert user.display_name == "Ada"
    assert user.role == "super_admin"
    assert user.status == "active"
    assert user.password_hash == "hashed:secret1"
    assert user.created_at == clock.now_utc()
    assert repo.get_by_email("ada@example.com") is not None


def test_signup_defaults(signup):
    result = signup()

    assert result.user is not None
    assert result.user.role == "user"
    assert result.user.display_name == "ada"


def test_signup_rejects_duplicate_email(signup):
    signup()

    result = signup(email="ADA@example.com")

    assert result.success is False
    assert "already been registered" in (result.error or "")


@pytest.mark.parametrize("email", ["", "no-at-sign", "@example.com", "ada@"])
def test_signup_rejects_invalid_email(signup, email):
    assert signup(email=email).success is False


def test_signup_rejects_short_password(signup):
    result = signup(password="abc")

    assert result.success is False
    assert result.error == "Password must be at least 6 characters"


def test_signup_rejects_unknown_role(signup):
    result = signup(role="owner")

    assert result.success is False
    assert result.error == "Unknown role: owner"


# --- Login ---


def test_login_success(signup, repo, auth):
    signup()

    result = run_login(LoginInput(email="Ada@example.com", password="secret1"), repo, auth)

    assert result.success is True
    assert result.user is not None


def test_login_wrong_password(signup, repo, auth):
    signup()

    result = run_login(LoginInput(email="ada@example.com", password="nope"), repo, auth)

    assert result.success is False
    assert result.error == "Invalid credentials"


def test_login_unknown_user(repo, auth):
    result = run_login(LoginInput(email="ghost@example.com", password="x"), repo, auth)

    assert result.error == "Invalid credentials"


def test_login_disabled_user(signup, repo, auth):
    user = signup().user
    repo.save(user.model_copy(update={"status": "disabled"}))

    result = run_login(LoginInput(email="ada@example.com", password="secret1"), repo, auth)

    assert result.error == "User account is disabled"


# --- Tokens ---


def test_issue_and_verify_token(signup, repo, auth, rules):
    user = signup().user

    issued = run_issue_token(IssueTokenInput(user=user), auth, rules.auth)
    verified = run_verify_token(VerifyTokenInput(token=issued.token_raw), repo, auth)

    assert verified.success is True
    assert verified.user is not None
    assert verified.user.id == user.id


def test_verify_rejects_garbage(repo, auth):
    assert run_verify_token(VerifyTokenInput(token="garbage"), repo, auth).error == "Invalid token"


def test_verify_rejects_non_uuid_subject(repo, auth):
    result = run_verify_token(VerifyTokenInput(token="token:not-a-uuid"), repo, auth)

    assert result.error == "Invalid token payload"


def test_verify_rejects_deleted_user(repo, auth):
    result = run_verify_token(
        VerifyTokenInput(token="token:00000000-0000-0000-0000-000000000000"), repo, auth
    )

    assert result.error == "User not found"
