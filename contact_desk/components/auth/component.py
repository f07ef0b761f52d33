from typing import cast
from uuid import UUID, uuid4

from contact_desk.domain.entities import RoleType, User
from contact_desk.rules.models import AuthRules

from .models import (
    AuthOutput,
    IssueTokenInput,
    LoginInput,
    SignupInput,
    UserOutput,
    VerifyTokenInput,
)
from .ports import AuthAdapterPort, TimePort, UserRepoPort


def run_signup(
    inp: SignupInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
    time: TimePort,
    rules: AuthRules,
) -> UserOutput:
    email = inp.email.strip().lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        return UserOutput(success=False, error="A valid email address is required")

    if len(inp.password) < rules.passwords.min_length:
        return UserOutput(
            success=False,
            error=f"Password must be at least {rules.passwords.min_length} characters",
        )

    if inp.role not in rules.signup_roles:
        return UserOutput(success=False, error=f"Unknown role: {inp.role}")

    if user_repo.get_by_email(email):
        return UserOutput(
            success=False, error="A user with this email address has already been registered"
        )

    now = time.now_utc()
    display_name = (inp.name or "").strip() or email.split("@")[0]

    new_user = User(
        id=uuid4(),
        email=email,
        display_name=display_name,
        password_hash=auth_adapter.hash_password(inp.password),
        role=cast(RoleType, inp.role),
        status="active",
        created_at=now,
        updated_at=now,
    )
    user_repo.save(new_user)
    return UserOutput(user=new_user, success=True)


def run_login(
    inp: LoginInput, user_repo: UserRepoPort, auth_adapter: AuthAdapterPort
) -> AuthOutput:
    user = user_repo.get_by_email(inp.email.strip().lower())
    if not user:
        return AuthOutput(success=False, error="Invalid credentials")

    if not auth_adapter.verify_password(inp.password, user.password_hash):
        return AuthOutput(success=False, error="Invalid credentials")

    if user.status != "active":
        return AuthOutput(success=False, error="User account is disabled")

    return AuthOutput(user=user, success=True)


def run_issue_token(
    inp: IssueTokenInput, auth_adapter: AuthAdapterPort, rules: AuthRules
) -> AuthOutput:
    token = auth_adapter.create_token(inp.user.id, rules.tokens.ttl_minutes)
    return AuthOutput(user=inp.user, token_raw=token, success=True)


def run_verify_token(
    inp: VerifyTokenInput, user_repo: UserRepoPort, auth_adapter: AuthAdapterPort
) -> AuthOutput:
    user_id = auth_adapter.validate_token(inp.token)
    if user_id is None:
        return AuthOutput(success=False, error="Invalid token")

    try:
        uid = UUID(user_id)
    except ValueError:
        return AuthOutput(success=False, error="Invalid token payload")

    user = user_repo.get_by_id(uid)
    if not user:
        return AuthOutput(success=False, error="User not found")

    if user.status != "active":
        return AuthOutput(success=False, error="User account is disabled")

    return AuthOutput(user=user, token_raw=inp.token, success=True)
