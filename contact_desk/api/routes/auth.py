import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from contact_desk.adapters.auth.crypto import JWTAuthAdapter
from contact_desk.adapters.clock import SystemClock
from contact_desk.adapters.sqlite.repos import SQLiteUserRepo
from contact_desk.api.deps import (
    get_auth_adapter,
    get_clock,
    get_current_user,
    get_rules,
    get_user_repo,
)
from contact_desk.api.schemas import SignupRequest, SignupResponse, Token, UserResponse
from contact_desk.components.auth import (
    IssueTokenInput,
    LoginInput,
    SignupInput,
    run_issue_token,
    run_login,
    run_signup,
)
from contact_desk.domain.entities import User
from contact_desk.domain.errors import StoreError
from contact_desk.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=SignupResponse)
def signup(
    data: SignupRequest,
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    auth_adapter: JWTAuthAdapter = Depends(get_auth_adapter),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> SignupResponse:
    """Create a user with a role. The account is confirmed immediately."""
    try:
        result = run_signup(
            SignupInput(email=data.email, password=data.password, name=data.name, role=data.role),
            user_repo,
            auth_adapter,
            clock,
            rules.auth,
        )
    except StoreError:
        logger.exception("Signup failed for %s", data.email)
        raise HTTPException(status_code=500, detail="Signup failed") from None

    if not result.success or result.user is None:
        raise HTTPException(status_code=400, detail=result.error or "Signup failed")

    logger.info("User %s signed up with role %s", result.user.id, result.user.role)
    return SignupResponse(user=UserResponse.from_user(result.user))


@router.post("/auth/login", response_model=Token)
def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    auth_adapter: JWTAuthAdapter = Depends(get_auth_adapter),
    rules: Rules = Depends(get_rules),
) -> Token:
    """Authenticate with email (sent as ``username``) and password."""
    result = run_login(
        LoginInput(email=form_data.username, password=form_data.password),
        user_repo,
        auth_adapter,
    )

    if not result.success or result.user is None:
        if result.error == "User account is disabled":
            raise HTTPException(status_code=400, detail=result.error)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.error or "Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    issued = run_issue_token(IssueTokenInput(user=result.user), auth_adapter, rules.auth)
    assert issued.token_raw is not None
    return Token(access_token=issued.token_raw, token_type="bearer")


@router.get("/auth/me", response_model=UserResponse)
def read_users_me(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    """Get current user info, including the role the client routes on."""
    return UserResponse.from_user(current_user)
