import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from contact_desk.adapters.auth.crypto import JWTAuthAdapter
from contact_desk.adapters.clock import SystemClock
from contact_desk.adapters.kv.sqlite_store import SQLiteKeyValueStore
from contact_desk.adapters.sqlite.repos import SQLiteUserRepo
from contact_desk.api.auth_utils import SECRET_KEY

# Components are stateless; everything they touch is injected per request.
from contact_desk.components.auth import VerifyTokenInput, run_verify_token
from contact_desk.components.entries import EntryService
from contact_desk.domain.entities import User
from contact_desk.domain.policy import PolicyEngine
from contact_desk.rules.loader import load_rules
from contact_desk.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("CD_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "contact_desk.db")
        self.rules_path = Path(os.environ.get("CD_RULES_PATH", str(self.base_dir / "rules.yaml")))
        self.secret_key = os.environ.get("CD_SECRET_KEY", SECRET_KEY)


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def _load_rules_cached(path: Path) -> Rules:
    return load_rules(path)


def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _load_rules_cached(settings.rules_path)


# --- Repos / Adapters ---
def get_store(settings: Settings = Depends(get_settings)) -> SQLiteKeyValueStore:
    return SQLiteKeyValueStore(settings.db_path)


def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path)


def get_auth_adapter(settings: Settings = Depends(get_settings)) -> JWTAuthAdapter:
    return JWTAuthAdapter(secret_key=settings.secret_key)


def get_clock() -> SystemClock:
    return SystemClock()


# --- Services ---
def get_policy(rules: Rules = Depends(get_rules)) -> PolicyEngine:
    return PolicyEngine(rules)


def get_entry_service(
    store: SQLiteKeyValueStore = Depends(get_store),
    policy: PolicyEngine = Depends(get_policy),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> EntryService:
    """Get entries component service."""
    return EntryService(store=store, policy=policy, time=clock, rules=rules.entries)


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    auth_adapter: JWTAuthAdapter = Depends(get_auth_adapter),
) -> User:
    # Missing and invalid tokens are indistinguishable to the caller.
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = run_verify_token(VerifyTokenInput(token=token), user_repo, auth_adapter)
    if not result.success or result.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return result.user
