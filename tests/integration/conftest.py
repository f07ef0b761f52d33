from pathlib import Path
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from contact_desk.adapters.auth.crypto import JWTAuthAdapter
from contact_desk.adapters.sqlite.migrator import SQLiteMigrator
from contact_desk.adapters.sqlite.repos import SQLiteUserRepo
from contact_desk.api.deps import Settings, get_settings
from contact_desk.api.main import app
from contact_desk.domain.entities import User

RULES_PATH = Path(__file__).resolve().parent.parent.parent / "rules.yaml"
TEST_SECRET = "test-secret-key"


@pytest.fixture
def db_path(tmp_path):
    """Fresh migrated database per test."""
    path = str(tmp_path / "contact_desk.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def api_settings(db_path, tmp_path):
    settings = Settings()
    settings.data_dir = tmp_path
    settings.db_path = db_path
    settings.rules_path = RULES_PATH
    settings.secret_key = TEST_SECRET
    return settings


@pytest.fixture
def client(api_settings):
    """Test client bound to the temporary database."""
    app.dependency_overrides[get_settings] = lambda: api_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_repo(db_path):
    return SQLiteUserRepo(db_path)


@pytest.fixture
def make_user(user_repo):
    """Persist a user and return (user, auth headers)."""

    def _make(email: str, role: str = "user") -> tuple[User, dict[str, str]]:
        user = User(
            id=uuid4(),
            email=email,
            display_name=email.split("@")[0],
            password_hash="not-a-real-hash",
            role=role,
        )
        user_repo.save(user)
        token = JWTAuthAdapter(secret_key=TEST_SECRET).create_token(user.id, 60)
        return user, {"Authorization": f"Bearer {token}"}

    return _make
