from datetime import timedelta
from typing import Any

from contact_desk.api.auth_utils import (
    SECRET_KEY,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class JWTAuthAdapter:
    """Auth adapter that issues signed JWT bearer tokens and argon2 password hashes."""

    def __init__(self, secret_key: str = SECRET_KEY) -> None:
        self._secret_key = secret_key

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, plain: str, hashed: str) -> bool:
        return verify_password(plain, hashed)

    def create_token(self, user_id: Any, ttl_minutes: int) -> str:
        return create_access_token(
            {"sub": str(user_id)},
            timedelta(minutes=ttl_minutes),
            secret_key=self._secret_key,
        )

    def validate_token(self, token: str) -> str | None:
        """Return the user id the token was issued for, or None if invalid/expired."""
        payload = decode_access_token(token, secret_key=self._secret_key)
        if not payload:
            return None
        sub = payload.get("sub")
        return sub if isinstance(sub, str) else None
