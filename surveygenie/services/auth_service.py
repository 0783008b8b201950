"""Authentication and token helpers."""
from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from surveygenie.config import get_settings
from surveygenie.models import User
from surveygenie.services.user_service import UserService
from surveygenie.utils.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class AuthService:
    """Service responsible for credential checks and JWT issuance."""

    def __init__(self, db: AsyncSession | None = None, *, user_service: UserService | None = None):
        self.db = db
        self.settings = get_settings()
        self.user_service = user_service or (UserService(db) if db is not None else None)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Authenticate by email/password and issue an access token."""
        if self.user_service is None:
            raise RuntimeError("AuthService.login requires a database session")
        user = await self.user_service.authenticate(email, password)
        return user, self.create_access_token(user)

    def _access_token_payload(self, user: User) -> dict[str, Any]:
        expire = datetime.now(UTC) + timedelta(minutes=self.settings.access_token_exp_minutes)
        return {
            "sub": str(user.id),
            "first_name": user.first_name,
            "exp": int(expire.timestamp()),
        }

    def create_access_token(self, user: User) -> str:
        payload = self._access_token_payload(user)
        return jwt.encode(payload, self.settings.secret_key, algorithm=self.settings.jwt_algorithm)

    def decode_access_token(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError("token_expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError("invalid_token") from exc

    def user_id_from_token(self, token: str) -> int:
        """Decode a token and return the user id it was issued for."""
        payload = self.decode_access_token(token)
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UnauthorizedError("invalid_token") from exc
