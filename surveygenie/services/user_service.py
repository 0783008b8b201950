"""User account service."""
import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from surveygenie.models import User
from surveygenie.utils.exceptions import BadRequestError, NotFoundError, StoreError, UnauthorizedError
from surveygenie.utils.passwords import hash_password, verify_password
from surveygenie.utils.sql import reject_null_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

USER_UPDATE_COLUMNS = {
    "first_name": "first_name",
    "last_name": "last_name",
    "email": "email",
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Service for managing survey author accounts."""

    def __init__(self, db: AsyncSession):
        """Initialize user service.

        Args:
            db: Database session
        """
        self.db = db

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        survey_count: int = 0,
    ) -> User:
        """
        Register a new user.

        Raises:
            BadRequestError: If the email is already registered
        """
        email = normalize_email(email)
        if await self.get_user_by_email(email):
            raise BadRequestError(f"Account already registered to email: {email}")

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            survey_count=survey_count,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise BadRequestError(f"Account already registered to email: {email}") from exc

        await self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user whose email and password match.

        Raises:
            UnauthorizedError: If the email is unknown or the password is wrong
        """
        user = await self.get_user_by_email(email)
        if user and verify_password(password, user.password_hash):
            return user
        logger.info("Rejected login attempt with invalid credentials")
        raise UnauthorizedError("Email and password do not match")

    async def get_user(self, user_id: int) -> User:
        """Raises NotFoundError if the user does not exist."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError(f"No user found with id: {user_id}")
        return user

    async def find_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.last_name, User.id))
        return list(result.scalars().all())

    async def update_user(self, user_id: int, data: Mapping[str, Any]) -> User:
        """
        Update any of first_name, last_name and email.

        Raises:
            BadRequestError: If data is empty, sets a field to null, names another field or reuses a taken email
            NotFoundError: If the user does not exist
        """
        unknown = set(data or {}) - set(USER_UPDATE_COLUMNS)
        if unknown:
            raise BadRequestError(f"Cannot update user fields: {', '.join(sorted(unknown))}")
        reject_null_fields(data, "user")

        data = dict(data or {})
        if data.get("email"):
            data["email"] = normalize_email(data["email"])

        partial = sql_for_partial_update(data, USER_UPDATE_COLUMNS)
        try:
            result = await self.db.execute(
                text(f"UPDATE users SET {partial.set_cols} WHERE id = {partial.next_placeholder}"),
                partial.params(user_id),
            )
        except IntegrityError as exc:
            await self.db.rollback()
            if "email" in data:
                raise BadRequestError(f"Account already registered to email: {data['email']}") from exc
            raise StoreError("Failed to update user.", cause=exc) from exc

        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError(f"No user found with id: {user_id}")
        await self.db.commit()

        refreshed = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return refreshed.scalar_one()

    async def remove_user(self, user_id: int) -> None:
        """Delete a user and, through the store's cascade, their surveys.

        Raises:
            NotFoundError: If the user does not exist
        """
        result = await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()
        if result.rowcount == 0:
            raise NotFoundError(f"No user found with id: {user_id}")
        logger.info(f"Removed user {user_id}")
