"""FastAPI dependencies."""
import logging

from fastapi import Header, HTTPException

from surveygenie.services.auth_service import AuthService
from surveygenie.utils.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


async def get_current_user_id(
        authorization: str | None = Header(default=None, alias="Authorization"),
) -> int:
    """Resolve the acting user id from a ``Bearer`` access token."""
    if not authorization:
        raise HTTPException(status_code=401, detail="missing_credentials")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="invalid_authorization_header")

    try:
        return AuthService().user_id_from_token(token)
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


async def ensure_correct_user(
        user_id: int,
        authorization: str | None = Header(default=None, alias="Authorization"),
) -> int:
    """Require the token's user to match the ``user_id`` path parameter."""
    current_user_id = await get_current_user_id(authorization)
    if current_user_id != user_id:
        logger.warning(f"User {current_user_id} attempted to act as user {user_id}")
        raise HTTPException(status_code=401, detail="Unauthorized")
    return current_user_id
