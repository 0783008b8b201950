"""User account endpoints."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from surveygenie.database import get_db
from surveygenie.dependencies import ensure_correct_user
from surveygenie.schemas.user import (
    RegisterRequest,
    UserCreatedResponse,
    UserDeletedResponse,
    UserListResponse,
    UserRecord,
    UserResponse,
    UserUpdate,
)
from surveygenie.services import AuthService, UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


@router.get("/all", response_model=UserListResponse)
async def list_users(db: AsyncSession = Depends(get_db)) -> UserListResponse:
    users = await UserService(db).find_all()
    return UserListResponse(users=[UserRecord.model_validate(user) for user in users])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    _: int = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    user = await UserService(db).get_user(user_id)
    return UserResponse(user=UserRecord.model_validate(user))


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> UserCreatedResponse:
    """Same as /auth/register but echoes the created user."""
    user = await UserService(db).register(**request.model_dump())
    token = AuthService(db).create_access_token(user)
    return UserCreatedResponse(user=UserRecord.model_validate(user), token=token)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    request: UserUpdate,
    _: int = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    user = await UserService(db).update_user(user_id, request.model_dump(exclude_unset=True))
    return UserResponse(user=UserRecord.model_validate(user))


@router.delete("/{user_id}", response_model=UserDeletedResponse)
async def delete_user(
    user_id: int,
    _: int = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db),
) -> UserDeletedResponse:
    await UserService(db).remove_user(user_id)
    return UserDeletedResponse(deleted_user=user_id)
