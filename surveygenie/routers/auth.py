"""Authentication endpoints."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from surveygenie.database import get_db
from surveygenie.schemas.user import LoginRequest, RegisterRequest, TokenResponse
from surveygenie.services import AuthService, UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


@router.post("/token", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> TokenResponse:
    """Exchange email/password for a JWT."""
    _, token = await AuthService(db).login(request.email, request.password)
    return TokenResponse(token=token)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> TokenResponse:
    """Register a new user and return a JWT for them."""
    user = await UserService(db).register(**request.model_dump())
    return TokenResponse(token=AuthService(db).create_access_token(user))
