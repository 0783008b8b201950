"""API routers."""
from surveygenie.routers import auth, health, responses, surveys, users

__all__ = [
    "auth",
    "health",
    "responses",
    "surveys",
    "users",
]
