"""
User endpoints.

GET /api/users             → all users
GET /api/users/{username}  → one user
"""

from fastapi import APIRouter, Depends

from news_api.database import get_store
from news_api.models import ErrorResponse, UserResponse, UsersResponse
from news_data.store import QueryExecutor
from news_data.users import fetch_user, fetch_users

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UsersResponse, summary="List users")
def get_users(db: QueryExecutor = Depends(get_store)) -> dict:
    """Return every user."""
    return {"users": fetch_users(db)}


@router.get(
    "/{username}",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a user",
)
def get_user(username: str, db: QueryExecutor = Depends(get_store)) -> dict:
    """Return one user by username.

    All-digit usernames are rejected with 400; unknown users give 404.
    """
    return {"user": fetch_user(db, username)}
