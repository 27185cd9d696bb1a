"""
Comment endpoints.

PATCH  /api/comments/{comment_id} → adjust votes by inc_votes
DELETE /api/comments/{comment_id} → remove the comment
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from news_api.database import get_store
from news_api.models import ErrorResponse, UpdatedCommentResponse
from news_api.payload import patch_payload
from news_data.comments import remove_comment, update_comment_votes
from news_data.store import QueryExecutor

router = APIRouter(prefix="/comments", tags=["comments"])

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.patch(
    "/{comment_id}",
    response_model=UpdatedCommentResponse,
    responses=_ERRORS,
    summary="Adjust comment votes",
)
def patch_comment(
    comment_id: str,
    payload: Any = Body(None),
    db: QueryExecutor = Depends(get_store),
) -> dict:
    return {"updatedComment": update_comment_votes(db, comment_id, patch_payload(payload))}


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a comment",
)
def delete_comment(comment_id: str, db: QueryExecutor = Depends(get_store)) -> Response:
    remove_comment(db, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
