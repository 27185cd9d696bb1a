"""
Article endpoints.

GET   /api/articles                       → filtered, sorted collection
POST  /api/articles                       → create an article
GET   /api/articles/{article_id}          → one article with comment count
PATCH /api/articles/{article_id}          → adjust votes by inc_votes
GET   /api/articles/{article_id}/comments → comments, most recent first
POST  /api/articles/{article_id}/comments → add a comment

Path ids are taken as strings and handed to the store unchanged; a
non-integer id is rejected by the store and answered with 400.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status

from news_api.database import get_store
from news_api.models import (
    ArticlePostedResponse,
    ArticlesResponse,
    CommentPostedResponse,
    CommentsResponse,
    ErrorResponse,
    RequestedArticleResponse,
    UpdatedArticleResponse,
)
from news_api.payload import get_config, insert_payload, patch_payload
from news_data.articles import (
    fetch_article_by_id,
    fetch_articles,
    insert_article,
    update_article_votes,
)
from news_data.comments import fetch_comments, insert_comment
from news_data.config import AppConfig
from news_data.store import QueryExecutor

router = APIRouter(prefix="/articles", tags=["articles"])

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=ArticlesResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List articles",
)
def get_articles(
    topic: str | None = Query(None, description="Filter by topic slug (case-insensitive)"),
    sort_by: str | None = Query(None, description="Column to sort by (default created_at)"),
    order: str | None = Query(None, description="asc or desc (default desc)"),
    db: QueryExecutor = Depends(get_store),
) -> dict:
    """Return articles with comment counts.

    An unknown topic, sort column or order gives 400 "Bad request".  A known
    topic with no articles gives an empty list.
    """
    return {"articles": fetch_articles(db, topic=topic, sort_by=sort_by, order=order)}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ArticlePostedResponse,
    responses={204: {"description": "Empty body, nothing created"}, **_ERRORS},
    summary="Create an article",
)
def post_article(
    payload: Any = Body(None),
    config: AppConfig = Depends(get_config),
    db: QueryExecutor = Depends(get_store),
):
    """Create an article from author, title, body, topic and article_img_url."""
    body = insert_payload(payload, config)
    if body is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return {"articlePosted": insert_article(db, body)}


@router.get(
    "/{article_id}",
    response_model=RequestedArticleResponse,
    responses=_ERRORS,
    summary="Get an article",
)
def get_article_by_id(article_id: str, db: QueryExecutor = Depends(get_store)) -> dict:
    """Return one article including body and comment_count."""
    return {"requestedArticle": fetch_article_by_id(db, article_id)}


@router.patch(
    "/{article_id}",
    response_model=UpdatedArticleResponse,
    responses=_ERRORS,
    summary="Adjust article votes",
)
def patch_article(
    article_id: str,
    payload: Any = Body(None),
    db: QueryExecutor = Depends(get_store),
) -> dict:
    """Add inc_votes (positive or negative) to the article's votes."""
    return {"updatedArticle": update_article_votes(db, article_id, patch_payload(payload))}


@router.get(
    "/{article_id}/comments",
    response_model=CommentsResponse,
    responses=_ERRORS,
    summary="List an article's comments",
)
def get_comments(article_id: str, db: QueryExecutor = Depends(get_store)) -> dict:
    """Return the article's comments, most recent first."""
    return {"comments": fetch_comments(db, article_id)}


@router.post(
    "/{article_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=CommentPostedResponse,
    responses={204: {"description": "Empty body, nothing created"}, **_ERRORS},
    summary="Comment on an article",
)
def post_comment(
    article_id: str,
    payload: Any = Body(None),
    config: AppConfig = Depends(get_config),
    db: QueryExecutor = Depends(get_store),
):
    """Add a comment from username and body."""
    body = insert_payload(payload, config)
    if body is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return {"commentPosted": insert_comment(db, article_id, body)}
