"""
Pydantic response models for the API.

Optional fields default to None so that rows with NULL columns still
validate.  Each response wraps its payload in a named field (``topics``,
``requestedArticle``, ...), matching what clients of the news API expect.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ── Entities ──────────────────────────────────────────────────────────────────

class TopicOut(BaseModel):
    """A topic articles are filed under."""
    slug: str = Field(..., description="Unique topic identifier", examples=["cats"])
    description: str = Field(..., description="What the topic covers", examples=["Not dogs"])


class UserOut(BaseModel):
    """A registered user."""
    username: str = Field(..., description="Unique username", examples=["butter_bridge"])
    name: str = Field(..., description="Display name", examples=["jonny"])
    avatar_url: str | None = Field(None, description="Avatar image URL")


class ArticleSummaryOut(BaseModel):
    """An article as listed in a collection (no body)."""
    article_id: int = Field(..., description="Unique article ID", examples=[1])
    title: str = Field(..., description="Article title", examples=["Living in the shadow of a great man"])
    topic: str = Field(..., description="Topic slug", examples=["mitch"])
    author: str = Field(..., description="Author username", examples=["butter_bridge"])
    created_at: str = Field(..., description="ISO-8601 creation timestamp", examples=["2020-07-09T20:11:00.000Z"])
    votes: int = Field(..., description="Net vote count (may be negative)", examples=[100])
    article_img_url: str | None = Field(None, description="Cover image URL")
    comment_count: int = Field(..., description="Number of comments on the article", examples=[11])


class ArticleOut(BaseModel):
    """A full article row."""
    article_id: int = Field(..., description="Unique article ID", examples=[1])
    title: str = Field(..., description="Article title")
    topic: str = Field(..., description="Topic slug", examples=["mitch"])
    author: str = Field(..., description="Author username", examples=["butter_bridge"])
    body: str = Field(..., description="Article text")
    created_at: str = Field(..., description="ISO-8601 creation timestamp")
    votes: int = Field(..., description="Net vote count (may be negative)", examples=[100])
    article_img_url: str | None = Field(None, description="Cover image URL")


class ArticleDetailOut(ArticleOut):
    """A full article row with its live comment count."""
    comment_count: int = Field(..., description="Number of comments on the article", examples=[11])


class CommentOut(BaseModel):
    """A comment on an article."""
    comment_id: int = Field(..., description="Unique comment ID", examples=[1])
    body: str = Field(..., description="Comment text")
    article_id: int = Field(..., description="ID of the article commented on", examples=[9])
    author: str = Field(..., description="Author username", examples=["butter_bridge"])
    votes: int = Field(..., description="Net vote count (may be negative)", examples=[16])
    created_at: str = Field(..., description="ISO-8601 creation timestamp")


# ── Response wrappers ─────────────────────────────────────────────────────────

class _Wrapper(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TopicsResponse(_Wrapper):
    topics: list[TopicOut]


class ArticlesResponse(_Wrapper):
    articles: list[ArticleSummaryOut]


class RequestedArticleResponse(_Wrapper):
    requested_article: ArticleDetailOut = Field(..., alias="requestedArticle")


class ArticlePostedResponse(_Wrapper):
    article_posted: ArticleDetailOut = Field(..., alias="articlePosted")


class UpdatedArticleResponse(_Wrapper):
    updated_article: ArticleOut = Field(..., alias="updatedArticle")


class CommentsResponse(_Wrapper):
    comments: list[CommentOut]


class CommentPostedResponse(_Wrapper):
    comment_posted: CommentOut = Field(..., alias="commentPosted")


class UpdatedCommentResponse(_Wrapper):
    updated_comment: CommentOut = Field(..., alias="updatedComment")


class UsersResponse(_Wrapper):
    users: list[UserOut]


class UserResponse(_Wrapper):
    user: UserOut


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    msg: str = Field(..., description="Client-facing error message", examples=["Bad request"])
