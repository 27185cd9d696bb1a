"""
GET /api/topics endpoint.
"""

from fastapi import APIRouter, Depends

from news_api.database import get_store
from news_api.models import TopicsResponse
from news_data.store import QueryExecutor
from news_data.topics import fetch_topics

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("", response_model=TopicsResponse, summary="List topics")
def get_topics(db: QueryExecutor = Depends(get_store)) -> dict:
    """Return every topic."""
    return {"topics": fetch_topics(db)}
