"""GET /api endpoint.

Returns the static map of available endpoints, their query parameters and
example responses, read from endpoints.json next to the package.
"""

import json
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter

router = APIRouter(tags=["meta"])

ENDPOINTS_FILE = Path(__file__).resolve().parent.parent / "endpoints.json"


@lru_cache(maxsize=1)
def load_endpoints() -> dict:
    return json.loads(ENDPOINTS_FILE.read_text(encoding="utf-8"))


@router.get("", summary="Describe available endpoints")
def get_endpoints() -> dict:
    """Return a description of every endpoint the API serves."""
    return {"endpoints": load_endpoints()}
