"""Request body handling shared by the insert endpoints."""

from typing import Any

from fastapi import Request

from news_data.errors import BadRequest
from news_data.config import AppConfig


def get_config(request: Request) -> AppConfig:
    """FastAPI dependency: the AppConfig the app was created with."""
    return request.app.state.config


def insert_payload(payload: Any, config: AppConfig) -> dict[str, Any] | None:
    """Normalize an insert body.

    Returns:
        The body as a dict, or None when the body is empty and the app is
        configured to answer empty bodies with 204 and write nothing.

    Raises:
        BadRequest: Empty body while empty_body_no_op is off, or a body that
            is not a JSON object.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise BadRequest("Bad request")
    if not payload:
        if config.empty_body_no_op:
            return None
        raise BadRequest("expected body key missing")
    return payload


def patch_payload(payload: Any) -> dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise BadRequest("Bad request")
    return payload
