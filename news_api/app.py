"""
FastAPI application factory for the news API.

Usage:
    python -m news_api.app                    # Dev server on port 9090
    APP_DB_PATH=/data/nc_news.sqlite python -m news_api.app

OpenAPI docs available at http://localhost:9090/docs after starting.

Structured JSON logging when APP_LOG_FORMAT=json.
CORS middleware with configurable origins via APP_CORS_ORIGINS.
"""

import json
import logging
import sqlite3
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import news_api.database as _db_mod
from news_api.database import get_db_path
from news_api.errors import error_response, register_error_handlers
from news_api.routes import articles, comments, discovery, topics, users
from news_data.config import AppConfig

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ───────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("news_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=logging.INFO, force=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warn on startup when the database file is missing."""
    db_path = get_db_path()
    if not db_path.exists():
        _logger.warning(
            "Database not found at %s. Run 'python -m news_data.seed' first.",
            db_path,
        )
    yield


def create_app(db_path: Path | None = None, config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: Override the database path (useful for testing).
        config: Override the environment-derived configuration.

    Returns:
        Configured FastAPI application instance.
    """
    cfg = config or _cfg
    if db_path is not None:
        _db_mod.set_db_path(db_path)
    elif config is not None:
        _db_mod.set_db_path(config.db_path)

    app = FastAPI(
        title="NC News API",
        summary="REST API over topics, articles, comments and users.",
        description=(
            "## NC News API\n\n"
            "Read topics and users, list articles with filtering and sorting, "
            "post articles and comments, vote on articles and comments, and "
            "delete comments.\n\n"
            "### Article queries\n"
            "- `topic`: any existing topic slug (case-insensitive).\n"
            "- `sort_by`: article_id, title, topic, author, body, created_at, "
            "votes, article_img_url or comment_count (default created_at).\n"
            "- `order`: asc or desc (default desc).\n\n"
            "### Errors\n"
            "Every error is a JSON body `{\"msg\": ...}` with a matching status."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "topics", "description": "Topics articles are filed under."},
            {
                "name": "articles",
                "description": "List, filter, sort, create and vote on articles; read and post their comments.",
            },
            {"name": "comments", "description": "Vote on and delete comments."},
            {"name": "users", "description": "Registered users."},
            {"name": "meta", "description": "Health check and endpoint discovery."},
        ],
    )
    app.state.config = cfg

    # ── CORS middleware ───────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with its status and duration."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as exc:
            _logger.error("unhandled_error method=%s path=%s rid=%s",
                          request.method, path, request_id, exc_info=exc)
            response = error_response(exc)
        duration_ms = (time.monotonic() - start) * 1000

        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, path, response.status_code, duration_ms,
                request_id,
            )
        return response

    # ── Error dispatch ────────────────────────────────────────────────────────
    register_error_handlers(app)

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK if the API is running and can reach the database."""
        db_path = get_db_path()
        if not db_path.exists():
            return JSONResponse(
                status_code=503,
                content={"status": "no_database", "database": str(db_path)},
            )
        try:
            conn = sqlite3.connect(str(db_path))
            try:
                count = conn.execute("SELECT COUNT(*) FROM articles").fetchone()[0]
            finally:
                conn.close()
        except sqlite3.Error as exc:
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "error": str(exc)},
            )
        return {"status": "ok", "database": str(db_path), "articles": count}

    # ── Register routers ──────────────────────────────────────────────────────

    prefix = "/api"
    app.include_router(discovery.router, prefix=prefix)
    app.include_router(topics.router,    prefix=prefix)
    app.include_router(articles.router,  prefix=prefix)
    app.include_router(comments.router,  prefix=prefix)
    app.include_router(users.router,     prefix=prefix)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "news_api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
