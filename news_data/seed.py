"""
Create the news database schema and load seed data.

Seed data is a JSON object with four lists: ``topics``, ``users``,
``articles`` and ``comments``.  Article and comment ids are assigned in list
order starting at 1; comments refer to articles by ``article_id``.

Usage:
    python -m news_data.seed --data data/dev.json
    python -m news_data.seed --db /path/to/nc_news.sqlite --data data/dev.json
"""

import argparse
import json
import logging
import sqlite3
import sys
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("nc_news.sqlite")

_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"

SCHEMA_SQL = f"""
DROP TABLE IF EXISTS comments;
DROP TABLE IF EXISTS articles;
DROP TABLE IF EXISTS users;
DROP TABLE IF EXISTS topics;

CREATE TABLE topics (
    slug TEXT PRIMARY KEY,
    description TEXT NOT NULL
);

CREATE TABLE users (
    username TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    avatar_url TEXT
);

CREATE TABLE articles (
    article_id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    topic TEXT NOT NULL REFERENCES topics(slug),
    author TEXT NOT NULL REFERENCES users(username),
    body TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT ({_NOW}),
    votes INTEGER NOT NULL DEFAULT 0 CHECK (typeof(votes) = 'integer'),
    article_img_url TEXT
);

CREATE TABLE comments (
    comment_id INTEGER PRIMARY KEY AUTOINCREMENT,
    body TEXT NOT NULL,
    article_id INTEGER NOT NULL REFERENCES articles(article_id) ON DELETE CASCADE,
    author TEXT NOT NULL REFERENCES users(username),
    votes INTEGER NOT NULL DEFAULT 0 CHECK (typeof(votes) = 'integer'),
    created_at TEXT NOT NULL DEFAULT ({_NOW})
);

CREATE INDEX idx_articles_topic ON articles(topic);
CREATE INDEX idx_comments_article ON comments(article_id);
"""


def seed(conn: sqlite3.Connection, data: dict[str, list[dict[str, Any]]]) -> dict[str, int]:
    """Drop and recreate all tables, then insert *data*.

    Returns a summary dict with counts of rows inserted per table.
    """
    conn.executescript(SCHEMA_SQL)
    conn.executemany(
        "INSERT INTO topics (slug, description) VALUES (?, ?)",
        [(t["slug"], t["description"]) for t in data.get("topics", [])],
    )
    conn.executemany(
        "INSERT INTO users (username, name, avatar_url) VALUES (?, ?, ?)",
        [(u["username"], u["name"], u.get("avatar_url")) for u in data.get("users", [])],
    )
    conn.executemany(
        "INSERT INTO articles "
        "(title, topic, author, body, created_at, votes, article_img_url) "
        f"VALUES (?, ?, ?, ?, COALESCE(?, {_NOW}), ?, ?)",
        [
            (a["title"], a["topic"], a["author"], a["body"],
             a.get("created_at"), a.get("votes", 0), a.get("article_img_url"))
            for a in data.get("articles", [])
        ],
    )
    conn.executemany(
        "INSERT INTO comments (body, article_id, author, votes, created_at) "
        f"VALUES (?, ?, ?, ?, COALESCE(?, {_NOW}))",
        [
            (c["body"], c["article_id"], c["author"],
             c.get("votes", 0), c.get("created_at"))
            for c in data.get("comments", [])
        ],
    )
    conn.commit()
    summary = {table: len(data.get(table, [])) for table in
               ("topics", "users", "articles", "comments")}
    logger.info("seeded %s", summary)
    return summary


def create_database(db_path: Path, data: dict[str, list[dict[str, Any]]]) -> dict[str, int]:
    """Create (or reset) the database at *db_path* and seed it."""
    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute("PRAGMA foreign_keys=ON")
        return seed(conn, data)
    finally:
        conn.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create the news database and load seed data."
    )
    parser.add_argument(
        "--db",
        default=str(DEFAULT_DB_PATH),
        help="Path to the SQLite database (default: nc_news.sqlite)",
    )
    parser.add_argument(
        "--data",
        required=True,
        help="Path to a JSON file with topics, users, articles and comments",
    )
    args = parser.parse_args(argv)

    data_path = Path(args.data)
    if not data_path.exists():
        print(f"Error: seed data not found at {data_path}", file=sys.stderr)
        return 1

    try:
        data = json.loads(data_path.read_text(encoding="utf-8"))
        summary = create_database(Path(args.db), data)
    except (json.JSONDecodeError, KeyError, sqlite3.Error) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for table, count in summary.items():
        print(f"  Inserted {count:,} rows into {table}")
    print("\nSeed complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
