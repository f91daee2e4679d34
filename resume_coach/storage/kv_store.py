from __future__ import annotations

import os
import sqlite3
import threading
from datetime import datetime, timezone

from resume_coach.core.config import settings

_conn: sqlite3.Connection | None = None
_conn_path: str | None = None
_conn_lock = threading.Lock()


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _db_path() -> str:
    return os.getenv("KV_DB_PATH") or settings.kv_db_path


def _get_connection() -> sqlite3.Connection:
    global _conn, _conn_path
    with _conn_lock:
        db_path = _db_path()
        if _conn is not None and _conn_path == db_path:
            return _conn
        if _conn is not None:
            _conn.close()

        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        _conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        _conn_path = db_path
        _conn.execute("PRAGMA journal_mode=WAL;")
        _conn.execute("PRAGMA synchronous=NORMAL;")
        _conn.execute("PRAGMA busy_timeout=5000;")
        _conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_entries (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        return _conn


def init_store() -> None:
    _get_connection()


def close_store() -> None:
    global _conn, _conn_path
    with _conn_lock:
        if _conn is not None:
            _conn.close()
        _conn = None
        _conn_path = None


def kv_get(key: str) -> str | None:
    conn = _get_connection()
    with _conn_lock:
        row = conn.execute("SELECT value FROM kv_entries WHERE key = ?", (key,)).fetchone()
    return row[0] if row else None


def kv_set(key: str, value: str) -> None:
    if not key:
        raise ValueError("Storage key must not be empty.")
    conn = _get_connection()
    with _conn_lock:
        conn.execute(
            """
            INSERT INTO kv_entries (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
            """,
            (key, value, _utc_now()),
        )


def kv_delete(key: str) -> bool:
    conn = _get_connection()
    with _conn_lock:
        cur = conn.execute("DELETE FROM kv_entries WHERE key = ?", (key,))
    return cur.rowcount > 0


def kv_list(pattern: str = "*") -> list[str]:
    """List keys matching a glob pattern such as ``resume:*``."""
    conn = _get_connection()
    with _conn_lock:
        rows = conn.execute(
            "SELECT key FROM kv_entries WHERE key GLOB ? ORDER BY key",
            (pattern or "*",),
        ).fetchall()
    return [row[0] for row in rows]


def kv_clear() -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM kv_entries")
