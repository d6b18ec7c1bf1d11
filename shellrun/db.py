from __future__ import annotations
import os
import sqlite3
from pathlib import Path
from typing import Optional

from .constants import APP_DIRNAME, APP_HOME_ENV, DB_FILENAME, DEFAULTS


def app_dir() -> Path:
    override = os.environ.get(APP_HOME_ENV)
    p = Path(override) if override else Path.home() / APP_DIRNAME
    p.mkdir(parents=True, exist_ok=True)
    return p


def db_path() -> Path:
    return app_dir() / DB_FILENAME


def get_connection() -> sqlite3.Connection:
    conn = sqlite3.connect(db_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    return conn


def init_db() -> None:
    """Create the config table if missing and seed default values."""
    conn = get_connection()
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS config (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )
        for k, v in DEFAULTS.items():
            conn.execute("INSERT OR IGNORE INTO config(key, value) VALUES(?, ?)", (k, v))
        conn.commit()
    finally:
        conn.close()


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    conn = get_connection()
    try:
        row = conn.execute("SELECT value FROM config WHERE key=?", (key,)).fetchone()
    finally:
        conn.close()
    if row:
        return row[0]
    return default


def set_config(key: str, value: str) -> None:
    conn = get_connection()
    try:
        conn.execute(
            "INSERT INTO config(key, value) VALUES(?, ?)\n         ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        conn.commit()
    finally:
        conn.close()


def all_config() -> dict:
    conn = get_connection()
    try:
        rows = conn.execute("SELECT key, value FROM config ORDER BY key").fetchall()
    finally:
        conn.close()
    return {r[0]: r[1] for r in rows}
