# app/db/db_config.py

import sqlite3
from pathlib import Path
from typing import Optional, Union

from app.core.app_config import PILL_DB_PATH


def get_sqlite_connection(path: Optional[Union[str, Path]] = None) -> sqlite3.Connection:
    """
    Create and configure SQLite connection with recommended PRAGMA settings.
    Falls back to PILL_DB_PATH when no path is given.
    """
    db_path = Path(path) if path is not None else PILL_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path), check_same_thread=False)

    # Performance & concurrency settings
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA busy_timeout=5000;")

    return conn
