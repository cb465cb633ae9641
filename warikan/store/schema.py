"""Database schema initialization."""

import os
import sqlite3
from pathlib import Path

# Fixed column order of the advance-payment row store.
ADVANCE_PAYMENT_COLUMNS = ("id", "date", "payer", "amount", "memo", "created_at")


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "warikan" / "warikan.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def create_schema(conn: sqlite3.Connection) -> None:
    """Create tables and indexes if they don't exist yet.

    Safe to call on every connection.
    """
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS advance_payments (
            id TEXT PRIMARY KEY,
            date TEXT NOT NULL,
            payer TEXT NOT NULL,
            amount INTEGER NOT NULL CHECK (amount >= 0),
            memo TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
    """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_advance_date ON advance_payments(date)")


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        create_schema(conn)
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
