"""Advance-payment row store and repository queries.

Rows are read wholesale and filtered in memory; there is no caching.
"""

import sqlite3
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from warikan.domain.models import AdvancePayment, Money, Payer
from warikan.store.schema import ADVANCE_PAYMENT_COLUMNS, create_schema, get_db_path

_COLUMN_LIST = ", ".join(ADVANCE_PAYMENT_COLUMNS)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory and schema in place.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    create_schema(conn)
    return conn


def list_all_rows(db_path: Path | None = None) -> list[dict[str, Any]]:
    """Get every advance-payment row in insertion order.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of row dictionaries (id, date, payer, amount, memo, created_at).

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {_COLUMN_LIST} FROM advance_payments ORDER BY rowid")
        return [dict(row) for row in cursor.fetchall()]


def append_row(row: dict[str, Any], db_path: Path | None = None) -> None:
    """Append one row to the store.

    Args:
        row: Row dictionary with all six columns.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.IntegrityError: If the id already exists.
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                f"INSERT INTO advance_payments ({_COLUMN_LIST}) VALUES (?, ?, ?, ?, ?, ?)",
                tuple(row[column] for column in ADVANCE_PAYMENT_COLUMNS),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_row_by_id(record_id: str, db_path: Path | None = None) -> bool:
    """Delete the row with the given id.

    Args:
        record_id: Row id.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a row was deleted, False if no row had that id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM advance_payments WHERE id = ?", (record_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def row_to_advance_payment(row: dict[str, Any]) -> AdvancePayment:
    """Convert a store row into an AdvancePayment.

    Raises:
        ValueError: If the row holds an unknown payer, bad date or negative amount.
    """
    return AdvancePayment(
        id=str(row["id"]),
        date=date.fromisoformat(str(row["date"])),
        payer=Payer.from_string(str(row["payer"])),
        amount=Money(int(row["amount"])),
        memo=str(row["memo"]),
    )


def advance_payment_to_row(payment: AdvancePayment) -> dict[str, Any]:
    """Convert an AdvancePayment into a store row stamped with the current time."""
    return {
        "id": payment.id,
        "date": payment.formatted_date(),
        "payer": payment.payer.value,
        "amount": payment.amount.amount,
        "memo": payment.memo,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }


def find_all(db_path: Path | None = None) -> list[AdvancePayment]:
    return [row_to_advance_payment(row) for row in list_all_rows(db_path)]


def find_by_year_month(year: int, month: int, db_path: Path | None = None) -> list[AdvancePayment]:
    """Get advance payments dated within a calendar month."""
    return [payment for payment in find_all(db_path) if payment.is_in_month(year, month)]


def find_by_date_range(start: date, end: date, db_path: Path | None = None) -> list[AdvancePayment]:
    """Get advance payments dated between start and end, both inclusive."""
    return [payment for payment in find_all(db_path) if start <= payment.date <= end]


def generate_id() -> str:
    return uuid.uuid4().hex


def add_advance_payment(
    payment_date: date, payer: Payer, amount: Money, memo: str, db_path: Path | None = None
) -> AdvancePayment:
    """Record a new advance payment under a freshly generated id.

    Args:
        payment_date: Date the money was spent.
        payer: Member who paid.
        amount: Amount paid.
        memo: Free-text description.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The stored AdvancePayment.
    """
    payment = AdvancePayment(id=generate_id(), date=payment_date, payer=payer, amount=amount, memo=memo)
    append_row(advance_payment_to_row(payment), db_path)
    return payment


def delete_advance_payment(record_id: str, db_path: Path | None = None) -> bool:
    """Delete an advance payment. Deleting an unknown id is a no-op."""
    return delete_row_by_id(record_id, db_path)
