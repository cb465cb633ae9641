"""Tests for warikan.store advance-payment queries."""

import sqlite3
from datetime import date
from pathlib import Path

import pytest

from warikan.domain.models import Money, Payer
from warikan.store import (
    add_advance_payment,
    append_row,
    delete_advance_payment,
    find_all,
    find_by_date_range,
    find_by_year_month,
    init_database,
    list_all_rows,
)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "warikan.db"


def make_row(record_id: str, row_date: str, payer: str = "夫", amount: int = 1000) -> dict:
    return {
        "id": record_id,
        "date": row_date,
        "payer": payer,
        "amount": amount,
        "memo": f"memo {record_id}",
        "created_at": "2025-10-15T10:00:00+00:00",
    }


class TestRowStore:
    """Tests for the raw row operations."""

    def test_empty_store(self, db_path: Path) -> None:
        """Should create the schema on first access and return no rows."""
        assert list_all_rows(db_path) == []
        assert db_path.exists()

    def test_init_database_is_idempotent(self, db_path: Path) -> None:
        """Should keep existing rows when initialized again."""
        init_database(db_path)
        append_row(make_row("1", "2025-10-15"), db_path)
        init_database(db_path)

        assert len(list_all_rows(db_path)) == 1

    def test_rows_keep_insertion_order(self, db_path: Path) -> None:
        """Should return rows in the order they were appended."""
        append_row(make_row("b", "2025-10-20"), db_path)
        append_row(make_row("a", "2025-10-01"), db_path)

        rows = list_all_rows(db_path)

        assert [row["id"] for row in rows] == ["b", "a"]
        assert set(rows[0]) == {"id", "date", "payer", "amount", "memo", "created_at"}

    def test_duplicate_id_rejected(self, db_path: Path) -> None:
        """Should refuse a second row with the same id."""
        append_row(make_row("1", "2025-10-15"), db_path)

        with pytest.raises(sqlite3.IntegrityError):
            append_row(make_row("1", "2025-10-16"), db_path)


class TestAdvancePaymentQueries:
    """Tests for the AdvancePayment repository functions."""

    def test_find_all_maps_rows(self, db_path: Path) -> None:
        """Should convert rows into AdvancePayment values."""
        append_row(make_row("1", "2025-10-15", "夫", 1000), db_path)
        append_row(make_row("2", "2025-10-16", "妻", 2000), db_path)

        payments = find_all(db_path)

        assert len(payments) == 2
        assert payments[0].id == "1"
        assert payments[0].payer == Payer.HUSBAND
        assert payments[0].amount == Money(1000)
        assert payments[0].date == date(2025, 10, 15)
        assert payments[1].payer == Payer.WIFE

    def test_find_by_year_month(self, db_path: Path) -> None:
        """Should keep only the requested calendar month."""
        append_row(make_row("1", "2025-10-01"), db_path)
        append_row(make_row("2", "2025-10-31"), db_path)
        append_row(make_row("3", "2025-11-01"), db_path)
        append_row(make_row("4", "2024-10-15"), db_path)

        payments = find_by_year_month(2025, 10, db_path)

        assert [p.id for p in payments] == ["1", "2"]

    def test_find_by_date_range_is_inclusive(self, db_path: Path) -> None:
        """Should include records on both boundary dates."""
        append_row(make_row("before", "2025-08-25"), db_path)
        append_row(make_row("start", "2025-08-26"), db_path)
        append_row(make_row("middle", "2025-09-10"), db_path)
        append_row(make_row("end", "2025-09-25"), db_path)
        append_row(make_row("after", "2025-09-26"), db_path)

        payments = find_by_date_range(date(2025, 8, 26), date(2025, 9, 25), db_path)

        assert [p.id for p in payments] == ["start", "middle", "end"]

    def test_add_generates_unique_ids(self, db_path: Path) -> None:
        """Should store new payments under distinct generated ids."""
        first = add_advance_payment(date(2025, 10, 15), Payer.HUSBAND, Money(1000), "ランチ代", db_path)
        second = add_advance_payment(date(2025, 10, 15), Payer.HUSBAND, Money(1000), "ランチ代", db_path)

        assert first.id != second.id
        rows = list_all_rows(db_path)
        assert rows[0]["id"] == first.id
        assert rows[0]["date"] == "2025-10-15"
        assert rows[0]["payer"] == "夫"
        assert rows[0]["amount"] == 1000
        assert rows[0]["created_at"]

    def test_delete(self, db_path: Path) -> None:
        """Should remove the matching record only."""
        kept = add_advance_payment(date(2025, 10, 15), Payer.WIFE, Money(500), "keep", db_path)
        removed = add_advance_payment(date(2025, 10, 16), Payer.WIFE, Money(700), "remove", db_path)

        assert delete_advance_payment(removed.id, db_path) is True
        assert [p.id for p in find_all(db_path)] == [kept.id]

    def test_delete_unknown_id_is_noop(self, db_path: Path) -> None:
        """Should do nothing for an id that doesn't exist."""
        add_advance_payment(date(2025, 10, 15), Payer.WIFE, Money(500), "keep", db_path)

        assert delete_advance_payment("missing", db_path) is False
        assert len(find_all(db_path)) == 1
