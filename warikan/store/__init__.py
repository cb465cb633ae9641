"""Database store layer - provides persistence for advance payments.

This module re-exports all public database functions for easy importing.
"""

from warikan.store.queries import (
    add_advance_payment,
    append_row,
    delete_advance_payment,
    delete_row_by_id,
    find_all,
    find_by_date_range,
    find_by_year_month,
    list_all_rows,
)
from warikan.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Row store
    "append_row",
    "delete_row_by_id",
    "list_all_rows",
    # Advance payments
    "add_advance_payment",
    "delete_advance_payment",
    "find_all",
    "find_by_date_range",
    "find_by_year_month",
]
