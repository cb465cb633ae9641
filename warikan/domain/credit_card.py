"""Pure functions for resolving a month's credit card total.

The ledger API returns every account and the full transaction history;
filtering happens here, in memory.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from warikan.domain.models import Money, YearMonth
from warikan.errors import NotFoundError

DEFAULT_CARD_KEYWORDS = ("楽天", "カード")


def find_active_card(accounts: Iterable[dict[str, Any]], keywords: Sequence[str]) -> dict[str, Any] | None:
    """Find the first active account whose name contains every keyword.

    Args:
        accounts: Account dictionaries from the ledger ({id, name, active}).
        keywords: Tokens that must all appear in the account name.

    Returns:
        The first matching account, or None. Ambiguous matches are not reported.
    """
    for account in accounts:
        name = account.get("name") or ""
        if account.get("active") == 1 and name and all(keyword in name for keyword in keywords):
            return account
    return None


def filter_card_transactions(transactions: Iterable[dict[str, Any]], card_id: str) -> list[dict[str, Any]]:
    """Keep transactions that move money from or to the card account."""
    card_id = str(card_id)
    matched = []
    for txn in transactions:
        from_id = txn.get("from_account_id")
        to_id = txn.get("to_account_id")
        from_str = str(from_id) if from_id is not None else ""
        to_str = str(to_id) if to_id is not None else ""
        if from_str == card_id or to_str == card_id:
            matched.append(txn)
    return matched


def filter_by_year_month(transactions: Iterable[dict[str, Any]], year_month: YearMonth) -> list[dict[str, Any]]:
    """Keep transactions dated (YYYY-MM-DD) within the given month."""
    matched = []
    for txn in transactions:
        parts = str(txn["date"]).split("-")
        if int(parts[0]) == year_month.year and int(parts[1]) == year_month.month:
            matched.append(txn)
    return matched


def sum_amounts(transactions: Iterable[dict[str, Any]]) -> int:
    return sum(int(txn["amount"]) for txn in transactions)


def resolve_monthly_amount(
    accounts: Iterable[dict[str, Any]],
    transactions: Iterable[dict[str, Any]],
    year_month: YearMonth,
    keywords: Sequence[str] = DEFAULT_CARD_KEYWORDS,
) -> Money:
    """Total the card's transactions for a month.

    Args:
        accounts: All ledger accounts.
        transactions: Full ledger transaction history.
        year_month: Target month.
        keywords: Tokens identifying the shared card account.

    Returns:
        Sum of the card's transactions in that month.

    Raises:
        NotFoundError: If no active account matches the keywords.
        ValueError: If the sum is negative.
    """
    card = find_active_card(accounts, keywords)
    if card is None:
        raise NotFoundError("Active card not found")

    card_transactions = filter_card_transactions(transactions, str(card["id"]))
    monthly = filter_by_year_month(card_transactions, year_month)
    return Money(sum_amounts(monthly))
