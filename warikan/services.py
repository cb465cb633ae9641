"""Use cases wiring the pure domain to the ledger API and the row store.

Shared by the chat bot and the CLI.
"""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from warikan.config import Settings, ZaimCredentials
from warikan.dates import billing_cycle_window
from warikan.domain.credit_card import resolve_monthly_amount
from warikan.domain.models import (
    AdvancePayment,
    CycleSettlement,
    ImbalanceResult,
    Money,
    MonthlySettlement,
    Payer,
    YearMonth,
)
from warikan.domain.settlement import calculate_cycle_settlement, calculate_imbalance, calculate_settlement
from warikan.integrations import zaim
from warikan.store import queries

logger = logging.getLogger(__name__)

# (credentials) -> (accounts, transactions)
LedgerFetcher = Callable[[ZaimCredentials], tuple[list[dict[str, Any]], list[dict[str, Any]]]]


def fetch_ledger(credentials: ZaimCredentials) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Fetch all accounts and the full transaction history, in that order."""
    accounts = zaim.get_accounts(credentials)
    transactions = zaim.get_transactions(credentials)
    logger.info("Fetched %d accounts and %d transactions from Zaim", len(accounts), len(transactions))
    return accounts, transactions


def get_card_settlement(
    settings: Settings, year_month: YearMonth, fetcher: LedgerFetcher = fetch_ledger
) -> MonthlySettlement:
    """Total the shared card for a month and split it 50/50.

    Raises:
        ConfigError: If Zaim credentials are missing.
        NotFoundError: If the card account can't be found.
        ApiError: If the ledger API fails.
    """
    accounts, transactions = fetcher(settings.zaim_credentials())
    total = resolve_monthly_amount(accounts, transactions, year_month, settings.card_keywords)
    return calculate_settlement(year_month, total)


def calculate_month_imbalance(settings: Settings, year_month: YearMonth) -> ImbalanceResult:
    """Compare the members' advance payments dated within a calendar month."""
    payments = queries.find_by_year_month(year_month.year, year_month.month, settings.db_path)
    return calculate_imbalance(payments)


def get_cycle_payments(
    settings: Settings, payment_month: YearMonth
) -> tuple[date, date, list[AdvancePayment], CycleSettlement]:
    """Load the billing cycle paid in payment_month and settle it.

    Returns:
        Tuple of (start, end, payments, settlement).
    """
    start, end = billing_cycle_window(payment_month)
    payments = queries.find_by_date_range(start, end, settings.db_path)
    return start, end, payments, calculate_cycle_settlement(payments)


def add_advance_payment(
    settings: Settings, payment_date: date, payer: Payer, amount: Money, memo: str
) -> AdvancePayment:
    payment = queries.add_advance_payment(payment_date, payer, amount, memo, settings.db_path)
    logger.info("Added advance payment %s (%s %s)", payment.id, payer.value, amount.format())
    return payment


def delete_advance_payment(settings: Settings, record_id: str) -> bool:
    deleted = queries.delete_advance_payment(record_id, settings.db_path)
    if deleted:
        logger.info("Deleted advance payment %s", record_id)
    else:
        logger.info("No advance payment with id %s to delete", record_id)
    return deleted
