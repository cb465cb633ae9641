"""Pure functions for splitting and settling household payments.

This module contains the functional core for settlement:
- No I/O operations (no ledger API, no row store, no chat)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are whole yen (Money).
"""

from collections.abc import Iterable

from warikan.domain.models import (
    AdvancePayment,
    CycleSettlement,
    ImbalanceResult,
    Money,
    MonthlySettlement,
    Payer,
    YearMonth,
)


def calculate_settlement(year_month: YearMonth, total: Money) -> MonthlySettlement:
    """Split a month's card total evenly between the two members.

    Both halves are floored, so an odd total leaves 1 yen unassigned.
    The remainder is dropped each month and never carried over.

    Args:
        year_month: Month being settled.
        total: Card total for the month.

    Returns:
        MonthlySettlement with identical husband and wife amounts.
    """
    half = total.divide(2)
    return MonthlySettlement(
        year_month=year_month,
        credit_card_total=total,
        husband_amount=half,
        wife_amount=half,
    )


def totals_by_payer(payments: Iterable[AdvancePayment]) -> tuple[Money, Money]:
    """Sum advance payments per member.

    Returns:
        Tuple of (husband_total, wife_total).
    """
    totals = {Payer.HUSBAND: 0, Payer.WIFE: 0}
    for payment in payments:
        totals[payment.payer] += payment.amount.amount
    return Money(totals[Payer.HUSBAND]), Money(totals[Payer.WIFE])


def lesser_payer(husband_total: Money, wife_total: Money) -> Payer | None:
    """Return the member who paid less, or None on a tie."""
    if husband_total > wife_total:
        return Payer.WIFE
    if wife_total > husband_total:
        return Payer.HUSBAND
    return None


def calculate_imbalance(payments: Iterable[AdvancePayment]) -> ImbalanceResult:
    """Calculate the full difference between the members' advance payments.

    The member with the smaller total is the one who owes.

    Args:
        payments: Advance payments for the period.

    Returns:
        ImbalanceResult with settlement_payer None when totals are equal.
    """
    husband_total, wife_total = totals_by_payer(payments)
    return ImbalanceResult(
        husband_total=husband_total,
        wife_total=wife_total,
        settlement_amount=Money(abs(husband_total.amount - wife_total.amount)),
        settlement_payer=lesser_payer(husband_total, wife_total),
    )


def calculate_cycle_settlement(payments: Iterable[AdvancePayment]) -> CycleSettlement:
    """Calculate the transfer that evens out a billing cycle.

    The debtor pays half the difference (floored) to the other member.

    Args:
        payments: Advance payments inside the billing-cycle window.

    Returns:
        CycleSettlement with debtor None when totals are equal.
    """
    imbalance = calculate_imbalance(payments)
    return CycleSettlement(
        husband_total=imbalance.husband_total,
        wife_total=imbalance.wife_total,
        half_difference=imbalance.settlement_amount.divide(2),
        debtor=imbalance.settlement_payer,
    )
