"""Advance payment commands (list, add, delete, balance)."""

import sqlite3
import sys

import pandas as pd
from rich.console import Console
from rich.table import Table

from warikan.commands.card import resolve_month
from warikan.config import load_settings
from warikan.dates import month_range
from warikan.domain.commands import parse_amount
from warikan.domain.models import AdvancePayment, Money, Payer
from warikan.services import (
    add_advance_payment,
    calculate_month_imbalance,
    delete_advance_payment,
    get_cycle_payments,
)
from warikan.store.queries import find_by_year_month

console = Console()


def normalize_date(raw_date: str) -> str:
    """Normalize a date string to ISO format (YYYY-MM-DD).

    Uses pandas.to_datetime so 2025/10/30, 2025-10-30 and 30 Oct 2025 all work.

    Raises:
        ValueError: If date cannot be parsed.
    """
    try:
        return pd.to_datetime(raw_date).strftime("%Y-%m-%d")
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e


def render_payments(title: str, payments: list[AdvancePayment]) -> None:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Payer", justify="center")
    table.add_column("Amount", justify="right")
    table.add_column("Memo", style="white")

    for payment in payments:
        table.add_row(
            payment.id,
            payment.formatted_date(),
            f"{payment.payer.icon} {payment.payer.value}",
            payment.amount.format(),
            payment.memo,
        )

    console.print(table)


def list_command(month: str | None = None, cycle: bool = False) -> None:
    """List advance payments for a calendar month or a billing cycle."""
    settings = load_settings()
    year_month = resolve_month(month, settings.today)

    try:
        if cycle:
            start, end, payments, settlement = get_cycle_payments(settings, year_month)
        else:
            start, end = month_range(year_month)
            payments = find_by_year_month(year_month.year, year_month.month, settings.db_path)
            settlement = None
    except (sqlite3.Error, ValueError) as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    label = f"{year_month.format()}支払い分" if cycle else year_month.format()
    if not payments:
        console.print(f"[yellow]No advance payments for {label} ({start} 〜 {end})[/yellow]")
        return

    render_payments(f"{label} ({start} 〜 {end})", payments)

    if settlement is not None:
        console.print(f"👨 夫: {settlement.husband_total.format()}  👩 妻: {settlement.wife_total.format()}")
        if settlement.debtor is None or settlement.creditor is None:
            console.print("[green]差額なし[/green]")
        else:
            console.print(
                f"[bold]{settlement.debtor.value} → {settlement.creditor.value}: "
                f"{settlement.half_difference.format()}[/bold]"
            )


def add_command(payer: str, amount: str, memo: str, date: str | None = None) -> None:
    """Record an advance payment.

    Args:
        payer: 夫 or 妻.
        amount: Whole yen, thousands separators allowed.
        memo: What the money was spent on.
        date: Payment date; defaults to today.
    """
    settings = load_settings()

    try:
        payer_value = Payer.from_string(payer)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    amount_value = parse_amount(amount)
    if amount_value is None:
        console.print(f"[red]Amount must be a positive whole number: {amount}[/red]")
        sys.exit(1)

    if not memo.strip():
        console.print("[red]Memo must not be empty[/red]")
        sys.exit(1)

    if date is None:
        payment_date = settings.today()
    else:
        try:
            payment_date = pd.Timestamp(normalize_date(date)).date()
        except ValueError as e:
            console.print(f"[red]Invalid date format: {e}[/red]")
            sys.exit(1)

    try:
        payment = add_advance_payment(settings, payment_date, payer_value, Money(amount_value), memo.strip())
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Advance payment added:")
    console.print(f"  ID: {payment.id}")
    console.print(f"  Date: {payment.formatted_date()}")
    console.print(f"  Payer: {payment.payer.icon} {payment.payer.value}")
    console.print(f"  Amount: {payment.amount.format()}")
    console.print(f"  Memo: {payment.memo}")


def delete_command(record_id: str) -> None:
    """Delete an advance payment by id."""
    settings = load_settings()

    try:
        removed = delete_advance_payment(settings, record_id)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if removed:
        console.print(f"[green]✓[/green] Deleted advance payment {record_id}")
    else:
        console.print(f"[yellow]No advance payment with ID {record_id}[/yellow]")


def balance_command(month: str | None = None) -> None:
    """Show who owes whom for a calendar month's advance payments."""
    settings = load_settings()
    year_month = resolve_month(month, settings.today)

    try:
        result = calculate_month_imbalance(settings, year_month)
    except (sqlite3.Error, ValueError) as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    table = Table(title=f"{year_month.format()} advance payments")
    table.add_column("Payer", style="cyan")
    table.add_column("Total", justify="right")
    table.add_row(f"{Payer.HUSBAND.icon} {Payer.HUSBAND.value}", result.husband_total.format())
    table.add_row(f"{Payer.WIFE.icon} {Payer.WIFE.value}", result.wife_total.format())
    console.print(table)

    if result.settlement_payer is None:
        console.print("[green]No settlement needed[/green]")
    else:
        console.print(
            f"[bold]{result.settlement_payer.value} is short by {result.settlement_amount.format()}[/bold]"
        )
