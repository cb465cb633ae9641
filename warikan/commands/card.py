"""Card command: show a month's 50/50 credit card split."""

import sys
from collections.abc import Callable
from datetime import date

import requests
from rich.console import Console
from rich.table import Table

from warikan.config import load_settings
from warikan.domain.models import YearMonth
from warikan.errors import WarikanError
from warikan.services import get_card_settlement

console = Console()


def resolve_month(month: str | None, today: Callable[[], date]) -> YearMonth:
    """Parse a --month option, defaulting to the current month."""
    if month is None:
        return YearMonth.from_date(today())
    try:
        return YearMonth.parse(month)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def card_command(month: str | None = None, message: bool = False) -> None:
    """Show the card total for a month and each member's half."""
    settings = load_settings()
    year_month = resolve_month(month, settings.today)

    try:
        with console.status(f"[cyan]Fetching {year_month.format()} from Zaim...[/cyan]"):
            settlement = get_card_settlement(settings, year_month)
    except (WarikanError, requests.RequestException, ValueError) as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if message:
        console.print(settlement.format_message())
        return

    table = Table(title=f"{year_month.format()}支払い分")
    table.add_column("", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_row("カード合計", settlement.credit_card_total.format())
    table.add_row("👨 夫", settlement.husband_amount.format())
    table.add_row("👩 妻", settlement.wife_amount.format())
    console.print(table)

    dropped = settlement.credit_card_total.amount - settlement.total_amount().amount
    if dropped:
        console.print(f"[dim]{dropped}円 remainder not assigned[/dim]")
