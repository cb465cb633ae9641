"""CLI entry point for warikan."""

import typer

from warikan.commands.admin import init_command, serve_command
from warikan.commands.advances import add_command, balance_command, delete_command, list_command
from warikan.commands.card import card_command

app = typer.Typer(
    name="warikan",
    help="Split the household card bill and settle advance payments",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Split the household card bill and settle advance payments."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize warikan database and configuration."""
    init_command(force)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    debug: bool = typer.Option(False, "--debug", help="Enable Flask debug mode and debug logging"),
) -> None:
    """Run the LINE webhook server."""
    serve_command(host, port, debug)


@app.command()
def card(
    month: str = typer.Option(None, "--month", help="Month to settle (YYYY-MM, default: this month)"),
    message: bool = typer.Option(False, "--message", "-m", help="Print the chat message instead of a table"),
) -> None:
    """Show the card total for a month split between the two of you."""
    card_command(month, message)


@app.command(name="list")
def list_payments(
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM, default: this month)"),
    cycle: bool = typer.Option(
        False, "--cycle", "-c", help="Show the billing cycle paid in --month (26th to 25th) instead"
    ),
) -> None:
    """List your advance payments."""
    list_command(month, cycle)


@app.command()
def add(
    payer: str = typer.Argument(..., help="Who paid: 夫 or 妻"),
    amount: str = typer.Argument(..., help="Amount in yen"),
    memo: str = typer.Argument(..., help="What it was for"),
    date: str = typer.Option(None, "--date", "-d", help="Payment date (default: today)"),
) -> None:
    """Record an advance payment."""
    add_command(payer, amount, memo, date)


@app.command()
def delete(
    record_id: str = typer.Argument(..., help="ID of the advance payment"),
) -> None:
    """Delete an advance payment."""
    delete_command(record_id)


@app.command()
def balance(
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM, default: this month)"),
) -> None:
    """Show who owes whom for a month's advance payments."""
    balance_command(month)


if __name__ == "__main__":
    app()
