"""Admin commands for initializing and serving warikan."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from warikan.config import create_default_config, get_config_path, load_settings
from warikan.log import configure_logging
from warikan.store.schema import database_exists, get_db_path, init_database
from warikan.webhook import create_app

console = Console()


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")
    console.print("[dim]Fill in the [zaim] and [line] credentials before running 'warikan serve'.[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize warikan database and configuration."""
    config_path = get_config_path()
    db_path = load_settings(config_path).db_path or get_db_path()

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'warikan init --force' to overwrite[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def serve_command(host: str = "127.0.0.1", port: int = 8000, debug: bool = False) -> None:
    """Run the LINE webhook server."""
    settings = load_settings()
    configure_logging("DEBUG" if debug else settings.log_level)

    if not settings.line_channel_access_token:
        console.print("[yellow]LINE channel access token is not configured; replies will fail.[/yellow]")

    app = create_app(settings)
    console.print(f"[cyan]Listening for LINE webhooks on http://{host}:{port}/webhook[/cyan]")
    app.run(host=host, port=port, debug=debug)
