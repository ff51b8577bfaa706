"""CLI commands for branchstore."""

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from branchstore import __version__, __logo__

app = typer.Typer(
    name="branchstore",
    help=f"{__logo__} branchstore - In-memory branch-aware object store",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} branchstore v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """branchstore - In-memory branch-aware object store."""
    pass


def _setup_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


# ============================================================================
# Run
# ============================================================================


@app.command()
def run(
    script: Path = typer.Argument(..., help="Script with one store command per line"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logs"),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero if any command fails"),
):
    """Run a script of store commands against a fresh store."""
    from branchstore.config.loader import load_config
    from branchstore.store import ObjectStore, CommandError, parse_script
    
    config = load_config(config_path)
    _setup_logging("DEBUG" if verbose else config.log_level)
    
    if not script.exists():
        console.print(f"[red]Script not found: {script}[/red]")
        raise typer.Exit(1)
    
    try:
        commands = list(parse_script(script.read_text(encoding="utf-8")))
    except CommandError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    
    store = ObjectStore(config=config)
    failures = 0
    
    for command in commands:
        outcome = store.execute(command)
        if outcome.success:
            console.print(f"[green]✓[/green] [dim]{escape(str(command))}[/dim]")
        else:
            failures += 1
            console.print(f"[yellow]✗[/yellow] [dim]{escape(str(command))}[/dim]")
        console.print(outcome.message, markup=False, highlight=False)
    
    console.print(
        f"\n{len(commands)} command(s), {failures} failed, "
        f"on branch [cyan]{store.current_branch_name}[/cyan]"
    )
    
    if strict and failures:
        raise typer.Exit(1)


# ============================================================================
# Config Commands
# ============================================================================


config_app = typer.Typer(help="Manage branchstore configuration")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show(
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Show the effective configuration."""
    from branchstore.config.loader import get_config_path, load_config
    
    path = config_path or get_config_path()
    config = load_config(path)
    
    table = Table(title="branchstore Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    
    for key, value in config.model_dump().items():
        table.add_row(key, str(value))
    
    console.print(table)
    
    if path.exists():
        console.print(f"\n[dim]Loaded from {path}[/dim]")
    else:
        console.print(f"\n[dim]No config file at {path}, using defaults[/dim]")


@config_app.command("init")
def config_init(
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Write a default configuration file."""
    from branchstore.config.loader import get_config_path, save_config
    from branchstore.config.schema import StoreConfig
    
    path = config_path or get_config_path()
    
    if path.exists():
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()
    
    save_config(StoreConfig(), path)
    console.print(f"[green]✓[/green] Created config at {path}")


if __name__ == "__main__":
    app()
