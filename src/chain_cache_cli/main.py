"""Maintenance CLI using typer."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import typer
from pydantic_core import from_json, to_json
from rich.console import Console

from chain_cache_core.config.settings import CacheSettings
from chain_cache_core.exceptions import CacheError, InitError
from chain_cache_core.observability import bind_log_context, configure_logging
from chain_cache_infra.cache.service import CacheService
from chain_cache_infra.connection import initialize_cache

R = TypeVar("R")

app = typer.Typer(
    name="chain-cache",
    help="Inspect and maintain the shared memcached/redis cache",
)
console = Console()


@app.command()
def ping(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Connect to every configured server and report."""
    with _open_cache("ping", verbose=verbose) as cache:
        config = cache.config
        console.print(f"[bold green]Connected:[/bold green] {config.backend}")
        for server in config.servers:
            console.print(f"  {server}")
        console.print(f"  Timeout: {config.timeout.total_seconds():g}s")
        console.print(f"  Default expiry: {int(config.default_expiry.total_seconds())}s")


@app.command()
def get(
    key: str = typer.Argument(..., help="Cache key"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Print the JSON value stored under KEY."""
    with _open_cache("get", verbose=verbose) as cache:
        result = _run(lambda: cache.get(key, Any))
    if not result.hit:
        console.print(f"[yellow]miss[/yellow] {key}")
        return
    console.print_json(to_json(result.value).decode())


@app.command("set")
def set_(
    key: str = typer.Argument(..., help="Cache key"),
    value: str = typer.Argument(..., help="JSON document to store"),
    ttl: int = typer.Option(0, "--ttl", help="TTL in seconds (0 = configured default)"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Store a JSON VALUE under KEY."""
    try:
        document = from_json(value)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] VALUE is not valid JSON: {exc}")
        raise typer.Exit(code=1) from exc

    with _open_cache("set", verbose=verbose) as cache:
        _run(lambda: cache.set(key, document, ttl))
    console.print(f"[green]stored[/green] {key}")


@app.command()
def delete(
    key: str = typer.Argument(..., help="Cache key"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Delete KEY (succeeds if it is already absent)."""
    with _open_cache("delete", verbose=verbose) as cache:
        _run(lambda: cache.delete(key))
    console.print(f"[green]deleted[/green] {key}")


@app.command()
def flush(
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Remove EVERY entry from the store, across all namespaces."""
    if not yes:
        typer.confirm("Flush all cache entries on every server?", abort=True)
    with _open_cache("flush", verbose=verbose) as cache:
        _run(cache.flush)
    console.print("[bold yellow]Cache flushed[/bold yellow]")


@app.command()
def version() -> None:
    """Show version."""
    console.print("chain-cache v0.1.0")


def _open_cache(command: str, *, verbose: bool) -> CacheService:
    """Configure logging and connect, exiting with code 1 if unreachable."""
    settings = CacheSettings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    bind_log_context(command=command)

    try:
        return initialize_cache(settings.to_cache_config())
    except InitError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _run(operation: Callable[[], R]) -> R:
    """Run a cache operation, turning cache errors into exit code 1."""
    try:
        return operation()
    except CacheError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
