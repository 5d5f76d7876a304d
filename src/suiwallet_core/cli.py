"""
Wallet transfer CLI.

Usage:
    suiwallet [OPTIONS] COMMAND [ARGS]...
"""
from __future__ import annotations

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .coins import coins_from_objects
from .config import WalletSettings, load_settings
from .constants import SUI_TYPE_ARG
from .event_bus import EventBus
from .exceptions import InvalidRequestError, WalletException
from .logging_config import setup_logging
from .providers import InMemoryCoinSnapshot, StaticIdentityProvider
from .reconciliation import ReconciliationTrigger
from .signer import create_signer
from .transfers import TransferRequest, TransferService

console = Console()


def _load_coins_file(path: Path) -> list:
    try:
        with open(path) as f:
            data = json.load(f)
        # Accept either a bare list or an RPC-style {"data": [...]} page
        objects = data.get("data", []) if isinstance(data, dict) else data
        return coins_from_objects(objects)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidRequestError(f"Invalid coins file {path}: {e}", field="coins") from e


class _FileResync:
    """Reloads the coin snapshot from its source file."""

    def __init__(self, path: Path, snapshot: InMemoryCoinSnapshot) -> None:
        self._path = path
        self._snapshot = snapshot

    def trigger_resync(self) -> None:
        self._snapshot.replace(_load_coins_file(self._path))


@click.group()
@click.option("--env-file", type=click.Path(dir_okay=False), help="Settings .env file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, env_file: str | None, verbose: bool):
    """Sui wallet transfer CLI."""
    ctx.ensure_object(dict)
    settings = load_settings(env_file)
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
    )
    ctx.obj["settings"] = settings


@cli.command()
@click.pass_context
def status(ctx):
    """Show current configuration."""
    settings: WalletSettings = ctx.obj["settings"]

    console.print("\n[bold blue]Wallet Status[/bold blue]\n")
    console.print(f"Environment: [cyan]{settings.environment}[/cyan]")
    console.print(f"Native coin: [cyan]{settings.native_coin_type}[/cyan]")
    console.print(f"Signer: [cyan]{settings.signer_mode}[/cyan]")
    if settings.signer_mode == "remote":
        console.print(f"Signer URL: [cyan]{settings.signer_url}[/cyan]")
    console.print(f"Default gas budget: [cyan]{settings.default_gas_budget}[/cyan]")
    console.print()


@cli.command()
@click.option("--from", "sender", required=True, help="Sending (active) address")
@click.option("--to", "recipient", required=True, help="Recipient address")
@click.option("--coin-type", default=SUI_TYPE_ARG, show_default=True, help="Coin type to send")
@click.option("--amount", type=int, default=0, help="Amount in base units")
@click.option("--gas-budget", type=int, default=None, help="Gas budget (defaults to settings)")
@click.option("--all", "spend_all", is_flag=True, help="Send the whole native coin balance")
@click.option(
    "--coins",
    "coins_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with the owned coin objects",
)
@click.pass_context
def send(ctx, sender, recipient, coin_type, amount, gas_budget, spend_all, coins_file):
    """Send coins to a recipient."""
    settings: WalletSettings = ctx.obj["settings"]

    try:
        result = asyncio.run(_send(
            settings,
            coins_file,
            sender,
            TransferRequest(
                coin_type=coin_type,
                recipient=recipient,
                amount=amount,
                gas_budget=gas_budget,
                spend_all=spend_all,
            ),
        ))
    except WalletException as e:
        console.print(f"[red]Error ({e.error_code}): {e.message}[/red]")
        ctx.exit(1)

    table = Table(title="Transfer")
    table.add_column("Digest", style="cyan")
    table.add_column("Status")
    table.add_column("Gas Used", justify="right", style="yellow")
    status_style = "green" if result.succeeded else "red"
    table.add_row(
        result.digest,
        f"[{status_style}]{result.status}[/{status_style}]",
        str(result.gas_used if result.gas_used is not None else "-"),
    )
    console.print(table)


async def _send(settings: WalletSettings, coins_file: Path, sender: str, request: TransferRequest):
    snapshot = InMemoryCoinSnapshot(_load_coins_file(coins_file))
    bus = EventBus()
    service = TransferService(
        identity=StaticIdentityProvider(sender),
        coins=snapshot,
        signer_factory=lambda address: create_signer(settings, address),
        settings=settings,
        bus=bus,
        reconciliation=ReconciliationTrigger(bus, _FileResync(coins_file, snapshot)),
    )
    try:
        return await service.submit_transfer(request)
    finally:
        await bus.wait_for_background_tasks(timeout=settings.signer_timeout_seconds)
        await service.close()
