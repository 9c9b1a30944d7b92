"""CLI commands for cosmosgate.

Single entry point: `serve` runs the HTTP gateway, `broadcast` and `query`
call the same pipeline one-shot from the terminal.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cosmosgate import __logo__, __version__
from cosmosgate.cli.shared.logging_utils import configure_stderr, ensure_rotating_log_file
from cosmosgate.utils.exceptions import GatewayError

app = typer.Typer(
    name="cosmosgate",
    help=f"{__logo__} cosmosgate - presigned transaction broadcast and chain query gateway",
    no_args_is_help=True,
)

console = Console()


def _load_config(config_path: Optional[Path], rpc_url: Optional[str]):
    from cosmosgate.config.access import get_config

    config = get_config(config_path=config_path)
    if rpc_url:
        config = config.model_copy(deep=True)
        config.node.rpc_url = rpc_url
    return config


def _print_json(payload) -> None:
    from cosmosgate.api.http.serialization import to_jsonable

    console.print_json(json.dumps(to_jsonable(payload)))


def _fail(exc: GatewayError) -> None:
    console.print(f"[red]Error ({exc.code}):[/red] {escape(exc.message)}")
    raise typer.Exit(1)


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} cosmosgate v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """cosmosgate - Cosmos transaction gateway."""


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Bind host (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from config)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Start the HTTP gateway."""
    from cosmosgate.api.server import app_state, run_server

    config = _load_config(config_path, None)
    app_state["config"] = config
    configure_stderr(verbose)
    log_path = ensure_rotating_log_file("serve", level="DEBUG" if verbose else "INFO")

    bind_host = host or config.server.host
    bind_port = port or config.server.port
    console.print(f"{__logo__} Starting cosmosgate on {bind_host}:{bind_port} (node {config.node.rpc_url})")
    console.print(f"[dim]Logs: {log_path}[/dim]")
    run_server(host=bind_host, port=bind_port)


@app.command()
def broadcast(
    signed_tx_hex: str = typer.Argument(..., help="Hex-encoded signed transaction bytes"),
    no_decode: bool = typer.Option(False, "--no-decode", help="Skip decoding message responses"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="Node RPC endpoint"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Broadcast a presigned transaction and print the result."""
    from cosmosgate.chain.gateway import submit
    from cosmosgate.chain.registry import build_default_registry

    config = _load_config(config_path, rpc_url)
    registry = None if no_decode else build_default_registry()
    try:
        result = asyncio.run(submit(signed_tx_hex, registry=registry, node=config.node))
    except GatewayError as exc:
        _fail(exc)
    _print_json(result)


@app.command()
def query(
    service_name: str = typer.Argument(..., help="Query service, e.g. cosmos.bank.v1beta1.Query"),
    method_name: str = typer.Argument(..., help="Method, e.g. AllBalances"),
    candidate: list[str] = typer.Option(
        [], "--candidate", "-r", help="Request JSON; repeat to try several shapes in order"
    ),
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="Node RPC endpoint"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Run a read-only query against the node."""
    from cosmosgate.chain.gateway import query as run_query

    try:
        candidates = [json.loads(raw) for raw in candidate] or [{}]
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid --candidate JSON:[/red] {exc}")
        raise typer.Exit(2)

    config = _load_config(config_path, rpc_url)
    try:
        result = asyncio.run(run_query(service_name, method_name, candidates, node=config.node))
    except GatewayError as exc:
        _fail(exc)
    _print_json(result)


@app.command()
def services():
    """List query services and their methods."""
    from cosmosgate.chain.query_services import describe_query_services

    table = Table(title="Query services")
    table.add_column("Service", style="cyan")
    table.add_column("Methods")
    for name, methods in describe_query_services().items():
        table.add_row(name, ", ".join(methods))
    console.print(table)


if __name__ == "__main__":
    app()
