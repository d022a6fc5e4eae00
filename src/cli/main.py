"""
nodeswitch — CLI entry point.

Usage:
  nodeswitch                                   # interactive REPL
  nodeswitch list [--catalog FILE|URL]
  nodeswitch --catalog FILE list --all         # global form, same effect
  nodeswitch status
  nodeswitch select Polkadot --provider OnFinality --apply
  nodeswitch switch wss://rpc.polkadot.io
  nodeswitch custom add wss://my.node:443
  nodeswitch custom list
  nodeswitch serve [--port 5757]
"""

from __future__ import annotations

from typing import Annotated

import typer

from core.logger import set_verbose
from core.state import EndpointsState
from endpoints.catalog import (
    add_custom_endpoint,
    create_ws_endpoints,
    load_custom_endpoints,
    remove_custom_endpoint,
    resolve_catalog,
)
from endpoints.directory import find_network
from endpoints.exceptions import EndpointsError

from . import __version__
from .display import (
    console,
    err,
    info,
    ok,
    print_affinities,
    print_custom,
    print_directory,
    print_selection,
    spinner,
)
from .repl import REPL

# ── App ───────────────────────────────────────────────────────────────────────

app = typer.Typer(
    name="nodeswitch",
    help="Pick the network endpoint your client connects to.",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=False,
    invoke_without_command=True,
)

custom_app = typer.Typer(help="Manage saved custom endpoints.", no_args_is_help=True)
app.add_typer(custom_app, name="custom")

# ── Shared options ────────────────────────────────────────────────────────────

CATALOG_OPT = typer.Option(
    "", "--catalog", "-c", help="Catalog JSON file or http(s) URL", envvar="NODESWITCH_CATALOG"
)
BASE_OPT = typer.Option("", "--base-url", "-b", help="Application URL to build the reload link from")


# ── Root callback → REPL when called with no subcommand ──────────────────────


@app.callback(invoke_without_command=True)
def root(
    ctx: typer.Context,
    catalog: str = CATALOG_OPT,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
    version: bool = typer.Option(False, "--version", "-V", help="Print version and exit", is_eager=True),
) -> None:
    """[bold]nodeswitch[/bold] — endpoint directory and switcher"""
    if version:
        console.print(f"nodeswitch [bold]v{__version__}[/bold]")
        raise typer.Exit()

    set_verbose(verbose)
    ctx.obj = {"catalog": catalog}

    if ctx.invoked_subcommand is None:
        REPL(_load_state(ctx, catalog)).run()


# ── Subcommands ───────────────────────────────────────────────────────────────


@app.command(name="list")
def list_(
    ctx: typer.Context,
    catalog: str = CATALOG_OPT,
    all_groups: bool = typer.Option(False, "--all", "-a", help="Expand every group"),
) -> None:
    """List groups, networks and providers; the selected group is expanded."""
    print_directory(_load_state(ctx, catalog).to_dict(), expand_all=all_groups)


@app.command()
def status(ctx: typer.Context, catalog: str = CATALOG_OPT) -> None:
    """Show the applied endpoint and the remembered providers."""
    state = _load_state(ctx, catalog)
    data = state.to_dict()
    print_selection(data)
    print_affinities(data["affinities"])


@app.command()
def select(
    ctx: typer.Context,
    network: Annotated[str, typer.Argument(help="Network name as listed")],
    provider: str = typer.Option("", "--provider", "-p", help="Provider name or url (default: remembered one)"),
    apply: bool = typer.Option(False, "--apply/--no-apply", help="Switch right away"),
    base_url: str = BASE_OPT,
    catalog: str = CATALOG_OPT,
) -> None:
    """
    Pick a provider for [bold]NETWORK[/bold] and remember it.

    Without [bold]--provider[/bold] the remembered provider is used, or the
    first one listed.
    """
    state = _load_state(ctx, catalog)
    found = find_network(state.groups, network)
    if found is None:
        err(f"Unknown network: {network!r}")
        raise typer.Exit(1)

    if provider:
        match = next((p for p in found.providers if provider in (p.name, p.url)), None)
        if match is None:
            err(f"{network} has no provider {provider!r}")
            raise typer.Exit(1)
        url = match.url
    else:
        url = state.preferred_url(network)

    state.select(network, url)
    ok(f"{network} → [bold]{url}[/bold]")
    if apply:
        _apply(state, base_url)
    else:
        print_selection(state.to_dict())


@app.command()
def switch(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="Endpoint url (ws://, wss:// or light://)")],
    base_url: str = BASE_OPT,
    catalog: str = CATALOG_OPT,
) -> None:
    """Switch to [bold]URL[/bold], whether or not the catalog lists it."""
    state = _load_state(ctx, catalog)
    state.select_url(url)
    _apply(state, base_url)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(0, "--port", "-p", help="Port (default: NODESWITCH_PORT or 5757)"),
) -> None:
    """Run the dashboard API."""
    from dashboard.server import main as serve_main

    serve_main(host=host, port=port or None)


# ── custom … ──────────────────────────────────────────────────────────────────


@custom_app.command(name="list")
def custom_list() -> None:
    """Show saved custom endpoints."""
    print_custom(load_custom_endpoints())


@custom_app.command(name="add")
def custom_add(url: Annotated[str, typer.Argument(help="Endpoint url")]) -> None:
    """Save a custom endpoint; it appears under Development → Custom."""
    try:
        urls = add_custom_endpoint(url)
    except EndpointsError as exc:
        err(str(exc))
        raise typer.Exit(1) from exc
    ok(f"Saved [bold]{url.strip()}[/bold]")
    print_custom(urls)


@custom_app.command(name="remove")
def custom_remove(url: Annotated[str, typer.Argument(help="Endpoint url")]) -> None:
    """Forget a custom endpoint."""
    print_custom(remove_custom_endpoint(url))


# ── Helpers ───────────────────────────────────────────────────────────────────


def _load_state(ctx: typer.Context, catalog: str = "") -> EndpointsState:
    # a subcommand option wins over the global one given before the subcommand
    catalog = catalog or (ctx.obj or {}).get("catalog", "")
    try:
        if catalog.startswith(("http://", "https://")):
            with spinner(f"Fetching catalog from {catalog}"):
                entries = resolve_catalog(catalog)
        else:
            entries = resolve_catalog(catalog or None)
        return EndpointsState(create_ws_endpoints(entries))
    except EndpointsError as exc:
        err(str(exc))
        raise typer.Exit(1) from exc


def _apply(state: EndpointsState, base_url: str) -> None:
    try:
        target = state.apply(base_url)
    except EndpointsError as exc:
        err(str(exc))
        raise typer.Exit(1) from exc
    ok(f"Switched to [bold]{state.selection.api_url}[/bold]")
    info(f"Reload: [bold]{target}[/bold]")


# ── Entry ─────────────────────────────────────────────────────────────────────


def main() -> None:
    app()


if __name__ == "__main__":
    main()
