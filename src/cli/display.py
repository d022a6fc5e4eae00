"""Rich display helpers — directory tables, selection panels, spinners."""

from __future__ import annotations

from contextlib import contextmanager

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.theme import Theme

# ── Colour palette ───────────────────────────────────────────────────────────
THEME = Theme(
    {
        "ns.accent": "#E6007A",
        "ns.accent2": "#FF5CAA",
        "ns.accent3": "#8A0049",
        "ns.silver": "#A4B4CC",
        "ns.muted": "#5A6278",
        "ns.ok": "#3d9e5a",
        "ns.warn": "#d4a017",
        "ns.err": "#e05555",
        "ns.blue": "#4D8FFF",
        "ns.dim": "dim #5A6278",
    }
)

console = Console(theme=THEME, highlight=False)

# ── Branding ─────────────────────────────────────────────────────────────────

TAGLINE = "[ns.muted]  pick the node your client connects to[/ns.muted]"


def print_banner(applied_url: str) -> None:
    console.print()
    console.print("  [ns.accent]◆[/ns.accent] [bold]nodeswitch[/bold]")
    console.print(TAGLINE)
    console.print()
    console.print(f"  [ns.muted]Connected to[/ns.muted]  [ns.silver]{applied_url}[/ns.silver]")
    console.print()


def print_help() -> None:
    """Print REPL help."""
    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column(style="ns.accent", no_wrap=True)
    table.add_column(style="ns.silver")

    commands = [
        ("list", "Show every group, network and provider"),
        ("group <n>", "Expand group number n"),
        ("select <network> [provider]", "Pick a provider (default: remembered one)"),
        ("url <ws-url>", "Pick an arbitrary endpoint url"),
        ("status", "Show the current selection"),
        ("switch", "Apply the selection"),
        ("custom add|remove <url>", "Manage saved custom endpoints"),
        ("", ""),
        ("/help", "Show this help"),
        ("/quit  or  Ctrl-D", "Exit the REPL"),
        ("/clear", "Clear the screen"),
    ]
    for cmd, desc in commands:
        table.add_row(cmd, desc)

    console.print(Panel(table, title="[ns.accent]Commands[/ns.accent]", border_style="ns.accent3", padding=(1, 2)))


# ── Directory ────────────────────────────────────────────────────────────────


def print_directory(data: dict, expand_all: bool = False) -> None:
    """Print groups from an EndpointsState.to_dict() payload; the selected group is expanded."""
    groups = data.get("groups", [])
    selection = data.get("selection", {})
    affinities = data.get("affinities", {})
    api_url = selection.get("apiUrl", "")

    if not groups:
        console.print("  [ns.muted]Catalog is empty.[/ns.muted]")
        return

    for index, group in enumerate(groups):
        is_selected = index == selection.get("groupIndex")
        marker = "[ns.accent]▾[/ns.accent]" if is_selected else "[ns.muted]▸[/ns.muted]"
        tag = "  [ns.dim](development)[/ns.dim]" if group.get("isDevelopment") else ""
        if group.get("isSpaced"):
            console.print()
        console.print(f"{marker} [bold]{index}[/bold]  [ns.silver]{group['header']}[/ns.silver]{tag}")
        if not (is_selected or expand_all):
            continue

        table = Table(box=box.SIMPLE, show_header=True, header_style="ns.accent3", padding=(0, 2))
        table.add_column("", width=2)
        table.add_column("Network", style="ns.silver", no_wrap=True)
        table.add_column("Provider", style="ns.muted")
        table.add_column("URL", style="ns.muted")
        for network in group.get("networks", []):
            preferred = affinities.get(network["name"])
            for pos, provider in enumerate(network["providers"]):
                url = provider["url"]
                if url == api_url:
                    mark = "[ns.ok]●[/ns.ok]"
                elif url == preferred:
                    mark = "[ns.accent2]★[/ns.accent2]"
                else:
                    mark = ""
                name = network["name"] if pos == 0 else ""
                if pos == 0 and network.get("isChild"):
                    name = f"  {name}"
                label = provider["name"] + (" [ns.dim](light)[/ns.dim]" if provider.get("isLightClient") else "")
                table.add_row(mark, name, label, url)
        console.print(table)


def print_selection(data: dict) -> None:
    selection = data.get("selection", {})
    disabled = data.get("isSwitchDisabled", True)
    valid = selection.get("isUrlValid", False)
    changed = selection.get("hasUrlChanged", False)
    groups = data.get("groups", [])
    index = selection.get("groupIndex", -1)
    group = groups[index]["header"] if 0 <= index < len(groups) else "—"

    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column(style="ns.muted", no_wrap=True, width=14)
    table.add_column()
    table.add_row("Selected", f"[ns.silver]{selection.get('apiUrl', '')}[/ns.silver]")
    table.add_row("Group", f"[ns.silver]{group}[/ns.silver]")
    table.add_row("Valid url", "[ns.ok]yes[/ns.ok]" if valid else "[ns.err]no[/ns.err]")
    table.add_row("Changed", "[ns.accent]yes[/ns.accent]" if changed else "[ns.muted]no[/ns.muted]")
    table.add_row("Switch", "[ns.muted]disabled[/ns.muted]" if disabled else "[ns.ok]available[/ns.ok]")

    color = "ns.muted" if disabled else "ns.ok"
    console.print(Panel(table, title=f"[{color}]Selection[/{color}]", border_style=color, padding=(1, 2)))


def print_affinities(affinities: dict) -> None:
    if not affinities:
        console.print("  [ns.muted]No remembered providers.[/ns.muted]")
        return
    table = Table(box=box.SIMPLE, show_header=True, header_style="ns.accent3", padding=(0, 2))
    table.add_column("Network", style="ns.silver", no_wrap=True)
    table.add_column("Provider URL", style="ns.muted")
    for network, url in affinities.items():
        table.add_row(network, url)
    console.print(table)


def print_custom(urls: list) -> None:
    if not urls:
        console.print("  [ns.muted]No custom endpoints saved. Try: custom add wss://…[/ns.muted]")
        return
    for url in urls:
        console.print(f"  [ns.muted]·[/ns.muted]  [ns.silver]{url}[/ns.silver]")


# ── Spinners ──────────────────────────────────────────────────────────────────


@contextmanager
def spinner(message: str):
    """Context manager that shows a spinner while work is done."""
    with Progress(
        SpinnerColumn(style="ns.accent"),
        TextColumn(f"[ns.silver]{message}[/ns.silver]"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as prog:
        prog.add_task("", total=None)
        yield prog


# ── Utility ───────────────────────────────────────────────────────────────────


def ok(message: str) -> None:
    console.print(f"  [ns.ok]✓[/ns.ok]  {message}")


def warn(message: str) -> None:
    console.print(f"  [ns.warn]⚠[/ns.warn]  {message}")


def err(message: str) -> None:
    console.print(f"  [ns.err]✗[/ns.err]  [ns.err]{message}[/ns.err]")


def info(message: str) -> None:
    console.print(f"  [ns.muted]·[/ns.muted]  [ns.silver]{message}[/ns.silver]")
