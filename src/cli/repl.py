"""Interactive endpoint picker — prompt_toolkit powered REPL over one EndpointsState."""

from __future__ import annotations

import shlex
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style

from core.config import DATA_DIR
from core.state import EndpointsState
from core.storage import load_settings
from endpoints.catalog import add_custom_endpoint, remove_custom_endpoint
from endpoints.directory import find_network
from endpoints.exceptions import EndpointsError

from . import __version__
from .display import (
    console,
    err,
    info,
    ok,
    print_banner,
    print_custom,
    print_directory,
    print_help,
    print_selection,
    warn,
)

# ── Prompt style ──────────────────────────────────────────────────────────────

PROMPT_STYLE = Style.from_dict(
    {
        "marker": "#E6007A bold",
        "host": "#A4B4CC",
        "suffix": "#E6007A bold",
        "": "#FFFFFF",
    }
)

PROMPT_TOKENS = HTML("<marker>◆</marker> <host>nodeswitch</host><suffix> ❯ </suffix>")

_COMMANDS = ["list", "group", "select", "url", "status", "switch", "custom", "help", "quit", "exit"]
_SLASH = ["/help", "/quit", "/exit", "/clear", "/version"]


# ── REPL ──────────────────────────────────────────────────────────────────────


class REPL:
    """
    Interactive picker.

    The directory is built once for the session; affinities are loaded once
    and re-persisted on every ``select``.  ``switch`` applies the selection.
    """

    def __init__(self, state: EndpointsState) -> None:
        self.state = state
        self._running = True
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        self._session: PromptSession = PromptSession(
            history=FileHistory(str(DATA_DIR / ".nodeswitch_history")),
            auto_suggest=AutoSuggestFromHistory(),
            completer=self._completer(),
            style=PROMPT_STYLE,
            key_bindings=self._bindings(),
            enable_history_search=True,
            mouse_support=False,
        )

    def _completer(self) -> WordCompleter:
        networks = [n.name for g in self.state.groups for n in g.networks]
        return WordCompleter(_COMMANDS + _SLASH + networks, ignore_case=True, sentence=True)

    def _bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("c-c")
        def _ctrl_c(event):  # noqa: ANN001
            # Soft interrupt — cancel current input line, don't exit
            event.app.current_buffer.reset()
            console.print("\n  [ns.muted]^C — type /quit to exit[/ns.muted]")

        @kb.add("c-d")
        def _ctrl_d(event):  # noqa: ANN001
            self._running = False
            event.app.exit()

        return kb

    def run(self) -> None:
        print_banner(load_settings()["apiUrl"])
        print_directory(self.state.to_dict())
        console.print()
        console.print(
            "  [ns.muted]Pick a provider with [/ns.muted][ns.accent]select <network>[/ns.accent]"
            "[ns.muted], or run [/ns.muted][ns.accent]/help[/ns.accent][ns.muted] for commands.[/ns.muted]"
        )
        console.print()

        while self._running:
            try:
                raw = self._session.prompt(PROMPT_TOKENS, style=PROMPT_STYLE)
            except EOFError:
                break
            except KeyboardInterrupt:
                continue

            line = (raw or "").strip()
            if not line:
                continue

            self.dispatch(line)

        console.print("\n  [ns.muted]Goodbye.[/ns.muted]\n")

    # ── Dispatcher ────────────────────────────────────────────────────────────

    def dispatch(self, line: str) -> None:
        if line.startswith("/"):
            self._handle_slash(line)
            return

        # Bare endpoint url → select it
        if line.startswith(("ws://", "wss://", "light://")):
            self._cmd_url(["url", line])
            return

        try:
            parts = shlex.split(line)
        except ValueError as exc:
            err(f"Parse error: {exc}")
            return

        if not parts:
            return

        cmd, *rest = parts
        handlers: dict[str, Any] = {
            "list": self._cmd_list,
            "group": self._cmd_group,
            "select": self._cmd_select,
            "url": self._cmd_url,
            "status": self._cmd_status,
            "switch": self._cmd_switch,
            "custom": self._cmd_custom,
            "help": lambda _: print_help(),
            "quit": lambda _: self._quit(),
            "exit": lambda _: self._quit(),
        }

        handler = handlers.get(cmd.lower())
        if handler:
            try:
                handler([cmd] + rest)
            except EndpointsError as exc:
                err(str(exc))
        else:
            err(f"Unknown command: {cmd!r}  — type /help")

    # ── Slash commands ────────────────────────────────────────────────────────

    def _handle_slash(self, line: str) -> None:
        cmd = line.split()[0].lower()
        {
            "/help": lambda: print_help(),
            "/quit": self._quit,
            "/exit": self._quit,
            "/clear": lambda: console.clear(),
            "/version": lambda: console.print(
                f"  [ns.accent]nodeswitch[/ns.accent] [ns.muted]v{__version__}[/ns.muted]"
            ),
        }.get(cmd, lambda: err(f"Unknown slash command: {cmd}  — type /help"))()

    def _quit(self) -> None:
        self._running = False

    # ── Commands ──────────────────────────────────────────────────────────────

    def _cmd_list(self, args: list[str]) -> None:
        print_directory(self.state.to_dict(), expand_all="--all" in args[1:])

    def _cmd_group(self, args: list[str]) -> None:
        """group <n>"""
        if len(args) < 2 or not args[1].isdigit() or int(args[1]) >= len(self.state.groups):
            err(f"Usage: group <0..{len(self.state.groups) - 1}>")
            return
        self.state.change_group(int(args[1]))
        print_directory(self.state.to_dict())

    def _cmd_select(self, args: list[str]) -> None:
        """select <network> [provider name or url]"""
        if len(args) < 2:
            err("Usage: select <network> [provider]")
            return
        network = args[1]
        found = find_network(self.state.groups, network)
        if found is None:
            err(f"Unknown network: {network!r}")
            return

        if len(args) > 2:
            wanted = " ".join(args[2:])
            match = next((p for p in found.providers if wanted in (p.name, p.url)), None)
            if match is None:
                err(f"{network} has no provider {wanted!r}")
                return
            url = match.url
        else:
            url = self.state.preferred_url(network)

        self.state.select(network, url)
        ok(f"{network} → [bold]{url}[/bold]")
        self._hint()

    def _cmd_url(self, args: list[str]) -> None:
        """url <endpoint>"""
        if len(args) < 2:
            err("Usage: url <ws://…>")
            return
        selection = self.state.select_url(args[1])
        if not selection.is_url_valid:
            warn("Not a valid ws://, wss:// or light:// endpoint")
        self._hint()

    def _cmd_status(self, _args: list[str]) -> None:
        print_selection(self.state.to_dict())

    def _cmd_switch(self, _args: list[str]) -> None:
        target = self.state.apply()
        ok(f"Switched to [bold]{self.state.selection.api_url}[/bold]")
        info(f"Reload: [bold]{target}[/bold]")

    def _cmd_custom(self, args: list[str]) -> None:
        """custom add|remove <url>"""
        if len(args) < 3 or args[1] not in ("add", "remove"):
            err("Usage: custom add|remove <url>")
            return
        if args[1] == "add":
            urls = add_custom_endpoint(args[2])
            ok(f"Saved [bold]{args[2]}[/bold] — visible after restarting the picker")
        else:
            urls = remove_custom_endpoint(args[2])
        print_custom(urls)

    def _hint(self) -> None:
        if self.state.is_switch_disabled:
            info("Switch unavailable for this selection.")
        else:
            info("Type [bold]switch[/bold] to apply.")
