"""Terminal output for the ocidist CLI.

Data (client summaries, ``Authorization`` header lines, config contents) is
written to stdout; diagnostics (status, errors, suggestions, debug lines) go
to stderr so that ``ocidist header --show-secret | ...`` pipes cleanly.

The rendering mode is chosen once per invocation:

* ``JSON`` -- machine-readable objects, one document per command.
* ``PLAIN`` -- tab-separated ``key<TAB>value`` lines; the default when
  stdout is not a TTY.
* ``RICH`` -- Rich tables and highlighted JSON on an interactive terminal.

Colour is disabled by ``--no-color``, ``NO_COLOR`` or ``TERM=dumb``.
:func:`~ocidist.app.main_callback` installs the process-wide
:class:`OutputManager` via :func:`set_output`; commands use the module-level
helpers.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from ocidist.auth import AUTHORIZATION
from ocidist.models import AuthMode

if TYPE_CHECKING:
    from ocidist.client import Client

MASK = "****"


class OutputFormat(str, Enum):
    """Rendering modes. ``AUTO`` picks ``RICH`` on a colour TTY, else ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


def mask_authorization(value: str) -> str:
    """Hide the credential part of an ``Authorization`` value, keeping the scheme."""
    scheme, _, _ = value.partition(" ")
    return f"{scheme} {MASK}"


def client_summary(client: Client) -> dict[str, Any]:
    """Describe a validated client without exposing its secret."""
    summary: dict[str, Any] = {
        "endpoint": str(client.endpoint),
        "auth_mode": client.auth_mode.value,
        "auth_enabled": client.auth_enabled,
    }
    if client.auth_mode == AuthMode.BASIC:
        summary["username"] = client.credential.username
    return summary


class OutputManager:
    """Routes CLI output to stdout/stderr in the selected format.

    Args:
        format: Desired output format.
        no_color: Disable colour and Rich markup.
        quiet: Suppress informational and success messages.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # Data (stdout)
    # ------------------------------------------------------------------ #

    def format_response(self, data: dict[str, Any], title: Optional[str] = None) -> None:
        """Render a flat mapping as JSON, ``key<TAB>value`` lines, or a table."""
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        elif self._format == OutputFormat.PLAIN:
            for key, value in data.items():
                self.print_data(f"{key}\t{_plain(value)}")
        elif any(isinstance(v, (dict, list)) for v in data.values()):
            text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            table = Table(title=title, show_header=False)
            table.add_column(style="bold cyan")
            table.add_column()
            for key, value in data.items():
                table.add_row(key, _plain(value))
            self._stdout.print(table)

    def client_summary(self, client: Client) -> None:
        """Print endpoint and auth mode of *client*."""
        self.format_response(client_summary(client), title="Registry client")

    def authorization(self, value: Optional[str], show_secret: bool = False) -> None:
        """Print the ``Authorization`` header a request would carry.

        *value* is ``None`` for anonymous clients; in JSON mode that is
        rendered as ``null``, otherwise as a note on stderr.
        """
        shown = value if value is None or show_secret else mask_authorization(value)
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps({AUTHORIZATION: shown}))
        elif shown is None:
            self.info("No Authorization header (anonymous access).")
        else:
            self.print_data(f"{AUTHORIZATION}: {shown}")

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diag(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diag(message, "green")

    def error(self, message: str) -> None:
        """Errors are never suppressed."""
        self._diag(f"Error: {message}", "bold red")

    def suggest(self, message: str) -> None:
        if not self._quiet:
            self._diag(f"→ {message}", "dim")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diag(f"[debug] {message}", "dim")

    def _diag(self, message: str, style: Optional[str] = None) -> None:
        if self._no_color:
            print(message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(message, style=style, markup=False)


def _plain(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when NO_COLOR is set (any value) or TERM=dumb."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the installed manager (tests swap stdout/stderr between runs)."""
    global _output
    _output = None


def format_response(data: dict[str, Any], title: Optional[str] = None) -> None:
    get_output().format_response(data, title)


def print_client_summary(client: Client) -> None:
    get_output().client_summary(client)


def print_authorization(value: Optional[str], show_secret: bool = False) -> None:
    get_output().authorization(value, show_secret)


def print_data(text: str) -> None:
    get_output().print_data(text)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
