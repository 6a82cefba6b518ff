"""Terminal output for the openrpc-model CLI.

Decoded documents, tables and ``inspect info`` data go to **stdout** so they
can be piped into ``jq`` or redirected with ``-o``. Everything that describes
what happened (the ``check`` verdict, version warnings, decode errors,
``--verbose`` traces) goes to **stderr**.

Three renderings exist for stdout data:

* ``RICH`` -- Rich tables and pretty-printed model trees, used when stdout is
  a colour-capable terminal (``AUTO`` resolves to it).
* ``PLAIN`` -- tab-separated rows and ``repr`` output, for pipes and
  ``NO_COLOR``/``TERM=dumb`` terminals.
* ``JSON`` -- documents dumped with their wire names (``termsOfService``,
  ``paramStructure``), tables as arrays of objects.

:func:`~openrpc_model.app.main_callback` builds one :class:`OutputManager`
from the global flags and installs it with :func:`set_output`; commands call
the module-level helpers.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.pretty import Pretty
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Rendering used for stdout data."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Routes command output to stdout and diagnostics to stderr.

    Args:
        format: Rendering for stdout data. ``AUTO`` picks ``RICH`` on a
            colour terminal and ``PLAIN`` otherwise.
        no_color: Strip colour from both streams.
        quiet: Drop ``info`` and ``success`` messages.
        verbose: Show ``debug`` messages.
        output_file: Write stdout data to this path instead.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format == OutputFormat.AUTO:
            colour_tty = _is_tty() and not self._no_color
            format = OutputFormat.RICH if colour_tty else OutputFormat.PLAIN
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
    # stdout
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Write a dict, list or scalar (e.g. the ``inspect info`` summary)."""
        if self._output_file:
            self._write_to_file(_to_json(data))
        elif self._format == OutputFormat.JSON:
            self.print_data(_to_json(data))
        elif self._format == OutputFormat.PLAIN:
            self._print_plain(data)
        else:
            self._stdout.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))

    def print_model(self, model: BaseModel) -> None:
        """Write a decoded entity, usually a whole :class:`~openrpc_model.models.Document`.

        JSON output and ``-o`` files carry wire names so the result can be
        decoded again.
        """
        if self._output_file or self._format == OutputFormat.JSON:
            text = _to_json(model.model_dump(mode="json", by_alias=True))
            if self._output_file:
                self._write_to_file(text)
            else:
                self.print_data(text)
        elif self._format == OutputFormat.PLAIN:
            self.print_data(repr(model))
        else:
            self._stdout.print(Pretty(model, expand_all=True))

    def print_data(self, text: str) -> None:
        """Write one line of raw text, appending to the ``-o`` file when set."""
        if self._output_file:
            with open(self._output_file, "a", encoding="utf-8") as f:
                f.write(text if text.endswith("\n") else text + "\n")
        else:
            print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows such as the ``inspect methods`` listing.

        JSON renders one object per row keyed by header; PLAIN renders a
        tab-separated header line followed by the rows and drops *title*.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(
                json.dumps([dict(zip(headers, row)) for row in rows], indent=2, ensure_ascii=False)
            )
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, style="green")

    def warning(self, message: str) -> None:
        self._diagnostic(message, label="Warning:", label_style="yellow")

    def error(self, message: str) -> None:
        self._diagnostic(message, label="Error:", label_style="bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic(message, label="[debug]", style="dim")

    def _diagnostic(
        self,
        message: str,
        label: str = "",
        label_style: Optional[str] = None,
        style: Optional[str] = None,
    ) -> None:
        """Write one stderr line.

        *message* is escaped: decode errors quote document content, and a
        bracketed value there must not be read as Rich markup.
        """
        if self._no_color:
            print(f"{label} {message}" if label else message, file=sys.stderr, flush=True)
            return

        text = escape(message)
        if label:
            head = escape(label)
            if label_style:
                head = f"[{label_style}]{head}[/{label_style}]"
            text = f"{head} {text}"
        if style:
            text = f"[{style}]{text}[/{style}]"
        self._stderr.print(text)

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _print_plain(self, data: Any) -> None:
        if isinstance(data, dict):
            for key, value in data.items():
                self.print_data(f"{key}\t{value}")
        elif isinstance(data, list):
            for item in data:
                self.print_data(str(item))
        else:
            self.print_data(str(data))

    def _write_to_file(self, content: str) -> None:
        assert self._output_file is not None
        with open(self._output_file, "w", encoding="utf-8") as f:
            f.write(content if content.endswith("\n") else content + "\n")


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating an ``AUTO`` one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests use this between CliRunner runs)."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_model(model: BaseModel) -> None:
    get_output().print_model(model)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def debug(message: str) -> None:
    get_output().debug(message)
