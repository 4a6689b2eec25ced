"""Shared utility functions for skel.

Provides JSON document loading with explicit absence handling, file-system
helpers used by the tree walk, and Rich-based console reporting.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skel.errors import ConfigError

console = Console()

_debug_enabled = False

_NON_WHITESPACE = re.compile(rb"\S")


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Found:
    """A document that exists and was parsed."""

    path: Path
    data: dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    """A document that does not exist on disk."""

    path: Path


def read_json_document(path: str | Path) -> Found | NotFound:
    """Load a JSON object from *path*.

    Returns ``NotFound`` when the file does not exist.  Any other failure
    (unreadable file, invalid JSON, a root that is not an object) raises
    ``ConfigError`` carrying the path and the parser's message.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return NotFound(file_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError("Cannot read file", file_path, str(exc)) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError("Invalid JSON", file_path, str(exc)) from exc

    if not isinstance(data, dict):
        raise ConfigError(
            "Expected a JSON object at the top level",
            file_path,
            f"got {type(data).__name__}",
        )
    return Found(file_path, data)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


def is_only_whitespace(content: bytes) -> bool:
    """Return ``True`` if *content* holds nothing but whitespace."""
    return _NON_WHITESPACE.search(content) is None


def walk_tree(root: Path):
    """Yield *root* and every entry below it, depth-first.

    A directory is yielded before its children; the children of each
    directory are visited in lexical order of their names, so the order
    matches the on-disk layout deterministically.
    """
    yield root
    if root.is_dir() and not root.is_symlink():
        for child in sorted(root.iterdir(), key=lambda p: p.name):
            yield from walk_tree(child)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def set_debug(enabled: bool) -> None:
    """Turn ``print_debug`` output on or off."""
    global _debug_enabled
    _debug_enabled = enabled


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_debug(message: str) -> None:
    """Print a dim diagnostic message when debug output is enabled."""
    if _debug_enabled:
        console.print(f"[dim]{escape(message)}[/dim]", highlight=False)
