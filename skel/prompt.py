"""Interactive prompts for template tokens.

``new(label, default)`` returns a zero-argument callable.  The first call asks
the user for a value, offering *default* (or, for a list, its choices with
the first one preselected); later calls return the same answer without asking
again, so a token used in many files is only prompted for once.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt

from skel.utils import console as default_console

_UNSET = object()


class CachedPrompt:
    """A prompt that asks once and remembers the answer."""

    def __init__(self, label: str, default: Any, console: Console | None = None) -> None:
        self.label = label
        self.default = default
        self.console = console or default_console
        self._value: Any = _UNSET

    def __call__(self) -> Any:
        if self._value is _UNSET:
            self._value = ask(self.label, self.default, console=self.console)
        return self._value


def new(label: str, default: Any) -> CachedPrompt:
    """Create a prompt for *label* seeded with *default*."""
    return CachedPrompt(label, default)


def ask(label: str, default: Any, console: Console | None = None) -> Any:
    """Ask the user for a value of the same kind as *default*.

    Booleans become a yes/no confirmation, numbers are parsed as numbers, and
    a list offers its items as the only valid choices.  Pressing enter keeps
    the default.
    """
    console = console or default_console
    question = f"Please choose a value for [bold cyan]{label}[/bold cyan]"

    if isinstance(default, bool):
        return Confirm.ask(question, default=default, console=console)
    if isinstance(default, int):
        return IntPrompt.ask(question, default=default, console=console)
    if isinstance(default, float):
        return FloatPrompt.ask(question, default=default, console=console)
    if isinstance(default, (list, tuple)):
        if not default:
            return Prompt.ask(question, console=console)
        choices = [str(item) for item in default]
        answer = Prompt.ask(question, choices=choices, default=choices[0], console=console)
        # Map the answer back to the original item.
        return default[choices.index(answer)]
    return Prompt.ask(question, default=str(default), console=console)
