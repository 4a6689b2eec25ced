"""Exception hierarchy for skel.

Every failure that can abort loading or executing a template derives from
``SkelError`` so that callers (the CLI in particular) can report it with a
single ``except`` clause.  Each subclass carries the path or key that caused
the failure.
"""

from __future__ import annotations

from pathlib import Path


class SkelError(Exception):
    """Base class for all template errors."""


class ConfigError(SkelError):
    """Raised when a context, metadata or settings file cannot be used.

    A *missing* context or metadata file is never a ``ConfigError``; absence
    is a supported state.  A settings file named with ``--config`` must exist.
    """

    def __init__(self, message: str, path: str | Path | None = None, detail: str = "") -> None:
        self.path = Path(path) if path is not None else None
        self.detail = detail
        text = message
        if self.path is not None:
            text = f"{message}: {self.path}"
        if detail:
            text = f"{text}\n{detail}"
        super().__init__(text)


class BindingError(SkelError):
    """Raised when a context value does not fit the one-level nesting contract."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"Cannot bind '{key}': {message}")


class RenderError(SkelError):
    """Raised when the template engine fails on a path or a file body."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"Failed to render {self.path}: {message}")


class FilesystemError(SkelError):
    """Raised when creating, copying or removing an output entry fails."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")
