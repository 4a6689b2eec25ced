"""Jinja2 rendering for template paths and file contents.

Provides the TemplateRenderer class which renders the entries of a template
tree with a resolver set.  Every token is handed to Jinja2 as a LazyValue:
the resolver behind it runs the first time the template prints, tests,
compares or iterates the value, so a token that only appears in a branch
that is not taken is never resolved (and never prompted for).  Undefined
tokens are errors.

File contents keep their line endings: a file written with CRLF renders
with CRLF.
"""

from __future__ import annotations

import base64
import functools
import getpass
import json
import os
import re
import secrets
import socket
import uuid as _uuid
from collections.abc import Callable, Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from skel.errors import FilesystemError, RenderError


# ---------------------------------------------------------------------------
# Lazy token values
# ---------------------------------------------------------------------------


class LazyValue:
    """Stands in for a token's value until a template actually uses it.

    The resolver is called at most once per render; after that every
    operation is forwarded to the resolved value.
    """

    __slots__ = ("_resolver", "_value", "_resolved")

    def __init__(self, resolver: Callable[[], Any]) -> None:
        self._resolver = resolver
        self._value: Any = None
        self._resolved = False

    def _get(self) -> Any:
        if not self._resolved:
            self._value = self._resolver()
            self._resolved = True
        return self._value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._get(), name)

    def __repr__(self) -> str:
        if self._resolved:
            return repr(self._value)
        return "<LazyValue (unresolved)>"

    def __str__(self) -> str:
        return str(self._get())

    def __format__(self, spec: str) -> str:
        return format(self._get(), spec)

    def __bool__(self) -> bool:
        return bool(self._get())

    def __int__(self) -> int:
        return int(self._get())

    def __float__(self) -> float:
        return float(self._get())

    def __index__(self) -> int:
        return self._get().__index__()

    def __hash__(self) -> int:
        return hash(self._get())

    # Containers
    def __iter__(self):
        return iter(self._get())

    def __len__(self) -> int:
        return len(self._get())

    def __contains__(self, item: Any) -> bool:
        return _unwrap(item) in self._get()

    def __getitem__(self, key: Any) -> Any:
        return self._get()[_unwrap(key)]

    # Comparisons
    def __eq__(self, other: Any) -> bool:
        return self._get() == _unwrap(other)

    def __ne__(self, other: Any) -> bool:
        return self._get() != _unwrap(other)

    def __lt__(self, other: Any) -> bool:
        return self._get() < _unwrap(other)

    def __le__(self, other: Any) -> bool:
        return self._get() <= _unwrap(other)

    def __gt__(self, other: Any) -> bool:
        return self._get() > _unwrap(other)

    def __ge__(self, other: Any) -> bool:
        return self._get() >= _unwrap(other)

    # Arithmetic
    def __neg__(self) -> Any:
        return -self._get()

    def __add__(self, other: Any) -> Any:
        return self._get() + _unwrap(other)

    def __radd__(self, other: Any) -> Any:
        return _unwrap(other) + self._get()

    def __sub__(self, other: Any) -> Any:
        return self._get() - _unwrap(other)

    def __rsub__(self, other: Any) -> Any:
        return _unwrap(other) - self._get()

    def __mul__(self, other: Any) -> Any:
        return self._get() * _unwrap(other)

    def __rmul__(self, other: Any) -> Any:
        return _unwrap(other) * self._get()

    def __truediv__(self, other: Any) -> Any:
        return self._get() / _unwrap(other)

    def __rtruediv__(self, other: Any) -> Any:
        return _unwrap(other) / self._get()

    def __floordiv__(self, other: Any) -> Any:
        return self._get() // _unwrap(other)

    def __rfloordiv__(self, other: Any) -> Any:
        return _unwrap(other) // self._get()

    def __mod__(self, other: Any) -> Any:
        return self._get() % _unwrap(other)

    def __rmod__(self, other: Any) -> Any:
        return _unwrap(other) % self._get()

    def __pow__(self, other: Any) -> Any:
        return self._get() ** _unwrap(other)


def _unwrap(value: Any) -> Any:
    if isinstance(value, LazyValue):
        return value._get()
    return value


def _unwrapping_test(test: Callable[..., bool]) -> Callable[..., bool]:
    """Wrap a Jinja2 test so ``is string`` and friends see the real value."""

    @functools.wraps(test)
    def wrapper(*args: Any, **kwargs: Any) -> bool:
        return test(*(_unwrap(a) for a in args), **kwargs)

    return wrapper


def _dumps(obj: Any, **kwargs: Any) -> str:
    return json.dumps(obj, default=_unwrap, **kwargs)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the entries of one template tree.

    File contents are read from *template_dir*; relative paths are rendered
    as inline templates.  Both use the same filters and globals.  Files with
    CRLF line endings are rendered by ``crlf_env``, an overlay of ``env``
    that writes ``\\r\\n``.
    """

    def __init__(self, template_dir: str | Path) -> None:
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["slugify"] = _slugify_filter
        self.env.filters["pascal_case"] = _pascal_case_filter
        self.env.filters["snake_case"] = _snake_case_filter
        self.env.filters["camel_case"] = _camel_case_filter
        self.env.filters["to_binary"] = _to_binary_filter
        self.env.filters["format_filesize"] = _format_filesize_filter
        for name, test in list(self.env.tests.items()):
            self.env.tests[name] = _unwrapping_test(test)
        self.env.policies["json.dumps_function"] = _dumps
        # Helper functions
        self.env.globals.update(
            env=_env_global,
            now=_now_global,
            hostname=_hostname_global,
            username=_username_global,
            uuid=_uuid_global,
            random_base64=_random_base64_global,
        )
        self.crlf_env = self.env.overlay(newline_sequence="\r\n")

    # -- Rendering ----------------------------------------------------------

    def render_path(
        self, relative_path: str | Path, resolvers: Mapping[str, Callable[[], Any]]
    ) -> str:
        """Render a path relative to the template root.

        Raises:
            RenderError: If the path is not a valid template or uses an
                undefined token.
        """
        name = Path(relative_path).as_posix()
        try:
            return self.env.from_string(name).render(_wrap(resolvers))
        except TemplateError as exc:
            raise RenderError(name, f"invalid file name template: {exc}") from exc

    def render(
        self, template_path: str | Path, resolvers: Mapping[str, Callable[[], Any]]
    ) -> str:
        """Render the contents of a file under the template root.

        Args:
            template_path: Path relative to the template directory.
            resolvers: Token name to resolver mapping.

        Raises:
            RenderError: If the file cannot be decoded, is not a valid
                template, or uses an undefined token.
            FilesystemError: If the file cannot be read.
        """
        name = Path(template_path).as_posix()
        source_path = self.template_dir / name
        try:
            raw = source_path.read_bytes()
        except OSError as exc:
            raise FilesystemError(source_path, f"Cannot read file ({exc.strerror or exc})") from exc

        try:
            source = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RenderError(name, f"not a UTF-8 text file ({exc.reason})") from exc

        env = self.crlf_env if "\r\n" in source else self.env
        try:
            return env.from_string(source).render(_wrap(resolvers))
        except TemplateError as exc:
            raise RenderError(name, str(exc)) from exc

    def render_string(
        self, template_string: str, resolvers: Mapping[str, Callable[[], Any]]
    ) -> str:
        """Render an inline template string with the provided resolvers."""
        try:
            return self.env.from_string(template_string).render(_wrap(resolvers))
        except TemplateError as exc:
            raise RenderError("<string>", str(exc)) from exc


def _wrap(resolvers: Mapping[str, Callable[[], Any]]) -> dict[str, LazyValue]:
    return {name: LazyValue(resolver) for name, resolver in resolvers.items()}


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def _words(value: Any) -> list[str]:
    """Split an identifier-ish string into words.

    ``HTTPServer``, ``http-server``, ``http_server`` and ``Http Server`` all
    give ``["HTTP", "Server"]`` (modulo case).
    """
    text = _CASE_BOUNDARY.sub(r"\1 \2", _ACRONYM_BOUNDARY.sub(r"\1 \2", str(value)))
    return [word for word in _SEPARATORS.split(text) if word]


def _slugify_filter(value: str) -> str:
    """``My Project!`` -> ``my-project``."""
    return "-".join(word.lower() for word in _words(value))


def _pascal_case_filter(value: str) -> str:
    return "".join(word.capitalize() for word in _words(value))


def _snake_case_filter(value: str) -> str:
    return "_".join(word.lower() for word in _words(value))


def _camel_case_filter(value: str) -> str:
    words = _words(value)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def _to_binary_filter(value: int) -> str:
    """Format an integer in base 2, e.g. ``5`` -> ``101``."""
    return format(int(value), "b")


def _format_filesize_filter(value: float) -> str:
    """Format a byte count, e.g. ``1536`` -> ``1.5 KB``."""
    size = float(value)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if abs(size) < 1024 or unit == "TB":
            break
        size /= 1024
    if unit == "B":
        return f"{int(size)} B"
    return f"{size:.1f} {unit}"


# ---------------------------------------------------------------------------
# Jinja2 globals
# ---------------------------------------------------------------------------

def _env_global(name: str, default: str = "") -> str:
    return os.environ.get(name, default)


def _now_global(fmt: str = "%Y-%m-%d") -> str:
    return datetime.now().strftime(fmt)


def _hostname_global() -> str:
    return socket.gethostname()


def _username_global() -> str:
    return getpass.getuser()


def _uuid_global() -> str:
    return str(_uuid.uuid4())


def _random_base64_global(length: int = 32) -> str:
    """Return *length* random bytes encoded as base64."""
    return base64.b64encode(secrets.token_bytes(length)).decode("ascii")
