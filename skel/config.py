"""skel configuration.

Typed settings for locating the pieces of a template directory and for
controlling how a template is materialized.  All settings use Pydantic v2
models so they are validated at construction time and can be serialised
to/from JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from skel.errors import ConfigError, FilesystemError
from skel.utils import NotFound, read_json_document


DEFAULT_BINARY_SUFFIXES: list[str] = [
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".bmp",
    ".ico",
    ".webp",
    ".tiff",
    ".woff",
    ".woff2",
    ".ttf",
    ".otf",
    ".zip",
    ".gz",
    ".jar",
    ".pdf",
]


class RenderOptions(BaseModel):
    """Per-call execution options.

    Passed explicitly to binding and materializing so that the choice between
    interactive and default values is made at call time.
    """

    model_config = ConfigDict(frozen=True)

    use_defaults: bool = Field(
        default=False, description="Resolve every token to its default without prompting"
    )


class Config(BaseModel):
    """Global skel configuration.

    Describes where a template keeps its context, metadata and tree, and how
    the tree is written out.  Instances are typically created once by the CLI
    (or by ``skel.template.get``) and passed to every ``Template``.
    """

    context_filename: str = Field(default="project.json")
    metadata_filename: str = Field(default="__metadata.json")
    template_dirname: str = Field(default="template")
    binary_suffixes: list[str] = Field(default_factory=lambda: list(DEFAULT_BINARY_SUFFIXES))
    dir_mode: int = Field(default=0o755, ge=0, le=0o7777)
    debug: bool = Field(default=False)

    @field_validator("binary_suffixes")
    @classmethod
    def _normalise_suffixes(cls, value: list[str]) -> list[str]:
        suffixes = []
        for suffix in value:
            suffix = suffix.strip().lower()
            if not suffix:
                continue
            if not suffix.startswith("."):
                suffix = "." + suffix
            suffixes.append(suffix)
        return suffixes

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def is_binary(self, path: str | Path) -> bool:
        """Return ``True`` if *path* names a file copied without rendering."""
        return str(path).lower().endswith(tuple(self.binary_suffixes))

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Persist the configuration to a JSON file and return its path.

        Raises:
            FilesystemError: If the file cannot be written.
        """
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            raise FilesystemError(target, f"Cannot write config ({exc.strerror or exc})") from exc
        return target

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        """Load a configuration written by :meth:`save`.

        Keys left out of the file keep their defaults.

        Raises:
            ConfigError: If the file is missing, is not a JSON object, or
                holds invalid settings.
        """
        document = read_json_document(path)
        if isinstance(document, NotFound):
            raise ConfigError("Config file not found", document.path)
        try:
            return cls.model_validate(document.data)
        except ValidationError as exc:
            raise ConfigError("Invalid config file", document.path, str(exc)) from exc

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SKEL_CONTEXT_FILENAME, SKEL_METADATA_FILENAME, SKEL_TEMPLATE_DIRNAME,
            SKEL_BINARY_SUFFIXES (comma-separated), SKEL_DEBUG.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SKEL_CONTEXT_FILENAME"):
            kwargs["context_filename"] = os.environ["SKEL_CONTEXT_FILENAME"]
        if os.environ.get("SKEL_METADATA_FILENAME"):
            kwargs["metadata_filename"] = os.environ["SKEL_METADATA_FILENAME"]
        if os.environ.get("SKEL_TEMPLATE_DIRNAME"):
            kwargs["template_dirname"] = os.environ["SKEL_TEMPLATE_DIRNAME"]
        if os.environ.get("SKEL_BINARY_SUFFIXES"):
            kwargs["binary_suffixes"] = [
                s for s in os.environ["SKEL_BINARY_SUFFIXES"].split(",") if s.strip()
            ]

        debug = os.environ.get("SKEL_DEBUG", "").strip().lower()
        kwargs["debug"] = debug in ("1", "true", "yes", "on")

        return cls(**kwargs)
