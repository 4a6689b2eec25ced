"""Pydantic v2 models and loaders for a template's context and metadata.

The context is the key-value document (``project.json``) whose entries become
substitution tokens.  Its values form a closed union: a scalar, a sequence of
scalars whose first element is the default, or one level of nested mapping
of the same.  Anything else is rejected when the file is loaded.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from skel.errors import ConfigError
from skel.utils import NotFound, print_debug, read_json_document

# ---------------------------------------------------------------------------
# Context value types
# ---------------------------------------------------------------------------

Scalar = Union[StrictBool, StrictInt, StrictFloat, StrictStr]
FieldValue = Union[Scalar, list[Scalar]]
ContextValue = Union[FieldValue, dict[str, FieldValue]]


class Context(RootModel[dict[str, ContextValue]]):
    """The template's token context, validated against the value union."""

    root: dict[str, ContextValue] = Field(default_factory=dict)

    def items(self):
        return self.root.items()

    def keys(self):
        return self.root.keys()

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, key: object) -> bool:
        return key in self.root

    def __getitem__(self, key: str) -> ContextValue:
        return self.root[key]


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


class Metadata(BaseModel):
    """Descriptive information about a template (``__metadata.json``)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = ""
    description: str = ""
    author: str = ""
    declared_fields: list[str] = Field(default_factory=list, alias="fields")
    tag: str = Field(default="", alias="Tag")
    repository: str = Field(default="", alias="Repository")
    version: str = ""
    created: Optional[datetime] = Field(default=None, alias="Created")

    def as_rows(self) -> dict[str, str]:
        """Return the non-empty fields as display labels mapped to strings."""
        rows: dict[str, str] = {}
        if self.name:
            rows["Name"] = self.name
        if self.tag:
            rows["Tag"] = self.tag
        if self.description:
            rows["Description"] = self.description
        if self.author:
            rows["Author"] = self.author
        if self.version:
            rows["Version"] = self.version
        if self.repository:
            rows["Repository"] = self.repository
        if self.created is not None:
            rows["Created"] = self.created.strftime("%a %b %d %H:%M %Y")
        if self.declared_fields:
            rows["Fields"] = ", ".join(self.declared_fields)
        return rows


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


def load_context(path: str | Path) -> Context:
    """Load the token context from *path*.

    A missing file yields an empty ``Context``.

    Raises:
        ConfigError: If the file is unreadable, is not a JSON object, or holds
            values outside the supported shapes (e.g. ``null`` or mappings
            nested more than one level deep).
    """
    document = read_json_document(path)
    if isinstance(document, NotFound):
        print_debug(f"no context file at {document.path}, using an empty context")
        return Context()

    try:
        return Context.model_validate(document.data)
    except ValidationError as exc:
        raise ConfigError("Unsupported context value", document.path, str(exc)) from exc


def load_metadata(template_root: str | Path, filename: str = "__metadata.json") -> Metadata:
    """Load the metadata file from *template_root*.

    A missing file yields an empty ``Metadata``.

    Raises:
        ConfigError: If the file exists but is malformed.
    """
    document = read_json_document(Path(template_root) / filename)
    if isinstance(document, NotFound):
        return Metadata()

    try:
        return Metadata.model_validate(document.data)
    except ValidationError as exc:
        raise ConfigError("Invalid template metadata", document.path, str(exc)) from exc
