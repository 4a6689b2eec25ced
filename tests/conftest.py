"""Shared pytest fixtures for the skel test suite.

Provides reusable fixtures for:
- Building template directories on disk from a dict of files
- Recording prompt factories that never read from stdin
- Default configuration instances
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from skel.config import Config
from skel.utils import set_debug


# ---------------------------------------------------------------------------
# Template directories
# ---------------------------------------------------------------------------

def build_template(
    root: Path,
    files: dict[str, str | bytes],
    context: dict[str, Any] | None = None,
    metadata: dict[str, Any] | None = None,
) -> Path:
    """Create a template directory under *root*.

    *files* maps paths relative to ``template/`` to their contents; a path
    ending in ``/`` creates an empty directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    tree = root / "template"
    tree.mkdir(exist_ok=True)

    for rel, content in files.items():
        path = tree / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")

    if context is not None:
        (root / "project.json").write_text(json.dumps(context), encoding="utf-8")
    if metadata is not None:
        (root / "__metadata.json").write_text(json.dumps(metadata), encoding="utf-8")
    return root


@pytest.fixture
def make_template(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture returning ``build_template`` rooted in ``tmp_path``."""

    def _make(
        files: dict[str, str | bytes],
        context: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
        name: str = "tmpl",
    ) -> Path:
        return build_template(tmp_path / name, files, context=context, metadata=metadata)

    return _make


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """A not-yet-existing output directory whose parent exists."""
    return tmp_path / "out"


@pytest.fixture(autouse=True)
def _reset_debug():
    """Debug output is module state; keep it off between tests."""
    set_debug(False)
    yield
    set_debug(False)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

class RecordingPrompts:
    """Prompt factory that answers from a dict and records every call.

    Labels missing from *answers* answer with their default value.
    """

    def __init__(self, answers: dict[str, Any] | None = None) -> None:
        self.answers = answers or {}
        self.created: list[tuple[str, Any]] = []
        self.asked: list[str] = []

    def __call__(self, label: str, default: Any) -> Callable[[], Any]:
        self.created.append((label, default))

        def _ask() -> Any:
            self.asked.append(label)
            return self.answers.get(label, default)

        return _ask


@pytest.fixture
def recording_prompts() -> RecordingPrompts:
    """A prompt factory with no canned answers."""
    return RecordingPrompts()


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> Config:
    """Default configuration, independent of the environment."""
    return Config()
