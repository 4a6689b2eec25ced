"""Materialize a template tree into a target directory.

Walks the template tree depth-first (a directory before its children,
children in lexical order), renders every entry's relative path, creates
directories, copies binary assets byte-for-byte and renders text files.  A
text file whose rendered output is only whitespace is removed again, which
lets a template ship optional files that vanish when their condition is
false.  The first failure aborts the walk; files written before it stay on
disk.
"""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from skel.config import Config, RenderOptions
from skel.errors import FilesystemError
from skel.template.renderer import TemplateRenderer
from skel.utils import is_only_whitespace, print_debug, print_success, walk_tree


class TreeMaterializer:
    """Writes one template tree under a target root.

    Attributes:
        template_dir: Root of the literal template tree.
        config: Settings for binary suffixes and directory permissions.
        renderer: Jinja2 renderer bound to ``template_dir``.
    """

    def __init__(self, template_dir: str | Path, config: Config | None = None) -> None:
        self.template_dir = Path(template_dir)
        self.config = config or Config()
        self.renderer = TemplateRenderer(self.template_dir)

    def materialize(
        self,
        target_root: str | Path,
        resolvers: Mapping[str, Callable[[], Any]],
        options: RenderOptions | None = None,
    ) -> list[Path]:
        """Render the whole tree into *target_root*.

        Args:
            target_root: Directory that receives the rendered tree.  Its
                parent must exist; the directory itself is created if needed.
            resolvers: Token name to resolver mapping used for every path and
                file body.
            options: Execution options; default-mode runs do not report
                created files.

        Returns:
            Paths of the files written and kept, in walk order.

        Raises:
            RenderError: If a path or a file body fails to render.
            FilesystemError: If an output entry cannot be created or removed.
        """
        options = options or RenderOptions()
        target_root = Path(target_root)
        written: list[Path] = []

        if not self.template_dir.is_dir():
            raise FilesystemError(self.template_dir, "Template directory not found")

        for source in walk_tree(self.template_dir):
            relative = source.relative_to(self.template_dir)
            new_name = self.renderer.render_path(relative, resolvers)
            target = target_root / new_name
            print_debug(f"{relative} -> {target}")

            if source.is_dir():
                self._make_dir(target)
                continue

            if self.config.is_binary(relative):
                self._copy_binary(source, target)
            elif not self._write_text(source, relative, target, resolvers):
                continue

            written.append(target)
            if not options.use_defaults:
                print_success(f"Created {new_name}")

        return written

    # ------------------------------------------------------------------
    # Entry handlers
    # ------------------------------------------------------------------

    def _make_dir(self, target: Path) -> None:
        try:
            target.mkdir(mode=self.config.dir_mode)
        except FileExistsError:
            if not target.is_dir():
                raise FilesystemError(
                    target, "A file already exists where a directory is expected"
                )
        except OSError as exc:
            raise FilesystemError(target, f"Cannot create directory ({exc.strerror})") from exc

    def _copy_binary(self, source: Path, target: Path) -> None:
        try:
            shutil.copy2(source, target)
        except OSError as exc:
            raise FilesystemError(target, f"Cannot copy file ({exc.strerror or exc})") from exc

    def _write_text(
        self,
        source: Path,
        relative: Path,
        target: Path,
        resolvers: Mapping[str, Callable[[], Any]],
    ) -> bool:
        """Render *source* into *target*.

        Returns ``False`` when the output was whitespace only and the file
        has been removed again.
        """
        content = self.renderer.render(relative, resolvers)

        try:
            mode = stat.S_IMODE(source.stat().st_mode)
            target.unlink(missing_ok=True)
            fd = os.open(target, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, mode)
            with open(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as exc:
            raise FilesystemError(target, f"Cannot write file ({exc.strerror or exc})") from exc

        try:
            written = target.read_bytes()
        except OSError as exc:
            print_debug(f"couldn't read back {target}: {exc}")
            return True

        if is_only_whitespace(written):
            print_debug(f"removing {target}, rendered output is empty")
            try:
                target.unlink()
            except OSError as exc:
                raise FilesystemError(target, f"Cannot remove empty file ({exc.strerror})") from exc
            return False
        return True
