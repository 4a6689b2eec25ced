"""The ``Template`` handle: one template directory, ready to execute.

A template directory looks like::

    my-template/
        project.json        optional token context
        __metadata.json     optional descriptive metadata
        template/           the literal tree to render

``get()`` loads the context and metadata once; ``Template.execute()`` binds
fresh resolvers and materializes the tree on every call.
"""

from __future__ import annotations

from pathlib import Path

from skel.config import Config, RenderOptions
from skel.template.binding import PromptFactory, bind_resolvers
from skel.template.context import Context, Metadata, load_context, load_metadata
from skel.template.materializer import TreeMaterializer
from skel.utils import print_debug, set_debug


class Template:
    """A loaded template.

    Attributes:
        path: Root of the literal template tree (``<root>/template``).
        context: Token context loaded from the context file.
        metadata: Descriptive metadata loaded from the metadata file.
        options: Options used by ``execute`` when none are passed explicitly.
    """

    def __init__(
        self,
        path: str | Path,
        context: Context | None = None,
        metadata: Metadata | None = None,
        config: Config | None = None,
        prompt_factory: PromptFactory | None = None,
    ) -> None:
        self.path = Path(path)
        self.context = context if context is not None else Context()
        self.metadata = metadata if metadata is not None else Metadata()
        self.config = config or Config()
        self.options = RenderOptions()
        self.prompt_factory = prompt_factory

    def use_default_values(self) -> None:
        """Execute with default values instead of prompting.

        Takes effect for every later ``execute`` call that does not pass its
        own options.
        """
        self.options = RenderOptions(use_defaults=True)

    def info(self) -> Metadata:
        """Return the template's metadata."""
        return self.metadata

    def execute(self, target_dir: str | Path, options: RenderOptions | None = None) -> list[Path]:
        """Render the template into *target_dir*.

        Args:
            target_dir: Destination directory; created if missing, but its
                parent must exist.
            options: Overrides the handle's options for this call only.

        Returns:
            Paths of the files written, in walk order.

        Raises:
            BindingError: If the context cannot be bound.
            RenderError: If a path or file body fails to render.
            FilesystemError: If an output entry cannot be written.
        """
        options = options or self.options
        resolvers = bind_resolvers(self.context, options, self.prompt_factory)
        print_debug(f"bound {len(resolvers)} tokens for {self.path}")
        materializer = TreeMaterializer(self.path, self.config)
        return materializer.materialize(target_dir, resolvers, options)


def get(
    path: str | Path,
    context_file: str | Path | None = None,
    config: Config | None = None,
) -> Template:
    """Load the template rooted at *path*.

    Args:
        path: Template root directory.
        context_file: Context file to use instead of the template's own
            ``project.json``.
        config: File names and materialization settings.  Defaults to
            ``Config.from_env()``.

    Raises:
        ConfigError: If the context or metadata file is malformed.
    """
    config = config or Config.from_env()
    set_debug(config.debug)

    root = Path(path).resolve()
    if context_file is None:
        context_file = root / config.context_filename
    print_debug(f"loading context from {context_file}")

    context = load_context(context_file)
    metadata = load_metadata(root, config.metadata_filename)
    return Template(
        root / config.template_dirname,
        context=context,
        metadata=metadata,
        config=config,
    )
