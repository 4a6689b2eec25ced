"""Command-line interface for skel.

Usage::

    skel use ./templates/python-lib ./my-lib
    skel use ./templates/python-lib ./my-lib --use-defaults
    skel use ./templates/python-lib ./my-lib --context ./answers.json
    skel info ./templates/python-lib
    skel config ./skel.json
    skel --config ./skel.json use ./templates/python-lib ./my-lib
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from skel.config import Config
from skel.errors import SkelError
from skel.template import get
from skel.utils import (
    console,
    ensure_dir,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skel",
        description="skel -- render directory-tree templates into new projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  skel use ./templates/python-lib ./my-lib\n"
            "  skel use ./templates/python-lib ./my-lib --use-defaults\n"
            "  skel info ./templates/python-lib\n"
            "  skel --config skel.json use ./templates/python-lib ./my-lib\n"
        ),
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print diagnostic output",
    )
    parser.add_argument(
        "--config",
        default=None,
        metavar="FILE",
        help="Settings file written by `skel config` (default: SKEL_* environment variables)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    use = subparsers.add_parser("use", help="Render a template into a target directory")
    use.add_argument("template", help="Path to the template directory")
    use.add_argument("target", help="Directory to create the project in")
    use.add_argument(
        "--use-defaults", "-d",
        action="store_true",
        help="Use the default value of every token instead of prompting",
    )
    use.add_argument(
        "--context", "-c",
        default=None,
        help="Context file to use instead of the template's project.json",
    )

    info = subparsers.add_parser("info", help="Show a template's metadata")
    info.add_argument("template", help="Path to the template directory")

    dump = subparsers.add_parser("config", help="Write the effective settings to a JSON file")
    dump.add_argument("path", help="File to write")

    return parser


def _use(args: argparse.Namespace, config: Config) -> int:
    template_root = Path(args.template)
    if not (template_root / config.template_dirname).is_dir():
        print_error(
            f"Error: {template_root} has no '{config.template_dirname}' directory"
        )
        return 1

    template = get(template_root, context_file=args.context, config=config)
    if args.use_defaults:
        template.use_default_values()

    target = Path(args.target)
    ensure_dir(target.parent)
    written = template.execute(target)

    if not written:
        print_warning("Template produced no files.")
    print_success(f"Created {target} ({len(written)} files)")
    return 0


def _info(args: argparse.Namespace, config: Config) -> int:
    metadata = get(args.template, config=config).info()
    rows = metadata.as_rows()
    if not rows:
        console.print(f"{args.template} has no metadata.", markup=False)
        return 0
    print_summary_table(rows, title="Template")
    return 0


def _config(args: argparse.Namespace, config: Config) -> int:
    path = config.save(Path(args.path))
    print_success(f"Wrote settings to {path}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``skel`` and ``python -m skel``."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    handlers = {"use": _use, "info": _info, "config": _config}
    try:
        config = Config.load(args.config) if args.config else Config.from_env()
        if args.debug:
            config.debug = True
        code = handlers[args.command](args, config)
    except SkelError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_error("Aborted.")
        sys.exit(130)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
