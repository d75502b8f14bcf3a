"""``flashcards init``: prepare the workspace and write a config template."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Mapping, Sequence

from flashcards.config import (
    CONFIG_FILENAME,
    ConfigError,
    write_config_template,
)
from flashcards.core import workspace as workspace_mod


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flashcards init",
        description=(
            "Create the flashcards workspace and a starter "
            f"{CONFIG_FILENAME}."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to FLASHCARDS_HOME or "
            "~/.flashcards)."
        ),
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def _status(created: Mapping[str, bool], key: str) -> str:
    return "created" if created.get(key, False) else "exists"


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        layout = workspace_mod.ensure_workspace(path=args.path)
    except workspace_mod.WorkspaceError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    config_path = layout.path_for("config") / CONFIG_FILENAME
    config_status = "exists"
    if args.force or not config_path.exists():
        try:
            write_config_template(config_path, overwrite=args.force)
        except ConfigError as exc:
            sys.stderr.write(f"{exc}\n")
            return 1
        config_status = "written"

    if args.quiet:
        return 0

    home_status = _status(layout.created, "home")
    lines = [f"Workspace ready at {layout.home} ({home_status})"]
    width = max(len(name) for name in layout.directories)
    for name, directory in layout.items():
        status = _status(layout.created, name)
        lines.append(f"  {name.ljust(width)}  {directory} ({status})")
    lines.append(f"Config: {config_path} ({config_status})")
    sys.stdout.write("\n".join(lines) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
