"""Filesystem helpers shared by tests."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Union

TreeValue = Union[str, bytes, "Tree", None]
Tree = Mapping[str, TreeValue]


def build_tree(base: Path, tree: Tree) -> None:
    """Create files and directories under ``base`` from a nested mapping.

    Strings and bytes become file contents, ``None`` an empty directory and
    nested mappings subdirectories.
    """

    for name, value in tree.items():
        path = base / name
        if isinstance(value, (str, bytes)):
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(value, bytes):
                path.write_bytes(value)
            else:
                path.write_text(value, encoding="utf-8")
        elif isinstance(value, Mapping):
            path.mkdir(parents=True, exist_ok=True)
            build_tree(path, value)  # type: ignore[arg-type]
        elif value is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            raise TypeError(f"Unsupported tree value for {path}: {value!r}")


@dataclass
class WorkspaceBuilder:
    """Helper bound to a tmp directory for concise tree creation."""

    root: Path

    def create(self, tree: Tree) -> Path:
        build_tree(self.root, tree)
        return self.root

    def write(self, relative: Union[str, Path], content: str) -> Path:
        path = self.root / Path(relative)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
