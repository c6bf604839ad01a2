from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path


@dataclass(frozen=True)
class Node:
    name: str
    link: str
    is_dir: bool = False
    children: tuple[Node, ...] = ()


@dataclass(frozen=True)
class ExplorerOptions:
    root_paths: list[Path]
    recursive: bool = True
    ignore_dirs: list[str] = field(default_factory=list)
    ignore_files: list[str] = field(default_factory=list)
    suffixes: tuple[str, ...] = (".md",)


def is_ignored(name: str, patterns: list[str]) -> bool:
    """Check a file or directory name against shell-style patterns."""
    return any(fnmatch(name, pattern) for pattern in patterns)


def make_link(path: Path, root: Path) -> str:
    """Build the URL key for a path relative to its explorer root."""
    rel = path.relative_to(root)
    if path.is_file():
        rel = rel.with_suffix("")
    return "/" + rel.as_posix()


def explore_dir(directory: Path, root: Path, options: ExplorerOptions) -> list[Node]:
    """List navigable nodes under directory, sorted by name."""
    nodes: list[Node] = []
    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        if path.is_dir() and not path.is_symlink():
            if not options.recursive or is_ignored(path.name, options.ignore_dirs):
                continue
            children = explore_dir(path, root, options)
            if not children:
                continue
            nodes.append(
                Node(
                    name=path.name,
                    link=make_link(path, root),
                    is_dir=True,
                    children=tuple(children),
                )
            )
            continue

        if not path.is_file() or is_ignored(path.name, options.ignore_files):
            continue
        if path.suffix not in options.suffixes:
            continue
        nodes.append(Node(name=path.stem, link=make_link(path, root)))
    return nodes


def explore(options: ExplorerOptions) -> Node:
    """Explore root paths and return a root node with one grouping per root.

    Raises OSError when a root cannot be listed.
    """
    groups: list[Node] = []
    for root in options.root_paths:
        root = Path(root)
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        groups.append(
            Node(
                name=root.name,
                link="/",
                is_dir=True,
                children=tuple(explore_dir(root, root, options)),
            )
        )
    return Node(name="", link="", is_dir=True, children=tuple(groups))
