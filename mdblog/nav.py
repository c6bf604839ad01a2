from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from mdblog.explorer import ExplorerOptions, Node, explore

logger = logging.getLogger(__name__)

IGNORE_DIRS = [".git"]
IGNORE_FILES = [".DS_Store", ".gitignore", "README.md"]


@dataclass(frozen=True)
class NavEntry:
    name: str
    link: str
    key: str
    is_dir: bool
    children: tuple[NavEntry, ...] = ()


def link_to_key(link: str) -> str:
    """Strip the leading slash from a node link."""
    return link.lstrip("/")


def to_nav_entry(node: Node) -> NavEntry:
    """Project a tree node into a sidebar entry."""
    return NavEntry(
        name=node.name,
        link=node.link,
        key=link_to_key(node.link),
        is_dir=node.is_dir,
        children=tuple(to_nav_entry(child) for child in node.children),
    )


def first_document(tree: Node) -> Node | None:
    """Find the first leaf reachable through the first grouping.

    Directories are descended through their first child. Returns None when
    the tree holds no document.
    """
    if not tree.children:
        return None
    stack = [tree.children[0]]
    while stack:
        node = stack.pop()
        if not node.is_dir:
            return node
        if node.children:
            stack.append(node.children[0])
    return None


def build_navigation(content_dir: Path) -> tuple[list[NavEntry], Node | None]:
    """Build sidebar entries and the default document for content_dir."""
    options = ExplorerOptions(
        root_paths=[content_dir],
        recursive=True,
        ignore_dirs=IGNORE_DIRS,
        ignore_files=IGNORE_FILES,
    )
    try:
        tree = explore(options)
    except OSError as exc:
        logger.warning("Navigation unavailable for %s: %s", content_dir, exc)
        return [], None

    entries: list[NavEntry] = []
    for group in tree.children:
        for item in group.children:
            entries.append(to_nav_entry(item))

    return entries, first_document(tree)


def resolve_active(request_path: str, default_key: str) -> str:
    """Map a request path to the document key to show."""
    if request_path == "":
        return default_key
    return request_path


def is_active(entry: NavEntry, active: str) -> bool:
    """Check whether a sidebar entry is, or contains, the active document."""
    if entry.is_dir:
        return active.startswith(entry.key + "/")
    return entry.key == active


def inc(value: int) -> int:
    return value + 1
