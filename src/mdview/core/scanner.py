"""Markdown file discovery.

Walks the served directory once at startup and returns the markdown files
that become routes.
"""

import logging
import os
from enum import StrEnum
from pathlib import Path

from mdview.errors import ScanError

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


class ScanOrder(StrEnum):
    """Ordering policy for discovered paths."""

    DEPTH = "depth"
    """Shallower files first, lexicographic within the same depth."""

    WALK = "walk"
    """Depth-first visitation, directory entries in lexical order."""


def is_markdown_name(name: str) -> bool:
    """Check whether a file name has the (case-sensitive) markdown extension.

    A file named exactly ".md" has no stem and is not a document.
    """
    return name.endswith(MARKDOWN_SUFFIX) and len(name) > len(MARKDOWN_SUFFIX)


def scan_markdown_paths(root: Path, order: ScanOrder = ScanOrder.DEPTH) -> list[Path]:
    """Find all markdown files under root.

    Args:
        root: Directory to walk
        order: Ordering policy for the returned paths

    Returns:
        Paths of regular markdown files, each prefixed with root

    Raises:
        ScanError: If any part of the walk fails
    """
    paths: list[Path] = []
    try:
        _walk(root, paths)
    except OSError as e:
        raise ScanError(f"Failed to scan {root}: {e}") from e

    if order is ScanOrder.DEPTH:
        paths.sort(key=lambda path: _depth_key(root, path))

    logger.debug(f"Discovered {len(paths)} markdown files under {root}")
    return paths


def _walk(directory: Path, paths: list[Path]) -> None:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            _walk(directory / entry.name, paths)
        elif entry.is_file() and is_markdown_name(entry.name):
            paths.append(directory / entry.name)


def _depth_key(root: Path, path: Path) -> tuple[int, str]:
    relative = path.relative_to(root)
    return len(relative.parts), relative.as_posix()
