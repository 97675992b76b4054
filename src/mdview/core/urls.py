"""Conversion between markdown file paths and URL routes.

A route is the root-relative POSIX path of a markdown file with the
extension removed, so "guides/setup.v2.md" is served at "/guides/setup.v2".
"""

from pathlib import Path, PurePosixPath

from mdview.core.scanner import MARKDOWN_SUFFIX, is_markdown_name
from mdview.core.types import URLPath
from mdview.errors import InvalidExtensionError, PathResolutionError


def to_route(root: Path, path: Path) -> URLPath:
    """Map a markdown file under root to its route.

    Args:
        root: Served root directory
        path: Markdown file path, prefixed with root

    Returns:
        Route starting with "/"

    Raises:
        InvalidExtensionError: If path does not end in ".md"
        PathResolutionError: If path is not under root
    """
    if not is_markdown_name(path.name):
        raise InvalidExtensionError(f"Path doesn't end in {MARKDOWN_SUFFIX}: {path}")

    try:
        relative = path.relative_to(root)
    except ValueError as e:
        raise PathResolutionError(f"Path {path} is not under {root}") from e

    posix = relative.as_posix()
    return URLPath(f"/{posix[: -len(MARKDOWN_SUFFIX)]}")


def to_file_path(route: str) -> Path:
    """Map a route back to the root-relative markdown path.

    Args:
        route: Route as produced by to_route()

    Returns:
        Relative path of the markdown file

    Raises:
        PathResolutionError: If route is not a document route
    """
    if not route.startswith("/") or route == "/":
        raise PathResolutionError(f"Not a document route: {route!r}")

    return Path(*PurePosixPath(f"{route[1:]}{MARKDOWN_SUFFIX}").parts)
