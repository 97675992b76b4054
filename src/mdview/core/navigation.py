"""Navigation list builder.

Builds the navigation menu shown on every page from the scanned paths.
The menu is built once at startup and shared by all requests.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from mdview.core.types import URLPath
from mdview.core.urls import to_route


@dataclass(frozen=True)
class NavLink:
    """Navigation entry linking to one markdown page."""

    href: URLPath
    text: str


@dataclass(frozen=True)
class Navigation:
    """Ordered navigation entries."""

    links: tuple[NavLink, ...] = ()

    def __iter__(self) -> Iterator[NavLink]:
        return iter(self.links)

    def __len__(self) -> int:
        return len(self.links)

    @property
    def routes(self) -> list[URLPath]:
        """Routes in navigation order."""
        return [link.href for link in self.links]


def build_navigation(root: Path, paths: Iterable[Path]) -> Navigation:
    """Build navigation from scanned markdown paths.

    Args:
        root: Served root directory
        paths: Markdown paths in display order

    Returns:
        Navigation preserving the order of paths

    Raises:
        RouteResolutionError: If a path cannot be mapped to a route
    """
    links = []
    for path in paths:
        href = to_route(root, path)
        links.append(NavLink(href=href, text=href))
    return Navigation(links=tuple(links))
