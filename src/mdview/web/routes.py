"""Route table for discovered markdown files.

Built once at startup from the scan result and never modified afterwards.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from mdview.core.page import PageBuilder
from mdview.core.renderer import MarkdownRenderer
from mdview.core.types import URLPath
from mdview.core.urls import to_route
from mdview.errors import RouteResolutionError
from mdview.web.pages import MarkdownPageHandler

logger = logging.getLogger(__name__)

INDEX_ROUTE = "/"


class RouteTable(Mapping[URLPath, MarkdownPageHandler]):
    """Immutable mapping of routes to their page handlers."""

    def __init__(self, handlers: Iterable[MarkdownPageHandler]) -> None:
        """Initialize route table.

        Args:
            handlers: One handler per route

        Raises:
            RouteResolutionError: If two handlers claim the same route
        """
        self._handlers: dict[URLPath, MarkdownPageHandler] = {}
        for handler in handlers:
            existing = self._handlers.get(handler.route)
            if existing is not None:
                raise RouteResolutionError(
                    f"Route {handler.route} claimed by both {existing.source_path} "
                    f"and {handler.source_path}"
                )
            self._handlers[handler.route] = handler
            logger.debug(f"Registered {handler.route} -> {handler.source_path}")

    @classmethod
    def build(
        cls,
        root: Path,
        paths: Iterable[Path],
        renderer: MarkdownRenderer,
        pages: PageBuilder,
    ) -> "RouteTable":
        """Create a handler for every scanned markdown path.

        Args:
            root: Served root directory
            paths: Markdown paths from the scanner
            renderer: Shared markdown renderer
            pages: Shared page builder

        Returns:
            RouteTable with one handler per path

        Raises:
            RouteResolutionError: If a path cannot be mapped to a route
        """
        return cls(
            MarkdownPageHandler(
                route=to_route(root, path),
                source_path=path,
                renderer=renderer,
                pages=pages,
            )
            for path in paths
        )

    def __getitem__(self, route: URLPath) -> MarkdownPageHandler:
        return self._handlers[route]

    def __iter__(self) -> Iterator[URLPath]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def is_page(self, path: str) -> bool:
        """Check whether path is the index or a markdown page."""
        return path == INDEX_ROUTE or path in self._handlers
