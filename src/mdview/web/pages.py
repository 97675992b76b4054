"""Markdown page handler.

One handler value exists per discovered file. It owns its source path and
re-reads the file on every request.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from aiohttp import web

from mdview.core.page import PageBuilder
from mdview.core.renderer import MarkdownRenderer
from mdview.core.types import URLPath
from mdview.errors import FileAccessError, RenderError
from mdview.web.responses import html_response, internal_server_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkdownPageHandler:
    """Serves one markdown file as a rendered page."""

    route: URLPath
    source_path: Path
    renderer: MarkdownRenderer
    pages: PageBuilder

    async def handle(self, request: web.Request) -> web.Response:
        logger.debug(f"Rendering {self.source_path} for {request.path}")
        try:
            source = await self._read()
            body = self.renderer.render(source)
            html = self.pages.build(body)
        except (FileAccessError, RenderError) as e:
            return internal_server_error(e)
        return html_response(html)

    async def _read(self) -> bytes:
        """Read the source file in a worker thread.

        Raises:
            FileAccessError: If the file is gone or unreadable
        """
        try:
            return await asyncio.to_thread(self.source_path.read_bytes)
        except OSError as e:
            raise FileAccessError(f"Failed to read {self.source_path}: {e}") from e
