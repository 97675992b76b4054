"""Plain responses shared by the handlers."""

import logging

from aiohttp import web

logger = logging.getLogger(__name__)


def html_response(html: str) -> web.Response:
    return web.Response(text=html, content_type="text/html")


def not_found(path: str) -> web.Response:
    logger.warning(f"Not found: {path}")
    return web.Response(status=404, text=f"404 - Not Found: {path}")


def internal_server_error(error: Exception) -> web.Response:
    logger.error(str(error))
    return web.Response(status=500, text=f"500 - Internal Server Error: {error}")
