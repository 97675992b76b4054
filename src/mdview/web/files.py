"""Favicon and referred file serving.

Files that are not markdown pages (images, attachments) are served only
when the request comes from one of this server's own pages. The Referer
check is a heuristic that keeps arbitrary paths from being browsed
directly, it is not access control.
"""

from pathlib import Path
from urllib.parse import unquote, urlsplit

from aiohttp import hdrs, web

from mdview.app_keys import config_key, route_table_key
from mdview.assets import get_favicon_path
from mdview.web.responses import not_found

FAVICON_ROUTE = "/favicon.ico"


async def get_favicon(request: web.Request) -> web.FileResponse:
    """Serve the bundled favicon."""
    return web.FileResponse(get_favicon_path())


async def serve_referred_file(request: web.Request) -> web.StreamResponse:
    """Serve a file under the root for requests made by our own pages."""
    if not _referred_by_own_page(request):
        return not_found(request.path)

    root = request.app[config_key].docs.source_dir
    target = resolve_under_root(root, request.match_info["path"])
    if target is None or not target.is_file():
        return not_found(request.path)

    return web.FileResponse(target)


def resolve_under_root(root: Path, relative: str) -> Path | None:
    """Resolve a request path inside root.

    Args:
        root: Served root directory
        relative: Path relative to root, as taken from the URL

    Returns:
        Resolved path, or None if it points outside root
    """
    base = root.resolve()
    candidate = (base / relative.lstrip("/")).resolve()
    if not candidate.is_relative_to(base):
        return None
    return candidate


def _referred_by_own_page(request: web.Request) -> bool:
    referer = request.headers.get(hdrs.REFERER)
    if not referer:
        return False

    parts = urlsplit(referer)
    if parts.netloc != request.host:
        return False

    routes = request.app[route_table_key]
    return routes.is_page(unquote(parts.path) or "/")
