"""Request dispatch for everything except the index and favicon.

The decoded request path is matched against the route table. Paths that
are not markdown pages fall through to referred file serving.
"""

from aiohttp import web

from mdview.app_keys import route_table_key
from mdview.core.types import URLPath
from mdview.web.files import serve_referred_file


async def dispatch(request: web.Request) -> web.StreamResponse:
    handler = request.app[route_table_key].get(URLPath(request.path))
    if handler is None:
        return await serve_referred_file(request)
    return await handler.handle(request)
