"""Index page handler."""

from aiohttp import web

from mdview.app_keys import pages_key
from mdview.errors import RenderError
from mdview.web.responses import html_response, internal_server_error

WELCOME_BODY = "<p>Welcome! Click a link in the nav to view markdown</p>"


async def get_index(request: web.Request) -> web.Response:
    pages = request.app[pages_key]
    try:
        html = pages.build(WELCOME_BODY)
    except RenderError as e:
        return internal_server_error(e)
    return html_response(html)
