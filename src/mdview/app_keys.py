"""Application keys for type-safe app configuration access."""

from aiohttp import web

from mdview.config import Config
from mdview.core.page import PageBuilder
from mdview.web.routes import RouteTable

config_key = web.AppKey("config", Config)
pages_key = web.AppKey("pages", PageBuilder)
route_table_key = web.AppKey("route_table", RouteTable)
