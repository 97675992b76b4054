"""aiohttp server for mdview.

Application factory, route registration and the server lifecycle:
INITIALIZING -> SERVING -> DRAINING -> STOPPED.
"""

import asyncio
import logging
import signal
from collections.abc import Callable
from enum import Enum

from aiohttp import web

from mdview.app_keys import config_key, pages_key, route_table_key
from mdview.config import Config
from mdview.core.navigation import build_navigation
from mdview.core.page import PageBuilder
from mdview.core.renderer import MarkdownRenderer
from mdview.core.scanner import scan_markdown_paths
from mdview.errors import ShutdownError
from mdview.web.dispatch import dispatch
from mdview.web.files import FAVICON_ROUTE, get_favicon
from mdview.web.index import get_index
from mdview.web.routes import INDEX_ROUTE, RouteTable

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# aiohttp treats a zero wait as no limit
MIN_HANDLER_GRACE = 0.001


class ServerState(Enum):
    """Server lifecycle states."""

    INITIALIZING = "initializing"
    SERVING = "serving"
    DRAINING = "draining"
    STOPPED = "stopped"


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Scans the source directory once. The resulting routes and navigation
    are fixed for the lifetime of the application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application

    Raises:
        ScanError: If the source directory cannot be walked
        RouteResolutionError: If a scanned path cannot be mapped to a route
    """
    source_dir = config.docs.source_dir
    paths = scan_markdown_paths(source_dir, config.docs.order)
    navigation = build_navigation(source_dir, paths)
    renderer = MarkdownRenderer()
    pages = PageBuilder(navigation, dark=config.theme.dark)
    routes = RouteTable.build(source_dir, paths, renderer, pages)

    app = web.Application()
    app[config_key] = config
    app[pages_key] = pages
    app[route_table_key] = routes

    app.router.add_get(INDEX_ROUTE, get_index)

    # A markdown file named favicon.ico.md takes precedence
    if FAVICON_ROUTE not in routes:
        app.router.add_get(FAVICON_ROUTE, get_favicon)

    # Markdown pages and referred files - must be last to catch all remaining paths
    app.router.add_get("/{path:.*}", dispatch)

    logger.info(f"Registered {len(routes)} markdown routes from {source_dir}")
    return app


class MarkdownServer:
    """Runs the application and handles graceful shutdown.

    On SIGINT/SIGTERM (or request_stop()) listening sockets are closed and
    in-flight requests get up to server.shutdown_timeout seconds to finish.
    Requests still running after that are cancelled.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._state = ServerState.INITIALIZING
        self._runner: web.AppRunner | None = None
        self._stop_requested = asyncio.Event()

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def addresses(self) -> list:
        """Bound socket addresses, empty until started."""
        if self._runner is None:
            return []
        return list(self._runner.addresses)

    async def start(self) -> None:
        """Build the application and start listening.

        Raises:
            ScanError: If the source directory cannot be walked
            RouteResolutionError: If a scanned path cannot be mapped to a route
            OSError: If the listening socket cannot be bound
        """
        if self._state is not ServerState.INITIALIZING:
            raise RuntimeError(f"Cannot start server in state {self._state.value}")

        app = create_app(self._config)
        grace = handler_grace(self._config.server.shutdown_timeout)
        runner = web.AppRunner(app, shutdown_timeout=grace)
        await runner.setup()
        site = web.TCPSite(runner, self._config.server.host, self._config.server.port)
        try:
            await site.start()
        except OSError:
            await runner.cleanup()
            self._set_state(ServerState.STOPPED)
            raise

        self._runner = runner
        self._set_state(ServerState.SERVING)

    async def serve(
        self,
        *,
        handle_signals: bool = True,
        on_serving: Callable[[], None] | None = None,
    ) -> None:
        """Start, wait for a stop request, then drain.

        Args:
            handle_signals: Install SIGINT/SIGTERM handlers that request a stop
            on_serving: Called once the server is accepting connections

        Raises:
            ShutdownError: If draining fails
        """
        await self.start()
        if on_serving is not None:
            on_serving()

        installed = self._install_signal_handlers() if handle_signals else []
        try:
            await self._stop_requested.wait()
        finally:
            self._remove_signal_handlers(installed)
            await self.drain()

    def request_stop(self) -> None:
        """Ask a serving server to begin draining."""
        self._stop_requested.set()

    async def drain(self) -> None:
        """Stop accepting connections and wait for in-flight requests.

        Raises:
            ShutdownError: If the underlying shutdown raises
        """
        if self._runner is None:
            self._set_state(ServerState.STOPPED)
            return

        self._set_state(ServerState.DRAINING)
        timeout = self._config.server.shutdown_timeout
        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            await self._runner.cleanup()
        except Exception as e:
            logger.error(f"Graceful shutdown failed: {e}")
            raise ShutdownError(f"Graceful shutdown failed: {e}") from e
        finally:
            self._runner = None
            self._set_state(ServerState.STOPPED)

        elapsed = loop.time() - started
        if elapsed >= handler_grace(timeout):
            logger.warning(
                f"Drain hit the {timeout:.1f}s timeout after {elapsed:.1f}s, "
                "outstanding requests were cancelled"
            )
        logger.info("Graceful shutdown complete")

    def _set_state(self, state: ServerState) -> None:
        logger.info(f"Server state: {self._state.value} -> {state.value}")
        self._state = state

    def _install_signal_handlers(self) -> list[signal.Signals]:
        loop = asyncio.get_running_loop()
        installed: list[signal.Signals] = []
        for sig in SHUTDOWN_SIGNALS:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except NotImplementedError:
                logger.debug(f"Signal handlers not supported, {sig.name} keeps its default")
                continue
            installed.append(sig)
        return installed

    def _remove_signal_handlers(self, installed: list[signal.Signals]) -> None:
        loop = asyncio.get_running_loop()
        for sig in installed:
            loop.remove_signal_handler(sig)

    def _on_signal(self, sig: signal.Signals) -> None:
        logger.info(f"Received {sig.name}, stopping")
        self.request_stop()


def handler_grace(shutdown_timeout: float) -> float:
    """Return the per-wait timeout handed to aiohttp.

    On cleanup aiohttp waits for running handlers, then waits as long again
    after cancelling them. Each wait gets half of the drain budget so the
    whole drain stays within shutdown_timeout.

    Args:
        shutdown_timeout: Total drain budget in seconds

    Returns:
        Timeout for each of aiohttp's two waits
    """
    return max(shutdown_timeout / 2, MIN_HANDLER_GRACE)


def run_server(config: Config, on_serving: Callable[[], None] | None = None) -> None:
    """Run the server until a termination signal drains it.

    Args:
        config: Application configuration
        on_serving: Called once the server is accepting connections
    """
    asyncio.run(MarkdownServer(config).serve(on_serving=on_serving))
