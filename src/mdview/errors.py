"""Exception hierarchy for mdview.

Startup errors are fatal to the process, request errors only fail the
request that raised them.
"""


class MdviewError(Exception):
    """Base class for all mdview errors."""


class StartupConfigError(MdviewError):
    """Invalid command line input or configuration detected at startup."""


class ScanError(StartupConfigError):
    """Directory walk failed, no file list is available."""


class RouteResolutionError(MdviewError):
    """A filesystem path could not be mapped to a route or back."""


class InvalidExtensionError(RouteResolutionError):
    """Path does not name a markdown file."""


class PathResolutionError(RouteResolutionError):
    """Path cannot be expressed relative to the served root."""


class RenderError(MdviewError):
    """Markdown could not be converted or the page could not be assembled."""


class FileAccessError(MdviewError):
    """A discovered markdown file could not be read at request time."""


class ShutdownError(MdviewError):
    """Graceful shutdown failed."""
