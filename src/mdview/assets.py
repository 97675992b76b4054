"""Asset discovery for bundled static files.

Locates static files shipped inside the mdview package.
"""

from importlib.resources import files
from pathlib import Path

FAVICON_NAME = "favicon.ico"


def get_static_dir() -> Path:
    """Return path to bundled static assets.

    Returns:
        Path to the static directory containing the favicon.

    Raises:
        FileNotFoundError: If static assets are not bundled.
    """
    static = files("mdview").joinpath("static")
    if not static.is_dir():
        msg = "Bundled static assets not found. Reinstall the mdview package."
        raise FileNotFoundError(msg)
    return Path(str(static))


def get_favicon_path() -> Path:
    """Return path to the bundled favicon."""
    return get_static_dir() / FAVICON_NAME
