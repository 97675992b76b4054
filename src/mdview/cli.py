"""CLI interface for mdview.

Serves a directory of markdown files as rendered HTML pages.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from mdview.config import Config
from mdview.core.scanner import ScanOrder
from mdview.errors import MdviewError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("directory", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to run server on (default: 8080)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (default: 127.0.0.1)",
)
@click.option(
    "--order",
    type=click.Choice([order.value for order in ScanOrder]),
    default=None,
    help="Navigation ordering: shallow files first, or directory walk order",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover mdview.toml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log verbosely",
)
@click.option(
    "--dark",
    "-d",
    is_flag=True,
    help="Use dark mode",
)
def cli(
    directory: tuple[Path, ...],
    port: int | None,
    host: str | None,
    order: str | None,
    config_path: Path | None,
    verbose: bool,
    dark: bool,
) -> None:
    """Serve markdown files under DIRECTORY as HTML pages."""
    from mdview.server import run_server

    _configure_logging(verbose)

    if len(directory) != 1:
        _fail(f"must provide exactly one DIRECTORY argument, got {len(directory)}")

    source_dir = directory[0]
    if not source_dir.is_dir():
        _fail(f"provided path is not a directory: {source_dir}")

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            source_dir=source_dir,
            order=ScanOrder(order) if order is not None else None,
            dark=True if dark else None,
        )
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    url = f"http://{config.server.host}:{config.server.port}/"

    def announce() -> None:
        click.echo(f"\n\tServing {source_dir} at {url}\n")

    try:
        run_server(config, on_serving=announce)
    except (MdviewError, OSError) as e:
        _fail(str(e))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
