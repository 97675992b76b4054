from mdview.cli import cli

cli()
