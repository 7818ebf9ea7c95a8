from walidator.cli import cli

cli()
