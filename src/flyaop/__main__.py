"""Allow ``python -m flyaop``."""

from flyaop.cli.main import cli

cli()
