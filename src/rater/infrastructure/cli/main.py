import click

from rater.infrastructure.bootstrap import settings
from rater.infrastructure.cli.rate_commands import rate_quote, rate_serve
from rater.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="DEBUG logging.")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only WARNING and above.")
def cli(verbose: bool, quiet: bool) -> None:
    """Shipping rate quoting engine"""
    if verbose:
        configure_logging("DEBUG")
    elif quiet:
        configure_logging("WARNING")
    else:
        configure_logging(settings().log_level)


# Register subcommands
cli.add_command(rate_quote)
cli.add_command(rate_serve)
