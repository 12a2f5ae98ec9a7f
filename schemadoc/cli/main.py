"""schemadoc - Command line interface."""
from pathlib import Path

import click
from colorama import Fore, Style, init

from .. import __version__
from ..config import app_config
from ..defaults import type_collector
from .console import ConsoleCLI

# Initialize colorama
init(autoreset=True)


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}schemadoc{Fore.CYAN}                            ║")
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}API types from type contracts{Fore.CYAN}        ║")
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    click.echo()


def console() -> ConsoleCLI:
    return ConsoleCLI(type_collector, app_config.render.documented_actions)


@click.group()
@click.version_option(version=__version__)
def cli():
    """schemadoc - Document API request/response types."""
    pass


@cli.command()
@click.argument("targets", nargs=-1, required=True)
def types(targets):
    """Print the schema catalogue of one or more views (module:View)."""
    print_banner()
    console().show_types(targets)


@cli.command()
@click.argument("handler")
@click.option("--action", "-a", default=None, help="Handler action (method name)")
def request(handler, action):
    """Print the request body table of a handler action."""
    print_banner()
    console().show_request(handler, action)


@cli.command()
@click.argument("view")
@click.option("--exclude", "-x", multiple=True, help="Field to leave out")
def response(view, exclude):
    """Print the response table of a view."""
    print_banner()
    console().show_response(view, exclude)


@cli.command()
@click.argument("view")
@click.option("--action", "-a", default="show", show_default=True)
@click.option("--exclude", "-x", multiple=True, help="Field to leave out")
def fields(view, action, exclude):
    """List request fields of the schema behind a view."""
    console().show_fields(view, action, exclude)


@cli.command()
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (defaults to SCHEMADOC_OUTPUT)",
)
def write(targets, output):
    """Write a document with the type catalogue of the views."""
    print_banner()
    console().write_catalogue(targets, Path(output or app_config.output_path))
