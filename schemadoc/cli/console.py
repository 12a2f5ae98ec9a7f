"""Console front-end for the schemadoc CLI."""
import importlib
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

import click
from colorama import Fore, Style

from schemadoc.exporter.markdown_writer import MarkdownWriter
from schemadoc.registry.collector import TypeCollector
from schemadoc.typespec.type_names import short_name


def load_object(path: str) -> Any:
    """
    Import `package.module:Object` (or a bare module path).

    Raises:
        click.BadParameter: If the module or attribute cannot be found
    """
    module_name, _, attribute = path.partition(":")
    if "" not in sys.path and "." not in sys.path:
        sys.path.insert(0, "")

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import {module_name}: {e}")

    for part in filter(None, attribute.split(".")):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise click.BadParameter(f"{module_name} has no attribute {attribute}")

    return obj


class ConsoleCLI:
    """Prints schema catalogues and tables for importable views and handlers."""

    def __init__(self, collector: TypeCollector, documented_actions: Sequence[str] = ()):
        """Initialize CLI."""
        self.collector = collector
        self.documented_actions = list(documented_actions)

    def print_header(self, title: str):
        """Print a section header."""
        click.echo(f"\n{Fore.CYAN}{'━' * 45}")
        click.echo(f"{Fore.CYAN}{title}")
        click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")

    def register(self, targets: Sequence[str]) -> List[Any]:
        """Load and resolve each view."""
        views = [load_object(target) for target in targets]
        for view in views:
            self.collector.register_types(view)
        return views

    def show_types(self, targets: Sequence[str]):
        """Print the catalogue of every schema reachable from the views."""
        self.register(targets)
        self.print_header("Types")

        catalogue = self.collector.get_all_types()
        if not catalogue:
            click.echo(f"{Fore.YELLOW}No schema found for {', '.join(targets)}")
            return
        click.echo(catalogue)

    def show_request(self, handler_path: str, action: Optional[str]):
        """Print the request body table of a handler action."""
        handler = load_object(handler_path)
        self.print_header(f"{short_name(handler)}.{action or '*'} request body")

        rows = self.collector.param_spec(handler, action)
        if not rows:
            click.echo(f"{Fore.YELLOW}No request body declared")
            return

        click.echo("Fields marked in **bold** are required.\n")
        click.echo(self.collector.renderer.render_rows(rows))

    def show_response(self, view_path: str, excluded: Sequence[str] = ()):
        """Print the response table of a view."""
        view = self.register([view_path])[0]
        self.print_header(f"{short_name(view)} response body")

        table = self.collector.get_response_types(view, excluded)
        if not table:
            click.echo(f"{Fore.YELLOW}No schema found for {view_path}")
            return
        click.echo(table)

    def show_fields(self, view_path: str, action: str, excluded: Sequence[str] = ()):
        """List the request fields accepted by the schema behind a view."""
        view = self.register([view_path])[0]
        fields = self.collector.request_fields(view, excluded, action)

        if not fields:
            click.echo(f"{Fore.YELLOW}No request fields for {short_name(view)} ({action})")
            return
        for name in fields:
            click.echo(name)

    def write_catalogue(self, targets: Sequence[str], output: Path):
        """Write a document holding the type catalogue of the views."""
        self.register(targets)
        writer = MarkdownWriter(self.collector, self.documented_actions)
        path = writer.write([], output)
        click.echo(f"{Fore.GREEN}✅ Documentation written to {path}")
