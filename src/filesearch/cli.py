"""
Command line entry point for filesearch.

Without ``--once`` the interactive screen is started. With ``--once QUERY``
a single search runs to completion and the matches are printed as a table.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.live import Live
from rich.table import Table

from . import __version__
from .config.parser import ConfigurationError, create_config_template, load_config, validate_config_file
from .logging_setup import configure_logging
from .models.config import FinderConfig
from .session import SearchController, SessionState
from .ui.app import App
from .ui.keys import KeyReader
from .ui.render import render


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_MATCHES = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filesearch",
        description="Search the filesystem for paths containing a substring.",
    )
    parser.add_argument("--root", default=None, help="Root folder to search (default: entire computer)")
    parser.add_argument("--config", default=None, help="Path to a YAML configuration file")
    parser.add_argument("--log-level", default=None, help="Override the configured logging level")
    parser.add_argument("--max-results", type=int, default=None, help="Maximum number of matches kept")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads (default: logical cores)")
    parser.add_argument("--once", metavar="QUERY", default=None,
                        help="Run one search, print the matches and exit")
    parser.add_argument("--init-config", metavar="PATH", default=None,
                        help="Write a configuration template to PATH and exit")
    parser.add_argument("--check-config", metavar="PATH", default=None,
                        help="Validate a configuration file and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_overrides(config: FinderConfig, args: argparse.Namespace) -> FinderConfig:
    """Return a copy of the configuration with command line overrides applied."""
    search = {}
    if args.max_results is not None:
        search['max_results'] = args.max_results
    if args.workers is not None:
        search['max_workers'] = args.workers
    if args.root is not None:
        search['default_root'] = args.root

    data = config.to_dict()
    data['search'].update(search)
    if args.log_level:
        data['logging']['level'] = args.log_level
    return FinderConfig.from_dict(data)


def run_once(config: FinderConfig, query: str, console: Console) -> int:
    """Run a single search synchronously and print the matches."""
    controller = SearchController(config)
    status = controller.start_search(query, config.search.default_root or "")
    if not controller.is_running:
        console.print(f"[red]{status}[/red]")
        return EXIT_NO_MATCHES

    with console.status(f"Searching for '{query.strip()}'..."):
        outcome = controller.wait()

    if outcome != SessionState.COMPLETED:
        console.print(f"[red]{controller.status_line()}[/red]")
        return EXIT_NO_MATCHES

    table = Table(title=f"Matches for '{query.strip()}'")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Path")
    for index, path in enumerate(controller.results, 1):
        table.add_row(str(index), path)
    console.print(table)
    console.print(controller.status_line())

    return EXIT_OK if controller.results else EXIT_NO_MATCHES


def run_interactive(config: FinderConfig, console: Console) -> int:
    """Run the interactive screen until the user presses Esc."""
    app = App(config=config)
    tick = config.ui.tick_seconds()

    with KeyReader() as reader, Live(render(app, console.size.height), console=console,
                                     screen=True, auto_refresh=False) as live:
        while app.running:
            app.tick()
            live.update(render(app, console.size.height), refresh=True)
            for press in reader.read(tick):
                app.handle_key(press)
                if not app.running:
                    break

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)

    if args.init_config:
        try:
            create_config_template(args.init_config)
        except ConfigurationError as e:
            err_console.print(f"[red]{e}[/red]")
            return EXIT_CONFIG_ERROR
        console.print(f"Configuration template written to {args.init_config}")
        return EXIT_OK

    if args.check_config:
        errors = validate_config_file(args.check_config)
        for error in errors:
            err_console.print(error, style="red", markup=False)
        if errors:
            return EXIT_CONFIG_ERROR
        console.print(f"Configuration file {args.check_config} is valid")
        return EXIT_OK

    try:
        result = load_config(args.config)
        config = apply_overrides(result.config, args)
    except (ConfigurationError, ValueError) as e:
        err_console.print(f"Configuration error: {e}", style="red", markup=False)
        return EXIT_CONFIG_ERROR

    if args.once is not None:
        configure_logging(config.logging, console=err_console)
        for warning in result.warnings:
            logger.info(warning)
        return run_once(config, args.once, console)

    configure_logging(config.logging)
    for warning in result.warnings:
        logger.info(warning)
    return run_interactive(config, console)


if __name__ == "__main__":
    sys.exit(main())
