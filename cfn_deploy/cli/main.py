# cfn_deploy/cli/main.py
"""Main CLI entry point for cfn-deploy"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler

from ..__version__ import __version__
from ..api.exceptions import ConfigError
from ..constants import APP_NAME, ENV_CONFIG_PATH, LOG_FORMAT
from ..core import deploy_defaults, find_config_file, load_config

# Import all commands
from .commands import deploy

console = Console()


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )

    # Adjust third-party loggers
    for name in ("asyncio", "aiofiles", "boto3", "botocore", "urllib3", "s3transfer"):
        logging.getLogger(name).setLevel(logging.WARNING)


class Context:
    """CLI context object"""

    def __init__(self):
        self.verbose: bool = False
        self.debug: bool = False
        self.config_path: Optional[Path] = None


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('-c', '--config', 'config_path', envvar=ENV_CONFIG_PATH,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file (defaults to ./.cfn-deploy.yaml)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, config_path):
    """cfn-deploy - Deploy CloudFormation template bundles

    Uploads a folder of templates to S3 under a content-derived version
    and creates or updates a CloudFormation stack from it.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug

    # Config file values become defaults for command options
    config_path = config_path or find_config_file()
    if config_path:
        try:
            ctx.default_map = {"deploy": deploy_defaults(load_config(config_path))}
        except ConfigError as e:
            console.print(f"[red]Error![/red] {escape(str(e))}")
            sys.exit(1)
        ctx.obj.config_path = config_path
        if debug:
            console.print(f"[dim]Using configuration {config_path}[/dim]")


# Register commands
cli.add_command(deploy.deploy)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
