"""
Main CLI entry point for the bill text extractor.

This module provides the main command-line interface with command groups
and global options.
"""

import sys
import logging

import click

from cli.context import CLIContext, pass_context
from cli.version import get_version, get_version_info
from cli.commands import extract_commands, config_commands
from cli.exceptions import CLIError
from cli.formatters import setup_logging
from extraction.exceptions import ExtractionError


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-essential output')
@click.option('--config-file', type=click.Path(exists=True),
              help='JSON file with extraction configuration overrides')
@click.version_option(version=get_version(), prog_name="bill-extract")
@click.pass_context
def cli(ctx, verbose, quiet, config_file):
    """
    Bill Text Extractor - CLI Tool

    Turns raw OCR text of invoices and purchase bills into a structured
    record: document number, date, party details, line items and totals.

    Examples:
        # Extract a bill and show it as tables
        bill-extract extract receipt.txt

        # Emit JSON using a custom configuration
        bill-extract --config-file extraction.json extract receipt.txt -f json
    """
    # Initialize context
    cli_ctx = CLIContext()
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet
    if config_file:
        cli_ctx.config_file = config_file
    ctx.obj = cli_ctx

    # Setup logging
    setup_logging(verbose, quiet)


# Register command groups
cli.add_command(extract_commands.extract)
cli.add_command(config_commands.config_group)


@cli.command()
@click.option('--detailed', is_flag=True, help='Show detailed version information')
@pass_context
def version(ctx, detailed):
    """Display version information."""
    version_info = get_version_info()
    click.echo(f"Bill Text Extractor v{version_info['version']}")

    if detailed:
        details = {
            'Base Version': version_info['base_version'],
            'Python Version': version_info['python_version'],
            'Git Commit': version_info['commit_hash'] if version_info['git_available'] else 'Not available',
            'Config File': ctx.config_file or 'Defaults',
        }
        click.echo("\nDetailed Information:")
        click.echo("=" * 40)
        for key, value in details.items():
            click.echo(f"{key:20}: {value}")


def main():
    """Main entry point for the CLI application."""
    try:
        cli()
    except CLIError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)
    except ExtractionError as e:
        click.echo(f"Extraction Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(1)
    except Exception as e:
        logger = logging.getLogger(__name__)
        logger.exception("Unexpected error occurred")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
