"""
Configuration management commands for the CLI interface.

This module implements configuration-related commands including:
- show: Print the effective extraction configuration
- init: Write the effective configuration to a JSON file for editing
"""

import logging
from pathlib import Path

import click

from cli.context import pass_context
from cli.exceptions import CLIError
from cli.formatters import format_json, format_table, print_success


logger = logging.getLogger(__name__)


# Create config command group
@click.group(name='config')
def config_group():
    """Configuration management commands."""
    pass


@config_group.command()
@click.option('--format', '-f', 'output_format', type=click.Choice(['json', 'table']),
              default='json', help='Output format')
@pass_context
def show(ctx, output_format):
    """
    Show the effective extraction configuration.

    Examples:
        # Defaults, or the file given with --config-file
        bill-extract config show

        # Key/value overview
        bill-extract config show --format table
    """
    data = ctx.get_config().to_dict()

    if output_format == 'json':
        click.echo(format_json(data))
        return

    rows = []
    for key, value in data.items():
        if isinstance(value, list):
            value = ', '.join(
                f"{v['name']} ({v['tax_pct']}%)" if isinstance(v, dict) else str(v)
                for v in value
            )
        elif isinstance(value, dict):
            value = ', '.join(f"{k}={v}" for k, v in value.items())
        rows.append({'key': key, 'value': value})
    click.echo(format_table(rows, headers=['key', 'value']))


@config_group.command()
@click.argument('path', type=click.Path())
@click.option('--force', is_flag=True, help='Overwrite an existing file')
@pass_context
def init(ctx, path, force):
    """
    Write the effective configuration to PATH as JSON.

    The file can be edited and passed back with --config-file.

    Examples:
        bill-extract config init extraction.json
    """
    target = Path(path)
    if target.exists() and not force:
        raise CLIError(f"{path} already exists, use --force to overwrite")

    try:
        target.write_text(format_json(ctx.get_config().to_dict()) + "\n", encoding='utf-8')
    except OSError as e:
        raise CLIError(f"Cannot write configuration to {path}: {e}")

    logger.debug(f"Configuration written to {target}")
    if not ctx.quiet:
        print_success(f"Configuration written to {path}")
