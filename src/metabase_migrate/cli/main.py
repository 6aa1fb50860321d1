"""Main CLI entry point for Metabase Migration Tool."""

import sys
import asyncio
from typing import Optional
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..api.client import MetabaseClient, MetabaseClientFactory
from ..config.config import Config, create_config_template
from ..export.exporter import MetabaseExporter
from ..models.state import MetabaseState
from ..utils.logging import setup_logging

console = Console()


@click.group()
@click.version_option(version='0.1.0', prog_name='metabase-migrate')
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=True),
    help='Path to configuration file',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose logging',
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """Metabase Migration Tool - Export collections, cards and dashboards from a Metabase instance."""
    ctx.ensure_object(dict)

    if config:
        ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    setup_logging('DEBUG' if verbose else 'INFO')


@cli.command()
@click.option(
    '--output',
    '-o',
    default='config.yaml',
    help='Output configuration file path',
)
def init(output: str) -> None:
    """Initialize a new configuration file."""
    console.print(
        Panel.fit(
            '[bold green]Metabase Migration Tool[/bold green]\n'
            'Initializing configuration...',
            border_style='green',
        )
    )

    try:
        create_config_template(output)

        console.print(
            f'[green]✓[/green] Configuration template created at: {escape(output)}'
        )
        console.print(
            f'[yellow]Please edit {escape(output)} with your Metabase instance details[/yellow]'
        )

    except OSError as e:
        console.print(
            f'[red]✗[/red] Failed to create configuration: {escape(str(e))}'
        )
        sys.exit(1)


@cli.command()
@click.option(
    '--include-personal',
    is_flag=True,
    default=None,
    help='Also export personal collections',
)
@click.option(
    '--collection',
    'target_collection_id',
    type=click.IntRange(min=1),
    help='Only export this collection and its descendants',
)
@click.option(
    '--output',
    '-o',
    help='State file path',
)
@click.pass_context
def export(
    ctx: click.Context,
    include_personal: Optional[bool],
    target_collection_id: Optional[int],
    output: Optional[str],
) -> None:
    """Export the source instance to a state file."""
    ctx.ensure_object(dict)
    console.print(
        Panel.fit(
            '[bold blue]Metabase Migration Tool[/bold blue]\n'
            'Starting export...',
            border_style='blue',
        )
    )

    try:
        config = _load_config(ctx)
        _setup_logging_with_config(ctx, config)

        if include_personal:
            config.export.exclude_personal_collections = False
        if target_collection_id is not None:
            config.export.target_collection_id = target_collection_id
        if output:
            config.export.output_file = output

        client = MetabaseClientFactory.create_client(config.source)
        with client:
            state, warnings = asyncio.run(_run_export(client, config))
        state.to_file(config.export.output_file)

        console.print(
            f'[green]✓[/green] State written to: {escape(config.export.output_file)}'
        )
        _display_export_summary(state, warnings)

    except Exception as e:
        console.print(f'[red]✗[/red] Export failed: {escape(str(e))}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the effective export configuration."""
    ctx.ensure_object(dict)
    console.print(
        Panel.fit(
            '[bold magenta]Metabase Migration Tool[/bold magenta]\nExport Status',
            border_style='magenta',
        )
    )

    try:
        config = _load_config(ctx)

        table = Table(title='Export Configuration')
        table.add_column('Setting', style='cyan')
        table.add_column('Value', style='green')

        table.add_row('Source URL', escape(config.source.url))
        table.add_row(
            'Authentication', 'API key' if config.source.api_key else 'Session'
        )
        table.add_row(
            'Exclude Personal Collections',
            '✓' if config.export.exclude_personal_collections else '✗',
        )
        table.add_row(
            'Target Collection',
            str(config.export.target_collection_id)
            if config.export.target_collection_id is not None
            else 'All',
        )
        table.add_row('Output File', escape(config.export.output_file))

        console.print(table)

    except Exception as e:
        console.print(f'[red]✗[/red] Failed to load status: {escape(str(e))}')
        if ctx.obj.get('verbose'):
            console.print_exception()
        sys.exit(1)


def _load_config(ctx: click.Context) -> Config:
    """Load configuration from file or environment."""
    config_path = ctx.obj.get('config_path')

    if config_path:
        return Config.from_file(config_path)

    default_paths = ['config.yaml', 'config.yml', '.metabase-migrate.yaml']
    for path in default_paths:
        if Path(path).exists():
            return Config.from_file(path)

    try:
        return Config.from_env()
    except ValueError:
        raise FileNotFoundError(
            'No configuration found. Use --config to specify a file or run "metabase-migrate init" to create one.'
        )


def _setup_logging_with_config(ctx: click.Context, config: Config) -> None:
    """Setup logging with configuration from config file."""
    verbose = ctx.obj.get('verbose', False)
    log_level = 'DEBUG' if verbose else config.logging.level

    setup_logging(
        level=log_level, log_file=config.logging.file, log_format=config.logging.format
    )


async def _run_export(client: MetabaseClient, config: Config):
    """Run the export with an authenticated client."""
    exporter = MetabaseExporter(client)
    state = await exporter.export(
        exclude_personal_collections=config.export.exclude_personal_collections,
        target_collection_id=config.export.target_collection_id,
    )

    return state, exporter.warnings


def _display_export_summary(state: MetabaseState, warnings: list) -> None:
    """Display export summary results."""
    table = Table(title='Export Summary')
    table.add_column('Entity Type', style='cyan')
    table.add_column('Exported', style='green')

    table.add_row('Collections', str(len(state.collections)))
    table.add_row('Cards', str(len(state.cards)))
    table.add_row('Dashboards', str(len(state.dashboards)))

    console.print(table)

    if warnings:
        console.print(f'\n[yellow]Warnings ({len(warnings)}):[/yellow]')
        for warning in warnings[:5]:
            console.print(f'  • {escape(warning)}')
        if len(warnings) > 5:
            console.print(f'  ... and {len(warnings) - 5} more warnings')


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print('\n[red]Export interrupted by user[/red]')
        sys.exit(1)


if __name__ == '__main__':
    main()
