"""Command-line interface for the Job Hunter sync service."""

import asyncio
from pathlib import Path

import click
import structlog

from jobhunter.clients.sheets import CredentialsNotFoundError, SheetsClient
from jobhunter.core.config import DEFAULT_CONFIG_PATH, load_settings
from jobhunter.sync.loop import run_sync_cycle, summarize_rows

# Configure structlog for CLI output
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer()
    ]
)

log = structlog.get_logger()


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """Job Hunter - push candidate rows from Google Sheets to HubSpot.

    Just run 'python run.py' to start the service.
    """
    if ctx.invoked_subcommand is None:
        # Default behavior: run the long-lived service
        ctx.invoke(serve)


@cli.command()
@click.option("--config", "config_path", type=click.Path(), default=str(DEFAULT_CONFIG_PATH),
              help="Config directory path")
def serve(config_path: str):
    """Start the liveness endpoint and the 60s sync loop."""
    import uvicorn

    from jobhunter.api.server import create_app

    settings = load_settings(Path(config_path))
    log.info("job_hunter_starting", host=settings.server.host, port=settings.server.port)

    uvicorn.run(create_app(settings), host=settings.server.host, port=settings.server.port)


@cli.command()
@click.option("--config", "config_path", type=click.Path(), default=str(DEFAULT_CONFIG_PATH),
              help="Config directory path")
def sync(config_path: str):
    """Run a single sync cycle and print what happened."""
    settings = load_settings(Path(config_path))

    report = asyncio.run(run_sync_cycle(settings))

    if report.aborted:
        click.echo(f"Cycle aborted ({report.aborted}): {report.error}")
        return

    summary = report.summary()
    click.echo("\n" + "=" * 40)
    click.echo("SUMMARY")
    click.echo("=" * 40)
    click.echo(f"Rows read:         {summary['rows']}")
    click.echo(f"Pushed to HubSpot: {summary['pushed']}")
    click.echo(f"Already in CRM:    {summary['duplicates']}")
    click.echo(f"Already sent:      {summary['already_sent']}")
    click.echo(f"Failed:            {summary['failed']}")

    for outcome in report.outcomes:
        if outcome.error:
            click.echo(f"  ✗ row {outcome.row_number}: {outcome.status} - {outcome.error}")


@cli.command()
@click.option("--config", "config_path", type=click.Path(), default=str(DEFAULT_CONFIG_PATH),
              help="Config directory path")
def status(config_path: str):
    """Show sheet status without sending anything."""
    settings = load_settings(Path(config_path))

    try:
        sheets = SheetsClient.from_credentials_file(
            settings.credentials_path,
            settings.google_sheets.spreadsheet_id,
            settings.google_sheets.sheet_name,
        )
    except CredentialsNotFoundError as e:
        click.echo(f"Credentials not found: {e}")
        return

    stats = summarize_rows(sheets.get_rows())

    click.echo(f"\nSheet Status ({settings.google_sheets.sheet_name})")
    click.echo("───────────────")
    click.echo(f"Rows:                 {stats['total']}")
    click.echo(f"Eligible (pending):   {stats['eligible']}")
    click.echo(f"Sent:                 {stats['sent']}")
    click.echo(f"Incomplete:           {stats['incomplete']}")
    click.echo(f"Malformed (skipped):  {stats['skipped']}")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
