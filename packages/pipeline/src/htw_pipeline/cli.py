"""
cli.py — Click CLI entrypoint for imports and analytics.

Usage:
    htw import industries ./industries.csv
    htw import members ./members.csv --dry-run
    htw template companies -o companies_template.csv
    htw analytics --timeframe yearly --json
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import click

from htw_shared.config import settings
from htw_shared.constants import TIMEFRAME_MONTHS
from htw_shared.datastore import InMemoryStore, get_datastore
from htw_pipeline.analytics.dashboard import build_dashboard
from htw_pipeline.importers.csv_parser import SCHEMAS, build_template
from htw_pipeline.pipelines.bulk_import import run_import
from htw_pipeline.utils.logging import configure_logging


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
@click.option(
    "--log-format",
    default=settings.log_format,
    type=click.Choice(["json", "console"]),
    help="Log output format",
)
def main(log_level: str, log_format: str) -> None:
    """HTW network admin tools."""
    configure_logging(log_level, log_format)


@main.command("import")
@click.argument("record_type", type=click.Choice(sorted(SCHEMAS), case_sensitive=False))
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--dry-run", is_flag=True, help="Parse and load into memory only; nothing is written.")
def import_file(record_type: str, path: Path, dry_run: bool) -> None:
    """Bulk-import a CSV file as one batch."""
    record_type = record_type.lower()
    store = InMemoryStore() if dry_run else get_datastore(service_role=True)

    result = run_import(record_type, path.name, path.read_bytes(), store=store)

    if not result.success:
        click.echo(f"✗ {result.error}", err=True)
        sys.exit(1)

    prefix = "[dry run] " if dry_run else ""
    click.echo(f"✓ {prefix}{result.message}")
    if result.rows_dropped:
        click.echo(f"  {result.rows_dropped} malformed row(s) skipped")


@main.command()
@click.argument("record_type", type=click.Choice(sorted(SCHEMAS), case_sensitive=False))
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write to this file instead of stdout.",
)
def template(record_type: str, output: Path | None) -> None:
    """Print (or save) the sample CSV for a record type."""
    text = build_template(SCHEMAS[record_type.lower()])
    if output is None:
        click.echo(text, nl=False)
        return
    output.write_text(text, encoding="utf-8")
    click.echo(f"✓ Template written to {output}")


@main.command()
@click.option(
    "--timeframe",
    type=click.Choice(list(TIMEFRAME_MONTHS)),
    default=settings.default_timeframe,
    show_default=True,
)
@click.option("--top", type=click.IntRange(min=1), default=settings.top_n, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print the full analytics as JSON.")
def analytics(timeframe: str, top: int, as_json: bool) -> None:
    """Compute the dashboard analytics from the hosted tables."""
    result = build_dashboard(get_datastore(), timeframe=timeframe, top=top, now=date.today())
    if not result.success:
        click.echo(f"✗ {result.error}", err=True)
        sys.exit(1)

    data = result.value
    if as_json:
        click.echo(data.model_dump_json(indent=2))
        return

    click.echo(f"Analytics ({timeframe}, as of {data.as_of.isoformat()})")
    click.echo(f"  Members:        {data.total_members}")
    click.echo(f"  Companies:      {data.total_companies}")
    click.echo(f"  Industries:     {data.total_industries}")
    click.echo(f"  Events:         {data.total_events}")
    click.echo(f"  Avg growth:     {data.average_growth_rate:.1f}%")
    click.echo(f"  Member growth:  {data.member_growth.growth_rate:.1f}%")
    click.echo(f"  Company growth: {data.company_growth.growth_rate:.1f}%")
    click.echo("Top industries:")
    for industry in data.top_industries:
        click.echo(f"  {industry.icon or ''} {industry.name:30s} {industry.member_count:>6d} members")
    if data.top_skills:
        click.echo("Top skills:")
        for skill in data.top_skills:
            click.echo(f"  {skill.skill:30s} {skill.count:>6d}")


if __name__ == "__main__":
    main()
