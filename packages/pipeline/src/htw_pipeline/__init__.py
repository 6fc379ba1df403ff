"""
htw_pipeline — CSV bulk import and dashboard analytics for the HTW network.

Architecture:
  importers/   — naive CSV parser, per-record-type column schemas, templates
  loaders/     — single-batch insert through the injected DataStore
  pipelines/   — bulk_import: parse -> validate -> one batch insert
  analytics/   — polars aggregations, dashboard builder, stale-refresh guard
  utils/       — structlog configuration

Quick start:
    from htw_shared.datastore import get_datastore
    from htw_pipeline.pipelines.bulk_import import run_import
    from htw_pipeline.analytics import build_dashboard

    result = run_import("industries", "industries.csv", text, store=get_datastore(service_role=True))
    dashboard = build_dashboard(get_datastore(), timeframe="yearly").unwrap()

CLI:
    htw import industries ./industries.csv --dry-run
    htw template members -o members.csv
    htw analytics --timeframe quarterly
"""

__version__ = "0.1.0"
