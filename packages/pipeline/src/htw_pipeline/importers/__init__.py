"""
htw_pipeline.importers — file parsers for the admin bulk upload.
"""

from htw_pipeline.importers.csv_parser import (
    SCHEMAS,
    ImportSchema,
    ParsedBatch,
    build_template,
    encode_records,
    parse_csv,
)

__all__ = [
    "SCHEMAS",
    "ImportSchema",
    "ParsedBatch",
    "build_template",
    "encode_records",
    "parse_csv",
]
