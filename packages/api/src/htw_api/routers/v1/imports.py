"""CSV bulk import endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse

from htw_shared.constants import RecordType
from htw_pipeline.importers.csv_parser import SCHEMAS, build_template
from htw_pipeline.pipelines.bulk_import import run_import

from htw_api.dependencies import DataStore, get_store, get_write_store
from htw_api.errors import status_for
from htw_api.responses import error_response, wrap_response

router = APIRouter(prefix="/imports", tags=["imports"])


@router.get("")
async def list_import_schemas():
    data = [
        {
            "record_type": schema.record_type,
            "table": schema.table,
            "columns": list(schema.columns),
            "required": schema.required_columns,
            "choices": {column: list(values) for column, values in schema.choices.items()},
        }
        for schema in SCHEMAS.values()
    ]
    return wrap_response(data, total_count=len(data))


@router.get("/{record_type}/template", response_class=PlainTextResponse)
async def download_template(record_type: RecordType):
    return PlainTextResponse(
        build_template(SCHEMAS[record_type]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{record_type}_template.csv"'},
    )


@router.post("/{record_type}", status_code=201)
async def upload_csv(
    record_type: RecordType,
    file: UploadFile = File(..., description="CSV file matching the template header"),
    store: DataStore = Depends(get_write_store),
):
    content = await file.read()
    result = run_import(record_type, file.filename or "", content, store=store)
    if result.error is not None:
        summary = {k: v for k, v in result.to_dict().items() if k != "error"}
        return JSONResponse(
            status_code=status_for(result.error),
            content=error_response(
                result.error.code,
                result.error.message,
                details={**result.error.to_details(), "import": summary},
            ),
        )
    return wrap_response(result.to_dict())
