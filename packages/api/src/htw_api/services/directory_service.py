"""Row-level directory service shared by the industry/company/member/event routers."""

from __future__ import annotations

from typing import Any, Iterable, Sequence, TypeVar

from htw_shared.datastore import DataStore
from htw_shared.exceptions import RecordNotFoundError
from htw_shared.models.base import TableModel

M = TypeVar("M", bound=TableModel)


def matches(record: TableModel, q: str | None, fields: Iterable[str]) -> bool:
    """Case-insensitive substring match of q against any of the fields.

    List fields (skills) match when any item contains q. Dotted names
    (``companies.name``) reach into embedded linked rows.
    """
    if not q:
        return True
    needle = q.strip().lower()
    for name in fields:
        value: Any = record
        for attr in name.split("."):
            value = getattr(value, attr, None)
        if value is None:
            continue
        items = value if isinstance(value, list) else [value]
        if any(needle in str(item).lower() for item in items):
            return True
    return False


def list_rows(
    store: DataStore,
    model: type[M],
    *,
    filters: dict[str, Any] | None = None,
    q: str | None = None,
    search_fields: Sequence[str] = ("name",),
    order_by: str | None = None,
    descending: bool = True,
    limit: int | None = None,
) -> list[M]:
    filters = {k: v for k, v in (filters or {}).items() if v is not None}
    rows = store.fetch(
        model.table, filters, columns=model.select_columns(), order_by=order_by, descending=descending
    )
    records = [model.from_db_row(row) for row in rows]
    records = [r for r in records if matches(r, q, search_fields)]
    return records[:limit] if limit is not None else records


def get_row(store: DataStore, model: type[M], row_id: str) -> M:
    rows = store.fetch(model.table, {"id": row_id}, columns=model.select_columns(), limit=1)
    if not rows:
        raise RecordNotFoundError(model.table, row_id)
    return model.from_db_row(rows[0])


def create_row(store: DataStore, record: M) -> M:
    rows = store.insert(record.table, [record.to_insert_dict()])
    return type(record).from_db_row(rows[0]) if rows else record


def update_row(store: DataStore, model: type[M], row_id: str, values: dict[str, Any]) -> M:
    """Validate a partial update against the current row, then write only the given columns.

    Raises:
        RecordNotFoundError: no row with that id.
        pydantic.ValidationError: the merged row is invalid.
    """
    current = get_row(store, model, row_id)
    editable = {
        k: v for k, v in values.items()
        if k in model.model_fields and k not in model.read_only_fields()
    }
    merged = model.model_validate({**current.model_dump(), **editable})
    payload = {k: v for k, v in merged.model_dump(mode="json").items() if k in editable}
    if not payload:
        return current
    rows = store.update(model.table, row_id, payload)
    return model.from_db_row(rows[0]) if rows else merged


def delete_row(store: DataStore, model: type[TableModel], row_id: str) -> None:
    get_row(store, model, row_id)
    store.delete(model.table, row_id)


def dump(records: Iterable[TableModel]) -> list[dict[str, Any]]:
    return [r.model_dump(mode="json") for r in records]
