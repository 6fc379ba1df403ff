"""Tests for the CSV bulk import endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from htw_shared import db
from htw_shared.config import settings
from htw_shared.datastore import InMemoryStore
from htw_shared.exceptions import BatchWriteError

INDUSTRIES_CSV = (
    "name,description,member_count,company_count,growth_rate\n"
    "Energy,Solar and storage,12,3,22.5\n"
    "Media,Film and broadcast,8,2,3\n"
)


def _upload(client, record_type, content, file_name="upload.csv"):
    return client.post(
        f"/v1/imports/{record_type}",
        files={"file": (file_name, content.encode("utf-8"), "text/csv")},
    )


def test_list_import_schemas(client):
    response = client.get("/v1/imports")
    assert response.status_code == 200
    body = response.json()
    assert body["meta"]["total_count"] == 4
    by_type = {s["record_type"]: s for s in body["data"]}
    assert by_type["events"]["required"] == ["name", "event_date"]
    assert by_type["members"]["table"] == "members"
    assert by_type["companies"]["choices"]["engagement_level"] == ["Low", "Medium", "High"]
    assert by_type["events"]["choices"]["event_type"] == ["company", "htw"]


def test_download_template(client):
    response = client.get("/v1/imports/industries/template")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "industries_template.csv" in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert lines[0] == "name,description,member_count,company_count,growth_rate,color,icon"
    assert len(lines) == 3


def test_template_unknown_record_type(client):
    assert client.get("/v1/imports/widgets/template").status_code == 422


def test_upload_success(client, store):
    response = _upload(client, "industries", INDUSTRIES_CSV, "industries.csv")
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "success"
    assert data["message"] == "2 industries uploaded successfully."
    assert data["records_loaded"] == 2
    assert data["error"] is None
    names = [r["name"] for r in store.rows("industries")]
    assert names[-2:] == ["Energy", "Media"]


def test_upload_counts_dropped_rows(client, store):
    content = INDUSTRIES_CSV + "Short,row\n"
    response = _upload(client, "industries", content)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["rows_total"] == 3
    assert data["rows_dropped"] == 1
    assert data["records_loaded"] == 2


def test_upload_missing_columns(client, store):
    response = _upload(client, "industries", "name,description\nEnergy,Solar\n")
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "missing_columns"
    assert error["details"]["missing"] == ["member_count", "company_count", "growth_rate"]
    assert error["details"]["import"]["status"] == "failure"
    assert error["details"]["import"]["records_loaded"] == 0
    assert len(store.rows("industries")) == 2


def test_upload_header_only(client):
    response = _upload(client, "members", "name,industry_id\n")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "structure"


def test_upload_not_csv(client, store):
    response = _upload(client, "industries", INDUSTRIES_CSV, "industries.xlsx")
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "unsupported_file"
    assert len(store.rows("industries")) == 2


def test_upload_batch_rejected(make_client, failing_store):
    store = failing_store(BatchWriteError(detail="duplicate key value"))
    client = make_client(store)
    response = _upload(client, "industries", INDUSTRIES_CSV)
    assert response.status_code == 502
    error = response.json()["error"]
    assert error["code"] == "batch_write"
    assert error["details"]["detail"] == "duplicate key value"
    assert error["details"]["import"]["records_parsed"] == 2
    store.insert.assert_called_once()


def test_upload_unknown_record_type(client):
    assert _upload(client, "widgets", INDUSTRIES_CSV).status_code == 422


def test_upload_goes_to_write_store(make_client, store):
    write_store = InMemoryStore({"industries": []})
    client = make_client(store, write_store)
    response = _upload(client, "industries", INDUSTRIES_CSV)
    assert response.status_code == 201
    assert [r["name"] for r in write_store.rows("industries")] == ["Energy", "Media"]
    assert len(store.rows("industries")) == 2


def test_upload_route_resolves_write_store():
    from htw_api.app import create_app
    from htw_api.dependencies import get_write_store

    app = create_app()
    route = next(r for r in app.routes if getattr(r, "name", None) == "upload_csv")
    calls = [dep.call for dep in route.dependant.dependencies]
    assert get_write_store in calls


@pytest.fixture
def fresh_clients():
    db.reset_supabase_clients()
    yield
    db.reset_supabase_clients()


def test_write_store_uses_service_key(fresh_clients, monkeypatch):
    from htw_api.dependencies import get_store, get_write_store

    monkeypatch.setattr(settings, "supabase_anon_key", "anon-key")
    monkeypatch.setattr(settings, "supabase_service_key", "service-key")
    with patch("htw_shared.db.create_client", side_effect=lambda url, key: MagicMock(key=key)) as create:
        get_write_store()
        get_store()
    assert [c.args[1] for c in create.call_args_list] == ["service-key", "anon-key"]
