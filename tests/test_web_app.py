"""Tests for the FastAPI upload endpoints."""

from __future__ import annotations

import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from web.app import app

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def client():
    return TestClient(app)


def _workbook_bytes(rows):
    wb = Workbook()
    ws = wb.active
    ws.title = "Flights"
    ws.append(["header"])
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["export"] == "/api/export"


def test_export_and_download(client, make_row):
    content = _workbook_bytes([
        make_row(date="2023-05-01", dep="EGLL", arr="LFPG"),
        make_row(date="2023-05-02", dep="LFPG", arr="EGLL"),
    ])
    response = client.post(
        "/api/export",
        files={"file": ("logbook.xlsx", content, XLSX_MIME)},
        data={"owner": "J. Smith", "start_row": "2", "page_breaks": ""},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["stats"]["flights"] == 2
    assert body["stats"]["logbook_pages"] == 1
    assert body["stats"]["total_time"] == "2:30"
    assert body["stats"]["airports"] == 2
    assert body["stats"]["routes"] == 1
    assert "Logbook has been exported" in body["log"]

    pdf = client.get(body["logbook_url"])
    assert pdf.status_code == 200
    assert pdf.content.startswith(b"%PDF")

    png = client.get(body["map_url"])
    assert png.status_code == 200
    assert png.content[:4] == b"\x89PNG"


def test_unsupported_extension(client):
    response = client.post(
        "/api/export",
        files={"file": ("logbook.csv", b"a,b,c", "text/csv")},
    )
    assert response.status_code == 400


def test_logbook_errors_are_unprocessable(client, make_row):
    content = _workbook_bytes([make_row(night_landings="lots")])
    response = client.post(
        "/api/export",
        files={"file": ("logbook.xlsx", content, XLSX_MIME)},
        data={"start_row": "2"},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert "Night landings" in body["error"]


def test_empty_sheet_is_unprocessable(client):
    content = _workbook_bytes([])
    response = client.post(
        "/api/export",
        files={"file": ("logbook.xlsx", content, XLSX_MIME)},
        data={"start_row": "2"},
    )
    assert response.status_code == 422


def test_unknown_job(client):
    assert client.get("/api/download/nope/logbook").status_code == 404
    assert client.get("/api/download/nope/map").status_code == 404
