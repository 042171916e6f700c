"""Tests for the PDF export pipeline."""

from __future__ import annotations

import re

import pytest
from openpyxl import Workbook

from logbook.config import Config
from logbook.errors import MalformedRow, RenderFailure
from logbook.exporter import export_logbook, load_records, write_logbook


def _pdf_page_count(path):
    return len(re.findall(rb"/Type\s*/Page(?!s)", path.read_bytes()))


def test_write_logbook_produces_a_pdf(tmp_path, make_record):
    output = tmp_path / "logbook.pdf"
    result = write_logbook([make_record()] * 30, str(output), owner="J. Smith")

    assert output.read_bytes().startswith(b"%PDF")
    assert len(result["pages"]) == 2
    assert result["pdf_pages"] == 2
    assert _pdf_page_count(output) == 2
    assert result["totals"].times.total.minutes == 30 * 60


def test_empty_logbook_still_has_one_page(tmp_path):
    output = tmp_path / "empty.pdf"
    result = write_logbook([], str(output))
    assert result["pdf_pages"] == 1
    assert result["totals"].times.total.render_for_totals() == "0:00"


def test_page_break_adds_a_blank_sheet(tmp_path, make_record):
    output = tmp_path / "logbook.pdf"
    result = write_logbook([make_record()] * 4, str(output),
                           page_breaks=[1], page_rows=2)

    assert [p.number for p in result["pages"]] == [1, 1]
    assert result["pdf_pages"] == 3
    assert _pdf_page_count(output) == 3


def test_unwritable_output_is_a_render_failure(tmp_path, make_record):
    output = tmp_path / "missing-dir" / "logbook.pdf"
    with pytest.raises(RenderFailure):
        write_logbook([make_record()], str(output))


def test_missing_font_dir_is_a_render_failure(tmp_path, make_record):
    with pytest.raises(RenderFailure):
        write_logbook([make_record()], str(tmp_path / "out.pdf"),
                      font_dir=str(tmp_path / "no-fonts"))


def test_export_logbook_reverses_records(tmp_path, make_record, capsys):
    config = Config()
    config.logbook_output = str(tmp_path / "logbook.pdf")
    records = [make_record(date="2023-05-01"), make_record(date="2023-05-02")]

    result = export_logbook(config, records)
    first_page = result["pages"][0]
    assert [r.date for r in first_page.records] == ["2023-05-02", "2023-05-01"]
    assert result["flights"] == 2
    assert "Logbook has been exported to" in capsys.readouterr().out

    config.reverse = False
    result = export_logbook(config, records)
    assert [r.date for r in result["pages"][0].records] == ["2023-05-01", "2023-05-02"]


def test_export_from_workbook(tmp_path, make_row):
    wb = Workbook()
    ws = wb.active
    ws.title = "Flights"
    ws.append(["header"])
    for day in range(1, 4):
        ws.append(make_row(date=f"2023-05-0{day}"))
    workbook = tmp_path / "logbook.xlsx"
    wb.save(workbook)

    config = Config()
    config.file_name = str(workbook)
    config.start_row = 2
    config.logbook_output = str(tmp_path / "logbook.pdf")

    result = export_logbook(config)
    assert result["flights"] == 3
    assert result["totals"].times.total.render_for_totals() == "3:45"
    assert (tmp_path / "logbook.pdf").exists()


def test_malformed_row_aborts_before_writing(tmp_path, make_row):
    wb = Workbook()
    ws = wb.active
    ws.title = "Flights"
    ws.append(make_row())
    ws.append(make_row(day_landings="many"))
    workbook = tmp_path / "logbook.xlsx"
    wb.save(workbook)

    config = Config()
    config.file_name = str(workbook)
    config.start_row = 1
    config.logbook_output = str(tmp_path / "logbook.pdf")

    with pytest.raises(MalformedRow, match="row 2"):
        load_records(config)
    assert not (tmp_path / "logbook.pdf").exists()
