"""Tests for configuration loading."""

from __future__ import annotations

import os

import pytest

from logbook.config import Config, parse_page_breaks
from logbook.errors import ConfigInvalid


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_missing_file_gives_defaults(tmp_path):
    config = Config.from_file(str(tmp_path / "none.ini"), environ={})
    assert config.source_type == "xlsx"
    assert config.start_row == 20
    assert config.reverse is True
    assert config.owner == "Logbook Owner"
    assert config.page_breaks == []
    assert config.map_width == 1920
    assert config.map_height == 1080
    assert config.logbook_output == os.path.join(str(tmp_path), "./logbook.pdf")


def test_file_values_are_converted(tmp_path):
    path = _write(tmp_path / "config.ini", """
[source]
type = google
api_key = secret
spreadsheet_id = abc123
start_row = 2

[logbook]
owner = J. Smith
page_breaks = 50, 100
reverse = no

[map]
no_routes = yes
filter_date = 2023
width = 800
""")
    config = Config.from_file(path, environ={})

    assert config.source_type == "google"
    assert config.api_key == "secret"
    assert config.spreadsheet_id == "abc123"
    assert config.start_row == 2
    assert config.owner == "J. Smith"
    assert config.page_breaks == [50, 100]
    assert config.reverse is False
    assert config.filter_no_routes is True
    assert config.filter_date == "2023"
    assert config.map_width == 800
    config.validate()


def test_relative_paths_resolve_against_the_config_dir(tmp_path):
    path = _write(tmp_path / "config.ini", "[source]\nfile_name = flights.xlsx\n")
    config = Config.from_file(path, environ={})
    assert config.file_name == os.path.join(str(tmp_path), "flights.xlsx")


def test_environment_overrides_the_file(tmp_path):
    path = _write(tmp_path / "config.ini", "[source]\napi_key = from-file\n")
    config = Config.from_file(path, environ={
        "LOGBOOK_API_KEY": "from-env",
        "LOGBOOK_OWNER": "Env Owner",
        "LOGBOOK_MAP_WIDTH": "640",
    })
    assert config.api_key == "from-env"
    assert config.owner == "Env Owner"
    assert config.map_width == 640


@pytest.mark.parametrize("body", [
    "[source]\nstart_row = twenty\n",
    "[logbook]\nreverse = maybe\n",
    "[logbook]\npage_breaks = 10, x\n",
])
def test_malformed_values_raise(tmp_path, body):
    path = _write(tmp_path / "config.ini", body)
    with pytest.raises(ConfigInvalid):
        Config.from_file(path, environ={})


def test_override_skips_none():
    config = Config()
    config.override(owner=None, reverse=False, page_breaks="3,7", unknown="x")
    assert config.owner == "Logbook Owner"
    assert config.reverse is False
    assert config.page_breaks == [3, 7]
    assert not hasattr(config, "unknown")


def test_parse_page_breaks():
    assert parse_page_breaks("") == []
    assert parse_page_breaks("5; 9") == [5, 9]
    assert parse_page_breaks([1, "2"]) == [1, 2]
    with pytest.raises(ConfigInvalid):
        parse_page_breaks("0")


def test_validate_requires_source_fields():
    config = Config()
    with pytest.raises(ConfigInvalid, match="file_name"):
        config.validate()

    config.source_type = "google"
    config.api_key = "key"
    with pytest.raises(ConfigInvalid, match="spreadsheet_id"):
        config.validate()

    config.source_type = "csv"
    with pytest.raises(ConfigInvalid, match="Unknown source type"):
        config.validate()


def test_validate_rejects_start_row_below_one():
    config = Config()
    config.file_name = "flights.xlsx"
    config.start_row = 0
    with pytest.raises(ConfigInvalid):
        config.validate()


def test_write_default_round_trips(tmp_path):
    path = str(tmp_path / "config.ini")
    Config.write_default(path)
    config = Config.from_file(path, environ={})
    assert config.start_row == 20
    assert config.sheet_name == "Flights"
