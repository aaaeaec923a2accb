"""Tests for environment-sourced configuration and logging setup."""

import json
import logging

import pytest


def test_settings_defaults(monkeypatch):
    from soilreport.config import Settings

    for name in ("BQ_PROJECT_ID", "BQ_DATASET", "BQ_TABLE", "ALLOWED_ORIGINS", "BQ_QUERY_TIMEOUT_SEC"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    assert settings.bq_project_id == "soil-report-486813"
    assert settings.bq_dataset == "crm"
    assert settings.bq_table == "users"
    assert settings.allowed_origins == []
    assert settings.query_timeout_sec is None


def test_settings_read_environment(monkeypatch):
    from soilreport.config import Settings

    monkeypatch.setenv("BQ_PROJECT_ID", "other-project")
    monkeypatch.setenv("BQ_DATASET", "sales")
    monkeypatch.setenv("BQ_TABLE", "customers")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example.com, https://b.example.com")
    monkeypatch.setenv("BQ_QUERY_TIMEOUT_SEC", "30")

    settings = Settings.from_env()
    assert settings.bq_project_id == "other-project"
    assert settings.bq_dataset == "sales"
    assert settings.bq_table == "customers"
    assert settings.allowed_origins == ["https://a.example.com", "https://b.example.com"]
    assert settings.query_timeout_sec == 30.0


def test_get_settings_reads_environment_per_call(monkeypatch):
    from soilreport.config import get_settings

    monkeypatch.setenv("BQ_TABLE", "first")
    assert get_settings().bq_table == "first"
    monkeypatch.setenv("BQ_TABLE", "second")
    assert get_settings().bq_table == "second"


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, []),
        ("", []),
        (" , ", []),
        ("*", ["*"]),
        ("https://a.example.com,,https://b.example.com ", ["https://a.example.com", "https://b.example.com"]),
    ],
)
def test_parse_allowed_origins(raw, expected):
    from soilreport.config import parse_allowed_origins

    assert parse_allowed_origins(raw) == expected


def test_non_positive_timeout_means_no_deadline(monkeypatch):
    from soilreport.config import Settings

    monkeypatch.setenv("BQ_QUERY_TIMEOUT_SEC", "0")
    assert Settings.from_env().query_timeout_sec is None


def test_invalid_timeout_is_ignored_with_warning(monkeypatch, caplog):
    from soilreport.config import Settings

    monkeypatch.setenv("BQ_QUERY_TIMEOUT_SEC", "abc")
    with caplog.at_level(logging.WARNING, logger="soilreport.config"):
        settings = Settings.from_env()

    assert settings.query_timeout_sec is None
    assert "BQ_QUERY_TIMEOUT_SEC" in caplog.text


def test_json_formatter_emits_single_line_json():
    from soilreport.logging_config import JsonFormatter

    record = logging.LogRecord("soilreport.test", logging.ERROR, __file__, 1, "boom %s", ("now",), None)
    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "ERROR"
    assert payload["logger"] == "soilreport.test"
    assert payload["message"] == "boom now"


def test_configure_logging_does_not_stack_handlers():
    from soilreport.logging_config import configure_logging, HANDLER_NAME

    configure_logging("DEBUG", "text")
    configure_logging("INFO", "json")

    root = logging.getLogger()
    ours = [h for h in root.handlers if h.get_name() == HANDLER_NAME]
    assert len(ours) == 1
    assert root.level == logging.INFO
