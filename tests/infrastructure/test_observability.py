"""Structured logging and settings.

Tests cover:
    - JSONFormatter emits the base fields plus known extras only when present
    - TemplateTextFormatter appends the tenant/template@version context
    - setup_logging installs exactly one handler however often it runs
    - Settings defaults and the positive page limit rule
"""

import json
import logging

import pytest
from pydantic import ValidationError

from docfactory.config import Settings
from docfactory.infrastructure.observability import (
    JSONFormatter, TemplateTextFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "docfactory.test", logging.INFO, __file__, 1, "Template created", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "docfactory.test"
    assert payload["message"] == "Template created"
    assert "tenant_id" not in payload


def test_json_formatter_surfaces_extras():
    payload = json.loads(JSONFormatter().format(_record(
        tenant_id="t1", template_id="tpl-1", version_number=2, unrelated="x",
    )))
    assert payload["tenant_id"] == "t1"
    assert payload["template_id"] == "tpl-1"
    assert payload["version_number"] == 2
    assert "unrelated" not in payload



def test_text_formatter_appends_template_context():
    line = TemplateTextFormatter().format(_record(
        tenant_id="t1", template_id="tpl-1", version_number=3,
    ))
    assert line.endswith("Template created [t1/tpl-1@v3]")


def test_text_formatter_reports_error_code():
    line = TemplateTextFormatter().format(_record(error_code="RESOURCE_NOT_FOUND"))
    assert line.endswith("Template created error_code=RESOURCE_NOT_FOUND")


def test_text_formatter_plain_without_context():
    assert TemplateTextFormatter().format(_record()).endswith("Template created")


def test_setup_logging_does_not_stack_handlers():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        setup_logging("DEBUG", "text")
        setup_logging("WARNING", "json")
        ours = [h for h in logging.root.handlers if h.get_name() == "docfactory"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, JSONFormatter)
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.handlers[:] = before
        logging.root.setLevel(level)


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.tenant_header == "X-Tenant-ID"
    assert settings.fallback_user_id == "system"
    assert settings.default_page_limit == 50


def test_settings_rejects_non_positive_page_limit():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_page_limit=0)
