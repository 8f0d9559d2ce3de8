"""Structural Validation: field-level checks for templates and history entries.

Tests cover:
    - A well-formed template/version passes
    - Each rule reports its own field and message
    - Name bounds apply after trimming
    - ensure_valid raises TemplateValidationError (400-level, field attached)
"""

import pytest

from docfactory.core.domain_types import DocumentType
from docfactory.core.errors import InvalidInputError, TemplateValidationError
from docfactory.core.validation import (
    FieldIssue, ensure_valid, validate_template, validate_version,
)
from tests.factories import make_template, make_version


def test_valid_template_passes():
    assert validate_template(make_template()) is None


def test_enum_members_and_raw_values_both_pass():
    assert validate_template(make_template(document_type=DocumentType.LABEL)) is None
    assert validate_template(make_template(document_type="label")) is None


@pytest.mark.parametrize("field,value,message", [
    ("tenant_id", "", "tenant_id is required"),
    ("name", "ab", "name must be between 3 and 100 characters"),
    ("name", "x" * 101, "name must be between 3 and 100 characters"),
    ("description", "d" * 501, "description must be <= 500 characters"),
    ("document_type", "invoice", "document_type is invalid"),
    ("page_size", "A3", "page_size is invalid"),
    ("orientation", "diagonal", "orientation is invalid"),
    ("json_schema_url", "", "json_schema_url is required"),
    ("created_by", "", "created_by is required"),
    ("updated_by", "", "updated_by is required"),
])
def test_template_rule_violations(field, value, message):
    issue = validate_template(make_template(**{field: value}))
    assert issue == FieldIssue(field, message)


def test_name_is_measured_after_trimming():
    assert validate_template(make_template(name="  ab  ")).field == "name"
    assert validate_template(make_template(name="  abc  ")) is None


def test_name_and_description_at_bounds_pass():
    template = make_template(name="n" * 100, description="d" * 500)
    assert validate_template(template) is None


def test_page_size_is_case_sensitive():
    assert validate_template(make_template(page_size="letter")).field == "page_size"
    assert validate_template(make_template(page_size="Letter")) is None


def test_first_failing_rule_wins():
    issue = validate_template(make_template(tenant_id="", name=""))
    assert issue.field == "tenant_id"


def test_valid_version_passes():
    assert validate_version(make_version()) is None


@pytest.mark.parametrize("field,value,message", [
    ("template_id", "", "template_id is required"),
    ("version_number", 0, "version_number must be positive"),
    ("version_number", -3, "version_number must be positive"),
    ("json_schema_url", "", "json_schema_url is required"),
    ("created_by", "", "created_by is required"),
])
def test_version_rule_violations(field, value, message):
    assert validate_version(make_version(**{field: value})) == FieldIssue(field, message)


def test_ensure_valid_accepts_none():
    ensure_valid(None)


def test_ensure_valid_raises_with_field():
    with pytest.raises(TemplateValidationError) as exc_info:
        ensure_valid(FieldIssue("name", "name must be between 3 and 100 characters"))
    err = exc_info.value
    assert isinstance(err, InvalidInputError)
    assert err.field == "name"
    assert err.http_status == 400
    assert err.to_response() == {"error": "name must be between 3 and 100 characters"}
