"""Structural Validation: field-level checks run before every store mutation.

Invariants:
    - validate_* functions are PURE: return a FieldIssue descriptor or None, never raise
    - Checks run in a fixed order; the first failing field is reported
    - ensure_valid is the single place a FieldIssue becomes an exception
"""

from dataclasses import dataclass

from docfactory.core.domain_types import (
    DocumentType, Orientation, PageSize, is_enum_member,
)
from docfactory.core.errors import TemplateValidationError
from docfactory.core.records import Template, TemplateVersion


NAME_MIN_LENGTH: int = 3
NAME_MAX_LENGTH: int = 100
DESCRIPTION_MAX_LENGTH: int = 500


@dataclass(frozen=True)
class FieldIssue:
    field: str
    message: str


def validate_template(template: Template) -> FieldIssue | None:
    """Structural rules for a Template record."""
    if not template.tenant_id:
        return FieldIssue("tenant_id", "tenant_id is required")
    name_length = len(template.name.strip())
    if name_length < NAME_MIN_LENGTH or name_length > NAME_MAX_LENGTH:
        return FieldIssue(
            "name",
            f"name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
        )
    if len(template.description) > DESCRIPTION_MAX_LENGTH:
        return FieldIssue(
            "description",
            f"description must be <= {DESCRIPTION_MAX_LENGTH} characters",
        )
    if not is_enum_member(DocumentType, template.document_type):
        return FieldIssue("document_type", "document_type is invalid")
    if not is_enum_member(PageSize, template.page_size):
        return FieldIssue("page_size", "page_size is invalid")
    if not is_enum_member(Orientation, template.orientation):
        return FieldIssue("orientation", "orientation is invalid")
    if not template.json_schema_url:
        return FieldIssue("json_schema_url", "json_schema_url is required")
    if not template.created_by:
        return FieldIssue("created_by", "created_by is required")
    if not template.updated_by:
        return FieldIssue("updated_by", "updated_by is required")
    return None


def validate_version(version: TemplateVersion) -> FieldIssue | None:
    """Structural rules for a history entry."""
    if not version.template_id:
        return FieldIssue("template_id", "template_id is required")
    if version.version_number <= 0:
        return FieldIssue("version_number", "version_number must be positive")
    if not version.json_schema_url:
        return FieldIssue("json_schema_url", "json_schema_url is required")
    if not version.created_by:
        return FieldIssue("created_by", "created_by is required")
    return None


def ensure_valid(issue: FieldIssue | None) -> None:
    if issue is not None:
        raise TemplateValidationError(issue.message, issue.field)
