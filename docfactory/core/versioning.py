"""Version Sequencing: pure rules that keep a template and its history in step.

Invariants:
    - append_current is the only producer of history: after it, exactly one entry is current
    - A new entry's version_number equals the owning template's version at that moment
    - restore never rewinds: the restored entry is a new, higher-numbered entry
    - copy_history preserves order and numbers, except the formerly current copy,
      which takes the clone's version

Design Decisions:
    - Entries are rebuilt with dataclasses.replace instead of mutated in place
    - id generation and timestamps come from the caller; nothing here reads a clock
"""

from dataclasses import replace
from datetime import datetime

from docfactory.core.domain_types import IdFactory, TemplateId, VersionId
from docfactory.core.records import (
    DuplicateOptions, Template, TemplateVersion, VersionComparison,
)


INITIAL_CHANGE_SUMMARY: str = "initial version"
COPY_NAME_SUFFIX: str = " Copy"


# --- Template transitions ----------------------------------------------------

def bump_version(template: Template, updated_by: str, at: datetime) -> Template:
    """Record one accepted mutation on the live template."""
    return replace(
        template, version=template.version + 1, updated_by=updated_by, updated_at=at,
    )


def build_clone(
    source: Template, clone_id: TemplateId, options: DuplicateOptions, at: datetime,
) -> Template:
    """Clone with a fresh identity and lifecycle; content carried from source."""
    return replace(
        source.mark_restored(),
        template_id=clone_id,
        name=options.name_override.strip() or f"{source.name}{COPY_NAME_SUFFIX}",
        description=options.description_override or source.description,
        version=1,
        created_by=options.created_by,
        updated_by=options.updated_by,
        created_at=at,
        updated_at=at,
        documents_count=0,
        last_used_at=None,
    )


# --- History entries ---------------------------------------------------------

def initial_entry(template: Template, version_id: VersionId) -> TemplateVersion:
    return TemplateVersion(
        version_id=version_id,
        template_id=template.template_id,
        version_number=template.version,
        change_summary=INITIAL_CHANGE_SUMMARY,
        json_schema_url=template.json_schema_url,
        created_by=template.created_by,
        created_at=template.created_at,
        is_current=True,
    )


def update_entry(
    template: Template, version_id: VersionId, change_summary: str,
) -> TemplateVersion:
    """Entry for an accepted update; authored by the template's last updater."""
    return TemplateVersion(
        version_id=version_id,
        template_id=template.template_id,
        version_number=template.version,
        change_summary=change_summary,
        json_schema_url=template.json_schema_url,
        created_by=template.updated_by,
        created_at=template.updated_at,
        is_current=True,
    )


def duplicated_entry(
    clone: Template, source_id: TemplateId, version_id: VersionId,
) -> TemplateVersion:
    return TemplateVersion(
        version_id=version_id,
        template_id=clone.template_id,
        version_number=clone.version,
        change_summary=f"duplicated from {source_id}",
        json_schema_url=clone.json_schema_url,
        created_by=clone.updated_by,
        created_at=clone.created_at,
        is_current=True,
    )


def restored_entry(
    template: Template, source_entry: TemplateVersion, version_id: VersionId,
) -> TemplateVersion:
    """Restore point layered on top of history, carrying the old entry's content."""
    return TemplateVersion(
        version_id=version_id,
        template_id=template.template_id,
        version_number=template.version,
        change_summary=f"restored from version {source_entry.version_number}",
        json_schema_url=source_entry.json_schema_url,
        created_by=template.updated_by,
        created_at=template.updated_at,
        is_current=True,
    )


# --- History operations ------------------------------------------------------

def append_current(
    history: list[TemplateVersion], entry: TemplateVersion,
) -> list[TemplateVersion]:
    """Supersede every existing entry and append entry as the current one."""
    superseded = [
        replace(existing, is_current=False) if existing.is_current else existing
        for existing in history
    ]
    superseded.append(replace(entry, is_current=True))
    return superseded


def find_entry(
    history: list[TemplateVersion], version_number: int,
) -> TemplateVersion | None:
    for entry in history:
        if entry.version_number == version_number:
            return entry
    return None


def current_entry(history: list[TemplateVersion]) -> TemplateVersion | None:
    return next((entry for entry in history if entry.is_current), None)


def copy_history(
    history: list[TemplateVersion],
    clone_id: TemplateId,
    clone_version: int,
    id_factory: IdFactory,
) -> list[TemplateVersion]:
    """Re-materialize a source history under a clone's identifier."""
    copies = []
    for entry in history:
        copy = replace(entry, version_id=VersionId(id_factory()), template_id=clone_id)
        if entry.is_current:
            copy = replace(copy, version_number=clone_version)
        copies.append(copy)
    return copies


# --- Comparison --------------------------------------------------------------

def compare_entries(
    template_id: TemplateId, left: TemplateVersion, right: TemplateVersion,
) -> VersionComparison:
    summary = (
        f"left schema: {left.json_schema_url}, right schema: {right.json_schema_url}"
    )
    if left.json_schema_url == right.json_schema_url:
        summary += " (unchanged)"
    return VersionComparison(
        template_id=template_id, left=left, right=right, summary=summary,
    )
