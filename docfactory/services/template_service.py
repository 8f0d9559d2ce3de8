"""Template Service: assigns identities and timestamps, sequences template + history writes.

Invariants:
    - Create yields version 1 with exactly one current history entry numbered 1
    - Every accepted Update adds exactly 1 to version and appends one current entry
      carrying that number
    - Create and Update persist the template and its history entry in one
      transaction: both land or neither does
    - Update on a soft-deleted template fails with InvalidInputError
    - Delete, Restore, reads and version operations pass straight through
"""

import logging
from dataclasses import replace

from docfactory.core.domain_types import (
    Clock, IdFactory, TemplateId, TenantId, VersionId, new_id, utc_now,
)
from docfactory.core.errors import ErrorContext, InvalidInputError
from docfactory.core.records import (
    DuplicateOptions, ListOptions, Template, TemplateDraft, TemplatePage,
    TemplatePatch, TemplateVersion, VersionComparison,
)
from docfactory.core.repository_protocols import TemplateRepository
from docfactory.core.validation import ensure_valid, validate_template
from docfactory.core.versioning import bump_version, initial_entry, update_entry

logger = logging.getLogger(__name__)


class TemplateService:
    """Orchestrates template lifecycle and version history."""

    def __init__(
        self,
        repository: TemplateRepository,
        id_factory: IdFactory = new_id,
        clock: Clock = utc_now,
    ):
        self._repository = repository
        self._new_id = id_factory
        self._clock = clock

    # --- writes --------------------------------------------------------------

    def create_template(self, draft: TemplateDraft) -> Template:
        now = self._clock()
        template = Template(
            template_id=TemplateId(self._new_id()),
            tenant_id=draft.tenant_id,
            name=draft.name.strip(),
            description=draft.description,
            document_type=draft.document_type,
            page_size=draft.page_size,
            orientation=draft.orientation,
            json_schema_url=draft.json_schema_url,
            thumbnail_url=draft.thumbnail_url,
            version=1,
            created_by=draft.created_by,
            updated_by=draft.updated_by or draft.created_by,
            created_at=now,
            updated_at=now,
        )
        ensure_valid(validate_template(template))
        with self._repository.transaction() as uow:
            created = uow.create_template(template)
            uow.create_version(
                created.tenant_id, initial_entry(created, VersionId(self._new_id())),
            )
        logger.info(
            f"Template created: {created.name}",
            extra=_log_extra(created),
        )
        return created

    def update_template(
        self,
        tenant_id: TenantId,
        template_id: TemplateId,
        patch: TemplatePatch,
        updated_by: str,
        change_summary: str = "",
    ) -> Template:
        with self._repository.transaction() as uow:
            current = uow.get_template(tenant_id, template_id)
            if current.is_deleted:
                raise InvalidInputError(
                    "template is deleted",
                    ErrorContext(tenant_id=tenant_id, template_id=template_id),
                )
            candidate = bump_version(
                patch.apply_to(current), updated_by, self._clock(),
            )
            ensure_valid(validate_template(candidate))
            updated = uow.update_template(candidate)
            uow.create_version(
                tenant_id, update_entry(updated, VersionId(self._new_id()), change_summary),
            )
        logger.info(
            f"Template updated to version {updated.version}",
            extra=_log_extra(updated),
        )
        return updated

    def duplicate_template(
        self, tenant_id: TenantId, template_id: TemplateId, options: DuplicateOptions,
    ) -> Template:
        """Clone a template; with copy_versions the whole history comes along."""
        clone = self._repository.duplicate_template(tenant_id, template_id, options)
        logger.info(
            f"Template {template_id} duplicated "
            f"(copy_versions={options.copy_versions})",
            extra=_log_extra(clone),
        )
        return clone

    def delete_template(self, tenant_id: TenantId, template_id: TemplateId) -> None:
        self._repository.soft_delete_template(tenant_id, template_id)
        logger.info(
            "Template soft-deleted",
            extra={"tenant_id": tenant_id, "template_id": template_id},
        )

    def restore_template(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        restored = self._repository.restore_template(tenant_id, template_id)
        logger.info("Template restored", extra=_log_extra(restored))
        return restored

    def restore_version(
        self,
        tenant_id: TenantId,
        template_id: TemplateId,
        version_number: int,
        restored_by: str | None = None,
    ) -> TemplateVersion:
        entry = self._repository.restore_version(
            tenant_id, template_id, version_number, restored_by,
        )
        logger.info(
            f"Version {version_number} restored as version {entry.version_number}",
            extra={
                "tenant_id": tenant_id,
                "template_id": template_id,
                "version_number": entry.version_number,
            },
        )
        return entry

    # --- reads ---------------------------------------------------------------

    def get_template(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        return self._repository.get_template(tenant_id, template_id)

    def list_templates(self, options: ListOptions) -> TemplatePage:
        """One page plus the total, read from a single snapshot."""
        with self._repository.snapshot() as view:
            return TemplatePage(
                items=view.list_templates(options),
                total=view.count_templates(replace(options, limit=0, offset=0)),
            )

    def list_versions(
        self, tenant_id: TenantId, template_id: TemplateId,
    ) -> list[TemplateVersion]:
        return self._repository.list_versions(tenant_id, template_id)

    def compare_versions(
        self, tenant_id: TenantId, template_id: TemplateId, left: int, right: int,
    ) -> VersionComparison:
        return self._repository.compare_versions(tenant_id, template_id, left, right)


def _log_extra(template: Template) -> dict:
    return {
        "tenant_id": template.tenant_id,
        "template_id": template.template_id,
        "version_number": template.version,
    }
