"""In-Memory Stores: dict-backed Template Store and Version Store.

Invariants:
    - Neither store locks; the repository serializes every call
    - Records are frozen; a stored record is returned as-is, never copied
    - Template lookups under the wrong tenant raise NotFoundError, same as absence
    - VersionStore.append validates, then supersedes all existing entries;
      once a history is non-empty it always has exactly one current entry
"""

from docfactory.core.domain_types import Clock, TemplateId, TenantId, utc_now
from docfactory.core.errors import ConflictError, ErrorContext, NotFoundError
from docfactory.core.records import ListOptions, Template, TemplateVersion
from docfactory.core.template_query import filter_templates, matches, paginate
from docfactory.core.validation import ensure_valid, validate_version
from docfactory.core.versioning import append_current, find_entry


class InMemoryTemplateStore:
    """Template records keyed by template_id."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._templates: dict[TemplateId, Template] = {}
        self._clock = clock

    def insert(self, template: Template) -> Template:
        if template.template_id in self._templates:
            raise ConflictError(
                "Template", template.template_id,
                ErrorContext(tenant_id=template.tenant_id, template_id=template.template_id),
            )
        self._templates[template.template_id] = template
        return template

    def get(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        template = self._templates.get(template_id)
        if template is None or template.tenant_id != tenant_id:
            raise NotFoundError(
                "Template", template_id,
                ErrorContext(tenant_id=tenant_id, template_id=template_id),
            )
        return template

    def replace(self, template: Template) -> Template:
        """Full replace of an existing record owned by the same tenant."""
        self.get(template.tenant_id, template.template_id)
        self._templates[template.template_id] = template
        return template

    def soft_delete(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        deleted = self.get(tenant_id, template_id).mark_deleted(self._clock())
        self._templates[template_id] = deleted
        return deleted

    def restore(self, tenant_id: TenantId, template_id: TemplateId) -> Template:
        restored = self.get(tenant_id, template_id).mark_restored()
        self._templates[template_id] = restored
        return restored

    def query(self, options: ListOptions) -> list[Template]:
        ordered = filter_templates(self._templates.values(), options)
        return paginate(ordered, options.limit, options.offset)

    def count(self, options: ListOptions) -> int:
        return sum(1 for t in self._templates.values() if matches(t, options))

    def contains(self, template_id: TemplateId) -> bool:
        return template_id in self._templates

    def peek(self, template_id: TemplateId) -> Template | None:
        """Raw lookup without tenant scoping; rollback journal only."""
        return self._templates.get(template_id)

    def reset(self, template_id: TemplateId, record: Template | None) -> None:
        if record is None:
            self._templates.pop(template_id, None)
        else:
            self._templates[template_id] = record

class InMemoryVersionStore:
    """Ordered history lists keyed by template_id."""

    def __init__(self) -> None:
        self._versions: dict[TemplateId, list[TemplateVersion]] = {}

    def append(self, version: TemplateVersion) -> TemplateVersion:
        ensure_valid(validate_version(version))
        history = append_current(self._versions.get(version.template_id, []), version)
        self._versions[version.template_id] = history
        return history[-1]

    def history(self, template_id: TemplateId) -> list[TemplateVersion]:
        return list(self._versions.get(template_id, []))

    def find(self, template_id: TemplateId, version_number: int) -> TemplateVersion:
        entry = find_entry(self._versions.get(template_id, []), version_number)
        if entry is None:
            raise NotFoundError(
                "Template version", f"{template_id}@{version_number}",
                ErrorContext(template_id=template_id, version_number=version_number),
            )
        return entry

    def reset(self, template_id: TemplateId, entries: list[TemplateVersion]) -> None:
        if entries:
            self._versions[template_id] = list(entries)
        else:
            self._versions.pop(template_id, None)
