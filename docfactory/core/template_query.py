"""Template Listing: tenant filter, search, ordering and offset/limit paging.

Invariants:
    - Only records of options.tenant_id ever match
    - Deleted records match only when include_deleted is set
    - Order is updated_at descending; ties keep insertion order (stable sort)
    - An offset past the end yields an empty page, never an error
"""

from typing import Iterable

from docfactory.core.records import ListOptions, Template


def matches(template: Template, options: ListOptions) -> bool:
    if template.tenant_id != options.tenant_id:
        return False
    if template.is_deleted and not options.include_deleted:
        return False
    if options.document_type and template.document_type != options.document_type:
        return False
    needle = options.search.strip().lower()
    if needle and not (
        needle in template.name.lower() or needle in template.description.lower()
    ):
        return False
    return True


def filter_templates(
    templates: Iterable[Template], options: ListOptions,
) -> list[Template]:
    """Matching templates, most recently touched first."""
    selected = [t for t in templates if matches(t, options)]
    selected.sort(key=lambda t: t.updated_at, reverse=True)
    return selected


def paginate(items: list[Template], limit: int, offset: int) -> list[Template]:
    start = max(offset, 0)
    if start >= len(items):
        return []
    if limit <= 0:
        return items[start:]
    return items[start:start + limit]
