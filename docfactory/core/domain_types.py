"""Domain Types: identity aliases and the enumerations shared by every layer.

Invariants:
    - TenantId, TemplateId, VersionId wrap opaque strings
    - Enum values are the exact strings accepted on the wire
    - A template is either ACTIVE or DELETED; there is no third state

Design Decisions:
    - str Enums: serialize to JSON without custom encoders and compare equal
      to their raw string values
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, NewType


# ─── Identity Types ──────────────────────────────────────────────

TenantId = NewType("TenantId", str)
TemplateId = NewType("TemplateId", str)
VersionId = NewType("VersionId", str)

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


def new_id() -> str:
    """Default identifier generator."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ─── Enums ───────────────────────────────────────────────────────

class DocumentType(str, Enum):
    """Kinds of document a template can produce."""
    WARRANTY = "warranty"
    INSTRUCTION = "instruction"
    CERTIFICATE = "certificate"
    LABEL = "label"


class PageSize(str, Enum):
    A4 = "A4"
    A5 = "A5"
    LETTER = "Letter"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class TemplateStatus(str, Enum):
    """Template lifecycle. Delete and restore are the only transitions."""
    ACTIVE = "active"
    DELETED = "deleted"


def is_enum_member(enum_cls: type[Enum], value: object) -> bool:
    """Whether value is a member of enum_cls or one of its raw values."""
    if isinstance(value, enum_cls):
        return True
    try:
        enum_cls(value)
    except ValueError:
        return False
    return True
