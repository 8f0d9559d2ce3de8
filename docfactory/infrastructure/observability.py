"""Structured Logging: template lifecycle events as JSON lines or annotated text.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Template events carry tenant_id, template_id and version_number; error
      responses add error_code and the request path
    - Both formats render the same template context, text as a
      "[tenant/template@vN]" suffix
    - setup_logging replaces its own handler on repeat calls, never stacks them
"""

import json
import logging
from datetime import datetime, timezone


EXTRA_FIELDS: tuple[str, ...] = (
    "tenant_id", "template_id", "version_number", "error_code", "path",
)

_HANDLER_NAME = "docfactory"


def template_context(record: logging.LogRecord) -> dict:
    """Known extras present on the record, in EXTRA_FIELDS order."""
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **template_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TemplateTextFormatter(logging.Formatter):
    """Human-readable lines with the template context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = template_context(record)
        if "template_id" in context:
            where = f"{context.get('tenant_id', '-')}/{context['template_id']}"
            if "version_number" in context:
                where += f"@v{context['version_number']}"
            line += f" [{where}]"
        if "error_code" in context:
            line += f" error_code={context['error_code']}"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the docfactory handler on the root logger."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TemplateTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
