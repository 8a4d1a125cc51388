"""Structured Logging — JSON formatter, credential redaction and setup.

Invariants:
    - Every JSON line has timestamp, level, logger and message
    - user_id, note_id, error_code and path are surfaced when passed via `extra`
    - Bearer tokens and password/token fields are masked before any handler formats them
    - setup_logging() can run repeatedly (lifespan restarts, tests) without stacking handlers

Design Decisions:
    - stdlib logging + a JSONFormatter: no extra dependency, field names under our control
    - Redaction is a handler Filter, so third-party loggers (uvicorn, sqlalchemy)
      get masked too
"""

import json
import logging
import re
from datetime import datetime, timezone

HANDLER_NAME = "mini_notes"
_EXTRA_FIELDS = ("user_id", "note_id", "error_code", "path")

_REDACTIONS = (
    (re.compile(r"(Bearer\s+)[A-Za-z0-9\-_.=]+"), r"\1[REDACTED]"),
    (
        re.compile(
            r"""(["']?(?:password|accessToken|refreshToken|refresh_token)["']?\s*[:=]\s*["']?)[^"',\s}]+""",
            re.IGNORECASE,
        ),
        r"\1[REDACTED]",
    ),
)


def redact(text: str) -> str:
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


class RedactingFilter(logging.Filter):
    """Mask credentials in the rendered message. Never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = redact(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line for log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: getattr(record, key)
            for key in _EXTRA_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the application handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.addFilter(RedactingFilter())
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
