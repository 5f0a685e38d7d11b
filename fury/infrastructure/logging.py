"""
Centralized Logging

Architectural Intent:
- Diagnostic logging for all Fury components under the "fury" logger
- Human-readable or structured JSON output on stderr
- The correlated command output log is separate: it goes to the sink
  given to the RunContext

Structured extras (JSON output only):
- stage: apply stage value ("pre-run", "packages", "files", "post-run"),
  set by ApplyRoles on stage start and failure records
- run: RunContext invocation number, matching the <%6d> tag of the
  command's lines in the run log
"""

import json
import logging
import sys
from datetime import datetime, UTC

_EXTRA_FIELDS = ("stage", "run")


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(
    level: int = logging.WARNING,
    json_format: bool = False,
) -> None:
    """Configure logging for Fury.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        json_format: If True, use JSON structured output. Otherwise human-readable.
    """
    root = logging.getLogger("fury")
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root.addHandler(handler)
