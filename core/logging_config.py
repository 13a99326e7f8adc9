"""
Structured logging configuration for the ResearchStudy builder.

Provides two formatters:
- **ConsoleFormatter**: Human-readable colored output (default for terminal)
- **JSONFormatter**: Machine-parseable JSON lines (for --json-log flag or file output)

Usage:
    from core.logging_config import configure_logging
    configure_logging(json_mode=args.json_log, log_file=args.log_file)
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional


# Record attributes (set through ``extra=``) copied into formatted output
CONTEXT_FIELDS = ("study_id", "resource_id", "source_file")


def record_context(record: logging.LogRecord) -> Dict[str, str]:
    """Non-empty builder context attached to a record, in CONTEXT_FIELDS order."""
    return {
        name: str(getattr(record, name))
        for name in CONTEXT_FIELDS
        if getattr(record, name, None)
    }


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(record_context(record))
        exc = record.exc_info[1] if record.exc_info else None
        if exc is not None:
            # Builder errors describe themselves; anything else gets type + message
            if hasattr(exc, "to_dict"):
                entry["error"] = exc.to_dict()
            else:
                entry["error"] = {"error_type": type(exc).__name__, "message": str(exc)}
        return json.dumps(entry, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Level-prefixed console lines, tagged with study/resource context."""

    PREFIXES = {
        logging.DEBUG: "\033[90m[DEBUG]\033[0m",
        logging.WARNING: "\033[33m[WARN]\033[0m",
        logging.ERROR: "\033[31m[ERROR]\033[0m",
        logging.CRITICAL: "\033[1;31m[CRIT]\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        prefix = self.PREFIXES.get(record.levelno, f"[{record.levelname}]")
        context = record_context(record)
        tag = ""
        if context:
            tag = "(" + " ".join(
                "#" + value if name == "resource_id" else value
                for name, value in context.items()
            ) + ") "
        line = f"{prefix} {tag}{record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    *,
    json_mode: bool = False,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    quiet: bool = False,
) -> None:
    """
    Configure root logger with appropriate handlers.

    Args:
        json_mode: If True, use JSON formatter for console output.
        log_file: If set, also write JSON logs to this file.
        level: Logging level (default INFO).
        quiet: If True, suppress console output (only file).
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Drop handlers left behind by basicConfig or an earlier call
    root.handlers.clear()

    if not quiet:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(JSONFormatter() if json_mode else ConsoleFormatter())
        root.addHandler(console)

    # File output is always JSON
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(JSONFormatter())
        root.addHandler(fh)


class StudyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that tags every record with the owning study id."""

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("study_id", self.extra.get("study_id", ""))
        return msg, kwargs
