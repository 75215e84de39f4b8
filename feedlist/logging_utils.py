"""
Logging setup for feedlist.

Console output goes through rich; an optional file handler writes either
plain lines or one JSON object per record. Pipeline events are logged with
``log_event`` so that their structured fields (url, item counts, status
codes) end up as top-level keys in the JSONL file.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig


# httpx logs every request at INFO; feeds are fetched often enough for that to drown the console.
HTTP_LOGGERS = ("httpx", "httpcore")


def setup_logging(cfg: LoggingConfig, log_dir: Path | None = None) -> logging.Logger:
    """Configure the ``feedlist`` logger and return it.

    Existing handlers are replaced, so calling this twice does not duplicate
    output. The file handler is only added when ``cfg.file`` is set and a
    directory is given.
    """
    level = _level_from_string(cfg.level)
    logger = logging.getLogger("feedlist")
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(max(level, _level_from_string(cfg.http_level)))

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / cfg.filename, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(_build_file_formatter(cfg.format))
        logger.addHandler(file_handler)

    return logger


def log_event(logger: logging.Logger | None, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log a named pipeline event with structured fields."""
    if logger is None:
        return
    logger.log(level, event, extra={"event": event, **fields})


class JsonlFormatter(logging.Formatter):
    """One JSON object per record, extras included as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extract_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _extract_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in _RESERVED}


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")


def _level_from_string(level: str) -> int:
    return getattr(logging, str(level).upper(), logging.INFO)
