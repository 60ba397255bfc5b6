"""Structured logging configuration for relschema."""

import logging
import sys
from typing import Optional

try:
    from json_log_formatter import JSONFormatter
except ImportError:
    JSONFormatter = None  # type: ignore


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    dataset: Optional[str] = None,
) -> None:
    """Configure logging for relschema.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, use JSON format; otherwise use normal format
        dataset: Optional dataset name added to every record
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("relschema")
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if json_format:
        if JSONFormatter is None:
            raise ImportError(
                "json-log-formatter is required for JSON logging. "
                "Install it with: pip install relschema[json-logs]"
            )
        formatter = JSONFormatter()
    else:
        formatter = StructuredFormatter()

    handler.setFormatter(formatter)
    if dataset is not None:
        handler.addFilter(DatasetFilter(dataset))
    logger.addHandler(handler)


class DatasetFilter(logging.Filter):
    """Attach a fixed dataset name to records that do not carry one."""

    def __init__(self, dataset: str) -> None:
        super().__init__()
        self.dataset = dataset

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "dataset"):
            record.dataset = self.dataset
        return True


class StructuredFormatter(logging.Formatter):
    """Structured formatter that adds context to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, "context", {})

        parts = [f"[{record.levelname}]"]

        if getattr(record, "dataset", None) is not None:
            parts.append(f"dataset={record.dataset}")

        if hasattr(record, "adapter"):
            parts.append(f"adapter={record.adapter}")

        for key, value in context.items():
            parts.append(f"{key}={value}")

        parts.append(record.getMessage())

        return " ".join(parts)
