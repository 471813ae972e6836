"""Console logging configuration for RiskBoard."""

from __future__ import annotations

import logging
import sys

from riskboard.utils.time import utc_now

# Attributes the request middleware attaches through ``extra=``.
REQUEST_CONTEXT_FIELDS = ("request_id", "method", "path", "status_code", "duration_ms")


class RequestContextFormatter(logging.Formatter):
    """Renders ``[LEVEL] timestamp message key=value ...`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"[{record.levelname:<7}]",
            utc_now().isoformat(),
            f"{record.name}:",
            record.getMessage(),
        ]

        for key in REQUEST_CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                parts.append(f"{key}={value}")

        line = " ".join(parts)
        if record.exc_info and record.exc_info[1]:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging once per process."""
    root_logger = logging.getLogger()

    # Avoid adding handlers multiple times
    if any(isinstance(h.formatter, RequestContextFormatter) for h in root_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(RequestContextFormatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Quiet noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
