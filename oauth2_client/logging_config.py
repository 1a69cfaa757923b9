"""
Logging configuration for the OAuth2 client.

The library itself only creates module loggers. Applications that want
structured output can call setup_global_logging() to get one JSON object
per log record on stdout.
"""

import json
import logging
import os
from datetime import UTC, datetime


LOG_LEVEL_ENV = "OAUTH2_CLIENT_LOG_LEVEL"


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record for the client's token and user-info logs.

    The service and transport pass provider name, grant type and HTTP
    status as `extra={"extra_fields": {...}}`; those keys are merged into
    the top-level object so log pipelines can filter on them.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format.

        Returns:
            A JSON string representing the log record.
        """
        log_object = {
            "timestamp": datetime.now(UTC).isoformat(),
            "severity": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if they exist
        if hasattr(record, "extra_fields") and isinstance(record.extra_fields, dict):
            log_object.update(record.extra_fields)

        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


def setup_global_logging(level: str | None = None) -> None:
    """
    Configure root logging with the JSON formatter.

    The level comes from the argument, then OAUTH2_CLIENT_LOG_LEVEL, then INFO.
    Existing root handlers are replaced so records are not emitted twice.
    """
    level_name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
    root_logger.addHandler(handler)
    root_logger.setLevel(level_name)
