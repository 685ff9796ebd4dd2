"""Logging setup and structured log records for the check."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure root logging.

    Stdout carries the plugin status line, so log records go to stderr.
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        stream=sys.stderr
    )
    # The driver is chatty about topology changes; keep it quiet unless debugging.
    logging.getLogger("cassandra").setLevel(
        logging.DEBUG if level == "DEBUG" else logging.ERROR
    )


class StructuredLogger:
    """Structured logging with context."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, record: Dict[str, Any], context: Dict[str, Any]) -> Dict[str, Any]:
        record['timestamp'] = datetime.now(timezone.utc).isoformat()
        record.update(context)
        return record

    def debug(self, message: str, **context):
        record = self._add_context({'message': message}, context)
        self.logger.debug(json.dumps(record, default=str) if context else message)

    def info(self, message: str, **context):
        """Log info with context."""
        record = self._add_context({'message': message}, context)
        self.logger.info(json.dumps(record, default=str) if context else message)

    def warning(self, message: str, **context):
        """Log warning with context."""
        record = self._add_context({'message': message}, context)
        self.logger.warning(json.dumps(record, default=str) if context else message)

    def error(self, message: str, exception: Optional[BaseException] = None, **context):
        """Log error with context and exception."""
        record = self._add_context({'message': message}, context)

        if exception:
            record['exception'] = {
                'type': type(exception).__name__,
                'message': str(exception),
            }

        self.logger.error(
            json.dumps(record, default=str) if (context or exception) else message,
            exc_info=exception if self.logger.isEnabledFor(logging.DEBUG) else None
        )
