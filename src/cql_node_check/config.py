"""
Configuration for the Cassandra node check.
Command-line options with environment variable fallbacks and validation.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .core.policy import Endpoint
from .core.report import Status
from .utils.helpers import mask_sensitive_data
from .utils.validators import EndpointValidator

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9042
DEFAULT_KEYSPACE = "system"
CHECK_QUERY = "SELECT host_id FROM system.local LIMIT 1"

ENV_PREFIX = "CQL_CHECK_"


class LogLevel(Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with the UNKNOWN plugin state."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(int(Status.UNKNOWN), f"{self.prog}: error: {message}\n")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    return value if value else default


@dataclass
class CheckConfig:
    """Everything one check run needs to know."""
    host: str
    port: int = DEFAULT_PORT
    username: Optional[str] = None
    password: Optional[str] = None
    keyspace: str = DEFAULT_KEYSPACE
    query: str = CHECK_QUERY
    expected_rows: int = 1
    log_level: LogLevel = LogLevel.WARNING

    @property
    def endpoint(self) -> Endpoint:
        return Endpoint(address=self.host, port=self.port)

    @property
    def auth_enabled(self) -> bool:
        """Credentials are used only when both halves are present."""
        return bool(self.username and self.password)

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        """Build the plugin's command-line parser."""
        parser = PluginArgumentParser(
            prog="check_cql_node",
            description="Icinga/Nagios check of the CQL interface of a single Cassandra node."
        )
        host_default = _env("HOST")
        parser.add_argument(
            "-H", "--host",
            default=host_default,
            required=host_default is None,
            help="Hostname/IP interface to check"
        )
        parser.add_argument(
            "-P", "--port",
            type=int,
            default=_env("PORT", str(DEFAULT_PORT)),
            help="CQL (native) port number (default: %(default)s)"
        )
        parser.add_argument(
            "-u", "--username",
            default=_env("USERNAME"),
            help="Username to authenticate with"
        )
        parser.add_argument(
            "-p", "--password",
            default=_env("PASSWORD"),
            help="Password to authenticate with"
        )
        return parser

    @classmethod
    def from_args(cls, argv: Optional[List[str]] = None) -> 'CheckConfig':
        """Load configuration from the command line, falling back to the environment."""
        args = cls.build_parser().parse_args(argv)
        return cls(
            host=args.host,
            port=args.port,
            username=args.username,
            password=args.password,
            log_level=cls._log_level_from_environment(),
        )

    @classmethod
    def from_environment(cls) -> 'CheckConfig':
        """Load configuration from environment variables only."""
        return cls(
            host=_env("HOST", ""),
            port=int(_env("PORT", str(DEFAULT_PORT))),
            username=_env("USERNAME"),
            password=_env("PASSWORD"),
            log_level=cls._log_level_from_environment(),
        )

    @staticmethod
    def _log_level_from_environment() -> LogLevel:
        raw = _env("LOG_LEVEL", LogLevel.WARNING.value).upper()
        try:
            return LogLevel(raw)
        except ValueError:
            logger.warning(f"Ignoring unsupported log level {raw!r}")
            return LogLevel.WARNING

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = [str(error) for error in EndpointValidator.validate_endpoint(self.host, self.port)]

        if not self.keyspace:
            errors.append("keyspace: Required field")
        if not self.query or not self.query.strip():
            errors.append("query: Required field")
        if self.expected_rows < 0:
            errors.append("expected_rows: must be non-negative")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """Loggable view of the configuration with credentials masked."""
        return mask_sensitive_data({
            "endpoint": str(self.endpoint),
            "username": self.username,
            "password": self.password,
            "auth_enabled": self.auth_enabled,
            "keyspace": self.keyspace,
            "query": self.query,
            "log_level": self.log_level.value,
        }, sensitive_keys=['password'])
