"""Input validators for the check configuration."""

import re
from dataclasses import dataclass
from typing import Any, List


@dataclass
class ValidationError:
    """Validation error details."""
    field: str
    message: str
    value: Any

    def __str__(self) -> str:
        return f"{self.field}: {self.message} ({self.value!r})"


class EndpointValidator:
    """Validate the target endpoint supplied by the operator."""

    # Hostnames, IPv4 and bare IPv6 literals; anything with whitespace is out.
    HOST_PATTERN = re.compile(r'^[A-Za-z0-9_.:%\-\[\]]+$')

    @staticmethod
    def validate_host(host: Any) -> List[ValidationError]:
        errors = []
        if not host or not isinstance(host, str):
            errors.append(ValidationError('host', 'Required field', host))
        elif not EndpointValidator.HOST_PATTERN.match(host):
            errors.append(ValidationError('host', 'Invalid hostname or address', host))
        return errors

    @staticmethod
    def validate_port(port: Any) -> List[ValidationError]:
        errors = []
        if isinstance(port, bool) or not isinstance(port, int):
            errors.append(ValidationError('port', 'Must be an integer', port))
        elif port < 1 or port > 65535:
            errors.append(ValidationError('port', 'Must be valid port (1-65535)', port))
        return errors

    @classmethod
    def validate_endpoint(cls, host: Any, port: Any) -> List[ValidationError]:
        """Validate both halves of an endpoint, collecting every error."""
        return cls.validate_host(host) + cls.validate_port(port)
