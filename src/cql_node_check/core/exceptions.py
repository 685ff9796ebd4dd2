"""Failures a check run can detect, each mapped to a plugin status."""


class CheckError(Exception):
    """Base exception for failures detected during a check run."""
    pass


class TargetNotFound(CheckError, LookupError):
    """The pinned endpoint is not among the discovered hosts."""
    pass


class ConnectFailure(CheckError):
    """Transport, discovery or authentication failure while connecting."""
    pass


class ExecuteFailure(CheckError):
    """The check query failed after a successful connect."""
    pass


class WrongHostServed(CheckError):
    """The query was answered by a node other than the target."""
    pass


class UnexpectedRowCount(CheckError):
    """The check query did not return exactly the expected number of rows."""
    pass
