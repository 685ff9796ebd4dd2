"""Single-node check: connect, query, validate, report."""

from typing import Any, Callable, Optional

from ..core.exceptions import (
    ConnectFailure, ExecuteFailure, UnexpectedRowCount, WrongHostServed
)
from ..core.report import CheckReport, ErrorLog, PhaseTimer, Status
from ..core.session import ClusterManager, QueryResult
from ..utils.helpers import format_duration
from ..utils.logging import StructuredLogger

logger = StructuredLogger(__name__)


class NodeCheckHandler:
    """Drive one complete check of a single Cassandra node."""

    def __init__(self, config, cluster_factory: Optional[Callable[..., Any]] = None):
        self.config = config
        self._cluster_factory = cluster_factory

    def _new_manager(self) -> ClusterManager:
        if self._cluster_factory is None:
            return ClusterManager(self.config)
        return ClusterManager(self.config, cluster_factory=self._cluster_factory)

    async def run(self) -> CheckReport:
        """
        Run the check once.

        Every run gets its own timers, error log and driver cluster, so
        repeated runs never share state. No exception escapes; each failure
        becomes a status plus a diagnostic line.

        Returns:
            CheckReport with the final status, phase timings and diagnostics
        """
        connect_timer = PhaseTimer("connect")
        execute_timer = PhaseTimer("execute")
        total_timer = PhaseTimer("total")
        errors = ErrorLog()

        total_timer.start()
        manager = None
        try:
            manager = self._new_manager()
            status = await self._run_phases(manager, connect_timer, execute_timer, errors)
        except Exception as e:
            logger.error("Check aborted by unexpected error", exception=e,
                         endpoint=str(self.config.endpoint))
            errors.append(f"check(): {e}")
            status = Status.UNKNOWN
        finally:
            if manager is not None:
                await manager.close()
        total_timer.stop()

        report = CheckReport(
            status=status,
            connect=connect_timer,
            execute=execute_timer,
            total=total_timer,
            errors=errors
        )
        logger.info("Check finished", duration=format_duration(total_timer.elapsed_ms / 1000.0),
                    **report.to_dict())
        return report

    async def _run_phases(self, manager: ClusterManager, connect_timer: PhaseTimer,
                          execute_timer: PhaseTimer, errors: ErrorLog) -> Status:
        endpoint = str(self.config.endpoint)

        connect_timer.start()
        try:
            await manager.connect()
        except ConnectFailure as e:
            connect_timer.stop(completed=False)
            errors.append(f"connect(): {e}")
            return Status.CRITICAL
        connect_timer.stop()
        logger.info("Connected", phase="connect", endpoint=endpoint,
                    elapsed_ms=connect_timer.elapsed_ms)

        execute_timer.start()
        try:
            result = await manager.execute(self.config.query)
        except ExecuteFailure as e:
            execute_timer.stop(completed=False)
            errors.append(f"execute(): {e}")
            return Status.CRITICAL
        execute_timer.stop()
        logger.info("Query executed", phase="execute", endpoint=endpoint,
                    elapsed_ms=execute_timer.elapsed_ms, rows=result.row_count)

        try:
            self.validate(result)
        except (WrongHostServed, UnexpectedRowCount) as e:
            logger.warning("Validation failed", phase="validate", endpoint=endpoint,
                           error=str(e))
            errors.append(str(e))
            return Status.UNKNOWN

        return Status.OK

    def validate(self, result: QueryResult) -> None:
        """
        Check who answered and how many rows came back, in that order.

        Raises:
            WrongHostServed: If the coordinator is not the pinned endpoint
            UnexpectedRowCount: If the row count differs from the expected count
        """
        expected = self.config.endpoint
        if result.served_by != expected:
            served = result.served_by if result.served_by is not None else "unknown host"
            raise WrongHostServed(
                f"queried host does not match target (expected {expected}, got {served})"
            )
        if result.row_count != self.config.expected_rows:
            raise UnexpectedRowCount(
                f"unexpected number of results (expected {self.config.expected_rows}, "
                f"got {result.row_count})"
            )
