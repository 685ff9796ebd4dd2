"""Cluster connection and query execution for the node check."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import Cluster, ExecutionProfile, EXEC_PROFILE_DEFAULT

from .exceptions import ConnectFailure, ExecuteFailure
from .policy import Endpoint, PinnedEndpointPolicy

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Rows returned by the check query and the node that served them."""
    rows: List[Any]
    served_by: Optional[Endpoint]

    @property
    def row_count(self) -> int:
        return len(self.rows)


class ClusterManager:
    """Owns one driver ``Cluster`` pinned to a single node."""

    def __init__(self, config, cluster_factory: Callable[..., Any] = Cluster):
        """
        Initialize the cluster manager.

        Args:
            config: Check configuration
            cluster_factory: Callable building the driver cluster, ``Cluster`` by default
        """
        self.config = config
        self.policy = PinnedEndpointPolicy(config.endpoint)
        self._cluster_factory = cluster_factory
        self._cluster = None
        self._session = None

    def get_cluster_options(self) -> dict:
        """Keyword arguments for the driver's ``Cluster``."""
        options = {
            "contact_points": [self.config.host],
            "port": self.config.port,
            "execution_profiles": {
                EXEC_PROFILE_DEFAULT: ExecutionProfile(load_balancing_policy=self.policy)
            },
        }
        # Both halves or nothing; a lone username or password is ignored.
        if self.config.auth_enabled:
            options["auth_provider"] = PlainTextAuthProvider(
                username=self.config.username,
                password=self.config.password
            )
        return options

    async def connect(self) -> None:
        """
        Open the control connection and a session against the pinned node.

        Raises:
            ConnectFailure: If the driver cannot connect for any reason
        """
        loop = asyncio.get_running_loop()
        try:
            self._cluster = self._cluster_factory(**self.get_cluster_options())
            self._session = await loop.run_in_executor(
                None, self._cluster.connect, self.config.keyspace
            )
        except Exception as e:
            logger.error(f"Failed to connect to {self.config.endpoint}: {e}")
            raise ConnectFailure(str(e) or type(e).__name__) from e
        logger.info(f"Connected to {self.get_connection_info()}")

    async def execute(self, query: str) -> QueryResult:
        """
        Run ``query`` through the pinned policy.

        Raises:
            ExecuteFailure: If there is no session or the query fails
        """
        if self._session is None:
            raise ExecuteFailure("No session; connect() has not succeeded")

        loop = asyncio.get_running_loop()
        try:
            result_set = await loop.run_in_executor(None, self._session.execute, query)
            rows = list(result_set)
        except Exception as e:
            logger.error(f"Error executing check query: {e}")
            raise ExecuteFailure(str(e) or type(e).__name__) from e

        coordinator = getattr(result_set.response_future, "coordinator_host", None)
        return QueryResult(rows=rows, served_by=Endpoint.from_host(coordinator))

    async def close(self) -> None:
        """Shut the driver down; failures are logged, never raised."""
        if self._cluster is None:
            return
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._cluster.shutdown)
        except Exception as e:
            logger.warning(f"Error shutting down cluster: {e}")
        finally:
            self._cluster = None
            self._session = None

    def get_connection_info(self) -> str:
        """Connection description safe for logging."""
        user_info = self.config.username if self.config.auth_enabled else "no auth"
        return f"{self.config.endpoint}/{self.config.keyspace} (user: {user_info})"
