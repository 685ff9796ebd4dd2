"""
Load-balancing policy that pins every query to a single Cassandra node.

The driver normally spreads requests across every healthy member it has
discovered. A check of one node must never be answered by a sibling, so this
policy only ever offers the configured endpoint and refuses to route at all
when that endpoint has not been discovered.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from cassandra.policies import HostDistance

from .exceptions import TargetNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    """Address and native-protocol port of one cluster member."""
    address: str
    port: int = 9042

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"

    def __bool__(self) -> bool:
        return bool(self.address)

    @classmethod
    def from_host(cls, host: Any) -> Optional['Endpoint']:
        """Build an endpoint from a driver ``Host``; None if it has no endpoint."""
        if host is None:
            return None
        endpoint = getattr(host, 'endpoint', None)
        if endpoint is None:
            return None
        return cls(address=str(endpoint.address), port=int(endpoint.port))


class DiscoveredHosts:
    """
    Read-only view over the driver's cluster topology.

    Wraps the driver's ``Metadata`` (anything with ``all_hosts()``) without
    copying it, so lookups always see the current membership.
    """

    def __init__(self, source: Any):
        self._source = source

    def lookup(self, endpoint: Endpoint) -> Optional[Any]:
        """Return the host object registered for ``endpoint``, if any."""
        for host in self._hosts():
            if Endpoint.from_host(host) == endpoint:
                return host
        return None

    def __contains__(self, endpoint: Endpoint) -> bool:
        return self.lookup(endpoint) is not None

    def __len__(self) -> int:
        return len(list(self._hosts()))

    def _hosts(self) -> Iterable[Any]:
        return self._source.all_hosts()


class PlanState(Enum):
    """Lifecycle of a single query plan."""
    NOT_YET_YIELDED = "not_yet_yielded"
    EXHAUSTED = "exhausted"


class QueryPlan:
    """Single-use plan that yields one host once and is then exhausted."""

    def __init__(self, host: Any):
        self._host = host
        self.state = PlanState.NOT_YET_YIELDED

    def __iter__(self) -> 'QueryPlan':
        return self

    def __next__(self) -> Any:
        if self.state is PlanState.EXHAUSTED:
            raise StopIteration
        self.state = PlanState.EXHAUSTED
        return self._host


class PinnedEndpointPolicy:
    """
    Node-selection policy that only ever routes to ``endpoint``.

    Implements the hooks ``cassandra-driver`` calls on a load-balancing
    policy (``populate``, ``distance``, ``make_query_plan`` and the host
    state callbacks) without inheriting from the driver's base class.
    """

    def __init__(self, endpoint: Endpoint):
        """
        Initialize the policy.

        Args:
            endpoint: The one node every query must land on

        Raises:
            ValueError: If the endpoint is empty
        """
        if not endpoint:
            raise ValueError("A target endpoint is required")
        self.endpoint = endpoint
        self._hosts: Optional[DiscoveredHosts] = None

    def bind(self, hosts: DiscoveredHosts) -> None:
        """Retain the driver's topology view for later lookups."""
        self._hosts = hosts

    def populate(self, cluster: Any, hosts: Iterable[Any]) -> None:
        """Called by the driver before the control connection is opened."""
        self.bind(DiscoveredHosts(cluster.metadata))
        logger.debug(f"Policy bound to cluster topology, pinned to {self.endpoint}")

    def make_query_plan(self, working_keyspace: Optional[str] = None, query: Any = None) -> QueryPlan:
        """
        Build a fresh plan for one query attempt.

        Returns:
            QueryPlan yielding only the pinned host

        Raises:
            TargetNotFound: If the pinned endpoint has not been discovered
        """
        host = self._hosts.lookup(self.endpoint) if self._hosts is not None else None
        if host is None:
            raise TargetNotFound(f"Test endpoint {self.endpoint} not found among discovered hosts")
        return QueryPlan(host)

    def distance(self, host: Any) -> int:
        """Only the pinned host is worth a connection pool."""
        if Endpoint.from_host(host) == self.endpoint:
            return HostDistance.LOCAL
        return HostDistance.IGNORED

    def check_supported(self) -> None:
        pass

    # Host state changes are tracked by the driver's metadata, not here.
    def on_up(self, host: Any) -> None:
        pass

    def on_down(self, host: Any) -> None:
        pass

    def on_add(self, host: Any) -> None:
        pass

    def on_remove(self, host: Any) -> None:
        pass
