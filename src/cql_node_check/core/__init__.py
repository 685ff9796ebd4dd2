"""Core components for the Cassandra node check."""

from .exceptions import (
    CheckError, TargetNotFound, ConnectFailure, ExecuteFailure,
    WrongHostServed, UnexpectedRowCount
)
from .policy import Endpoint, DiscoveredHosts, PlanState, QueryPlan, PinnedEndpointPolicy
from .report import Status, PhaseTimer, ErrorLog, CheckReport
from .session import ClusterManager, QueryResult

__all__ = [
    'CheckError', 'TargetNotFound', 'ConnectFailure', 'ExecuteFailure',
    'WrongHostServed', 'UnexpectedRowCount',
    'Endpoint', 'DiscoveredHosts', 'PlanState', 'QueryPlan', 'PinnedEndpointPolicy',
    'Status', 'PhaseTimer', 'ErrorLog', 'CheckReport',
    'ClusterManager', 'QueryResult'
]
