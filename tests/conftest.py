"""
Pytest configuration and fixtures for the Cassandra node check tests.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import pytest
from cassandra.cluster import EXEC_PROFILE_DEFAULT

from cql_node_check.config import CheckConfig


def make_host(address, port=9042):
    """A stand-in for ``cassandra.pool.Host`` with just an endpoint."""
    return SimpleNamespace(endpoint=SimpleNamespace(address=address, port=port))


class FakeMetadata:
    """Driver metadata double; the host list can change after binding."""

    def __init__(self, hosts=None):
        self.hosts = list(hosts or [])

    def all_hosts(self):
        return list(self.hosts)


class FakeResultSet:
    """Iterable rows plus the response future the driver attaches."""

    def __init__(self, rows, coordinator_host):
        self._rows = list(rows)
        self.response_future = SimpleNamespace(coordinator_host=coordinator_host)

    def __iter__(self):
        return iter(self._rows)


class FakeSession:
    """Routes every query through the installed load-balancing policy."""

    def __init__(self, cluster):
        self.cluster = cluster
        self.executed = []

    def execute(self, query):
        self.executed.append(query)
        plan = self.cluster.policy.make_query_plan(self.cluster.keyspace, query)
        host = next(iter(plan), None)
        if host is None:
            raise RuntimeError("NoHostAvailable: query plan exhausted")
        self.cluster.plans.append(plan)
        if self.cluster.execute_error is not None:
            raise self.cluster.execute_error
        served_by = self.cluster.served_by or host
        return FakeResultSet(self.cluster.rows, served_by)


class FakeCluster:
    """
    Minimal stand-in for ``cassandra.cluster.Cluster``.

    Mirrors the order the driver uses: populate the policy with the
    topology, pick the control connection host from a query plan, then
    hand out a session.
    """

    def __init__(self, topology, rows=None, served_by=None, connect_error=None,
                 execute_error=None, **options):
        self.options = options
        self.metadata = FakeMetadata(topology)
        self.rows = [("host-id",)] if rows is None else rows
        self.served_by = served_by
        self.connect_error = connect_error
        self.execute_error = execute_error
        self.policy = options["execution_profiles"][EXEC_PROFILE_DEFAULT].load_balancing_policy
        self.keyspace = None
        self.plans = []
        self.session = None
        self.shutdown_called = False

    def connect(self, keyspace=None):
        self.keyspace = keyspace
        self.policy.populate(self, self.metadata.all_hosts())
        if self.connect_error is not None:
            raise self.connect_error
        next(iter(self.policy.make_query_plan()))
        self.session = FakeSession(self)
        return self.session

    def shutdown(self):
        self.shutdown_called = True


class FakeClusterFactory:
    """Builds ``FakeCluster`` instances and remembers each one."""

    def __init__(self, topology, **behaviour):
        self.topology = topology
        self.behaviour = behaviour
        self.clusters = []

    def __call__(self, **options):
        cluster = FakeCluster(self.topology, **self.behaviour, **options)
        self.clusters.append(cluster)
        return cluster


@pytest.fixture
def target_host():
    return make_host("10.0.0.5", 9042)


@pytest.fixture
def sibling_host():
    return make_host("10.0.0.6", 9042)


@pytest.fixture
def check_config():
    """Configuration for the node under test."""
    return CheckConfig(host="10.0.0.5", port=9042)


@pytest.fixture
def topology(target_host, sibling_host):
    return [sibling_host, target_host, make_host("10.0.0.7", 9042)]


@pytest.fixture
def host_factory():
    return make_host


@pytest.fixture
def metadata_factory():
    return FakeMetadata


@pytest.fixture
def cluster_factory(topology):
    """Factory whose clusters discover ``topology`` and answer from the target."""
    def build(hosts=None, **behaviour):
        return FakeClusterFactory(topology if hosts is None else hosts, **behaviour)
    return build
