"""
Icinga/Nagios check of the CQL interface of a single Cassandra node.

Connects to exactly one node, runs one query against ``system.local`` and
prints a single plugin status line with connect and execute timings. The
exit code is the plugin state.
"""

import asyncio
import sys
from typing import List, Optional

from .config import CheckConfig
from .core.report import CheckReport, Status
from .handlers.check import NodeCheckHandler
from .utils.logging import StructuredLogger, configure_logging

logger = StructuredLogger(__name__)


async def run_check(config: CheckConfig, cluster_factory=None) -> CheckReport:
    """Run one check cycle for ``config``."""
    logger.debug("Starting check", **config.to_dict())
    handler = NodeCheckHandler(config, cluster_factory=cluster_factory)
    return await handler.run()


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run the check, print the report and return the exit code."""
    config = CheckConfig.from_args(argv)
    configure_logging(config.log_level.value)

    try:
        config.validate()
    except ValueError as e:
        print(f"{Status.UNKNOWN.name} | connect=NaN; execute=NaN;")
        print(f"config(): {e}")
        return int(Status.UNKNOWN)

    report = asyncio.run(run_check(config))
    print(report.render())
    sys.stdout.flush()
    return report.exit_code
