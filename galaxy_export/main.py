import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from galaxy_export.config import optional_int, settings
from galaxy_export.services.aggregation_service import build_snapshot, render_report, render_systems_table, summarize
from galaxy_export.services.collector_service import collect_systems, require_systems
from galaxy_export.services.file_service import write_snapshot
from galaxy_export.utils.errors import GalaxyExportError
from galaxy_export.utils.logging_config import setup_logging

USAGE = "Usage: galaxy-export -nodes <addr1,addr2,...> [-output galaxy.json]"


def split_addresses(value: str) -> List[str]:
    return [part for part in value.split(",") if part]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="galaxy-export", usage=USAGE[len("Usage: "):])
    parser.add_argument("-nodes", "--nodes", default="",
                        help="Comma-separated list of node addresses (e.g., localhost:8080,localhost:8081)")
    parser.add_argument("-output", "--output", default=settings.OUTPUT_FILE, help="Output file path")
    parser.add_argument("-timeout", "--timeout", type=float, default=settings.FETCH_TIMEOUT,
                        help="Per-node fetch timeout in seconds, 0 to wait forever")
    parser.add_argument("-concurrency", "--concurrency", type=optional_int, default=settings.MAX_CONCURRENCY,
                        help="Maximum number of simultaneous fetches (default: one per node)")
    parser.add_argument("-path", "--path", default=settings.SYSTEM_PATH, help="System info path on each node")
    parser.add_argument("-log-level", "--log-level", default=settings.LOG_LEVEL)
    return parser


async def export(addresses: List[str], output: str, timeout: Optional[float] = None,
                 max_concurrency: Optional[int] = None, path: Optional[str] = None) -> str:
    print(f"Fetching data from {len(addresses)} nodes...")
    result = await collect_systems(addresses, timeout=timeout, max_concurrency=max_concurrency, path=path)
    systems = require_systems(result).systems
    if result.failures:
        logging.info(f"{len(result.failures)} of {result.requested} nodes failed")

    snapshot = build_snapshot(systems)
    target = write_snapshot(snapshot, output)
    print(f"\n✓ Exported {snapshot.node_count} systems to {target}")

    logging.info("\n" + render_systems_table(snapshot.systems) + "\n")
    report = render_report(summarize(snapshot.systems))
    print("\n" + report)
    return report


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    addresses = split_addresses(args.nodes)
    if not addresses:
        print(USAGE)
        return 1

    setup_logging(args.log_level)
    try:
        asyncio.run(export(
            addresses,
            args.output,
            timeout=args.timeout,
            max_concurrency=args.concurrency,
            path=args.path,
        ))
    except GalaxyExportError as e:
        print(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
