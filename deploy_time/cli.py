"""
Find when a Solana program was first deployed.

Usage:
    solana-deploy-time get-timestamp <programId>       # Deployment info
    solana-deploy-time get-timestamp <programId> -v    # With RPC/scan details
    solana-deploy-time cache-stats                     # Cached records
    solana-deploy-time clear-cache                     # Drop cached records
    solana-deploy-time --log-file get-timestamp <id>   # Also trace to logs/

Requires MAIN_RPC_URL (optionally BACKUP_RPC_URLS, BACKUP_RPC_NAMES,
FALLBACK_RPC_URL) in the environment or a .env file.
"""

import argparse
import asyncio
import sys
from datetime import datetime

from loguru import logger

from deploy_time import __version__
from deploy_time.container import container
from deploy_time.errors import DeployTimeError
from deploy_time.models import CacheStats, DeploymentInfo, NativeProgram
from settings.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solana-deploy-time",
        description="CLI tool to get the first deployment timestamp of a Solana program",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a DEBUG trace to a daily rotating file under logs/",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    get_timestamp = commands.add_parser(
        "get-timestamp",
        help="Get the timestamp of when a Solana program was first deployed",
    )
    get_timestamp.add_argument("program_id", metavar="programId", help="The program ID to check")
    get_timestamp.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    commands.add_parser("clear-cache", help="Remove all cached deployment records")
    commands.add_parser("cache-stats", help="Show cached deployment record counts")
    return parser


def print_deployment(program_id: str, result: DeploymentInfo | NativeProgram) -> None:
    if isinstance(result, NativeProgram):
        print(f"\n{program_id}")
        print("This is a Solana Native Program - it was part of the runtime, not deployed.")
        return

    print("\nProgram Deployment Information:")
    print("--------------------------------")
    print(f"Program ID: {program_id}")
    if result.program_data_account:
        print(f"Program Data Account: {result.program_data_account}")
    print(f"Deployment Transaction: {result.signature}")
    print(f"Deployment Slot: {result.slot}")

    if result.has_timestamp:
        deployed_at = datetime.fromtimestamp(result.timestamp)
        print(f"Deployment Date: {deployed_at:%Y-%m-%d %H:%M:%S}")
        print(f"Unix Timestamp: {result.timestamp}")
    else:
        print("Note: This appears to be a very old deployment (pre-timestamp era)")


def print_stats(stats: CacheStats) -> None:
    print("\nCache Statistics:")
    print("-----------------")
    print(f"Total entries: {stats.total}")
    print(f"Valid entries: {stats.valid}")
    print(f"Expired entries: {stats.expired}")


async def get_timestamp(program_id: str) -> DeploymentInfo | NativeProgram:
    async with container.detector as detector:
        return await detector.detect(program_id)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    verbose = getattr(args, "verbose", False)
    setup_logging(level="DEBUG" if verbose else "WARNING", to_file=args.log_file)

    try:
        if args.command == "get-timestamp":
            container.init()
            logger.debug("Initializing deployment search for {}", args.program_id)
            result = asyncio.run(get_timestamp(args.program_id))
            print_deployment(args.program_id, result)
        elif args.command == "clear-cache":
            container.init(with_endpoints=False)
            container.cache.clear()
            print("Cache cleared")
        elif args.command == "cache-stats":
            container.init(with_endpoints=False)
            print_stats(container.cache.stats())
    except DeployTimeError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if verbose:
            logger.opt(exception=e).debug("Full error details")
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if verbose:
            logger.opt(exception=e).debug("Full error details")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
