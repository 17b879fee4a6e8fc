"""
Command line access to the templating service storage.

Usage:
    # Verify the configured store is reachable
    python -m templating_service check

    # Users that belong to both teams
    python -m templating_service users --team merlin --team morgana

    # Templates carrying a tag, against a specific server
    python -m templating_service --connection-string mongodb://localhost:27017/templates templates --tag weather
"""

import argparse
import asyncio
import logging
from typing import Any

from .core.config import settings
from .core.logging_config import configure_logging
from .repositories.factory import create_storage_provider
from .repositories.interfaces import StorageProviderBase
from .schemas.response import StorageResponse


logger = logging.getLogger(__name__)


def _parse_args(
    argv: list[str] | None = None,
) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="templating_service",
        description="Query the templating service user and template store",
    )
    parser.add_argument(
        "--backend",
        choices=["mongodb", "memory"],
        default=settings.storage_backend,
        help="Storage backend (default: %(default)s)",
    )
    parser.add_argument(
        "--connection-string",
        default=settings.mongodb_connection_string,
        help="MongoDB connection string",
    )
    parser.add_argument(
        "--namespace",
        default=settings.mongodb_namespace,
        help="Collection name suffix",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Log level (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("check", help="Connect and report success or failure")

    users = subparsers.add_parser("users", help="Find users")
    users.add_argument("--id", dest="id")
    users.add_argument("--auth-id", dest="authId")
    users.add_argument("--issuer")
    users.add_argument("--team", action="append", help="Repeat to require several teams")
    users.add_argument("--org", action="append", help="Repeat to require several orgs")

    templates = subparsers.add_parser("templates", help="Find templates")
    templates.add_argument("--id", dest="id")
    templates.add_argument("--name")
    templates.add_argument("--owner")
    templates.add_argument("--tag", dest="tags", action="append", help="Repeat to require several tags")

    return parser.parse_args(argv)


def _query_from_args(
    args: argparse.Namespace,
    fields: tuple[str, ...],
) -> dict[str, Any]:
    """Collect the filter fields given on the command line."""
    return {
        field: getattr(args, field)
        for field in fields
        if getattr(args, field) is not None
    }


async def _run_command(
    provider: StorageProviderBase,
    args: argparse.Namespace,
) -> StorageResponse[Any]:
    if args.command == "users":
        query = _query_from_args(args, ("id", "authId", "issuer", "team", "org"))
        return await provider.get_users(query)
    if args.command == "templates":
        query = _query_from_args(args, ("id", "name", "owner", "tags"))
        return await provider.get_templates(query)
    return StorageResponse.ok(True)


async def run(
    args: argparse.Namespace,
) -> int:
    """Connect, run the requested command and print the response as JSON."""
    provider = create_storage_provider(
        backend=args.backend,
        connection_string=args.connection_string,
        namespace=args.namespace,
    )

    response = await provider.connect()
    try:
        if response.success:
            response = await _run_command(provider, args)
    finally:
        await provider.close()

    print(response.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    if not response.success:
        logger.error(f"{args.command} failed: {response.error_message}")
        return 1
    return 0


def main(
    argv: list[str] | None = None,
) -> int:
    """Main entry point for the command line."""
    args = _parse_args(argv)
    configure_logging(args.log_level)
    return asyncio.run(run(args))
