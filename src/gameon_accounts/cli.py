"""
Command-line interface for the Game On! account service.

Provides one subcommand per account operation:
- list: List every account
- get: Show one account
- exists: Check whether an account exists
- create: Create an account
- delete: Delete an account

Usage:
    gameon-accounts [--server URL] [--ca-cert PEM] [--token TOKEN] list
    gameon-accounts get dummy.DevUser
    gameon-accounts create --name DevUser --favorite-color blue
    gameon-accounts delete dummy.DevUser

Environment Variables:
    GAMEON_ACCOUNTS_URL: Account service base URL (default: http://localhost:9080)
    GAMEON_CA_CERT: PEM file with the CA the server certificate must chain to
    GAMEON_JWT: Token sent in the gameon-jwt header
    GAMEON_REQUEST_TIMEOUT: Request timeout in seconds (default: 15)
    GAMEON_LOG_LEVEL: Logging level (default: WARNING)

Exit codes:
    0 on success, 1 on a service or transport error, 2 on a configuration
    error (bad CA file, empty URL, non-positive timeout).
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from gameon_accounts.client import AccountServiceClient
from gameon_accounts.config import ENV_LOG_LEVEL, ServiceConfig
from gameon_accounts.errors import AccountServiceError, ConfigError
from gameon_accounts.formatting import format_json, format_table
from gameon_accounts.models import AccountCreateRequest, AccountRecord

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2

DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging(level: str | None) -> None:
    """
    Configure root logging for CLI runs.

    Resolution order: --log-level, then GAMEON_LOG_LEVEL, then WARNING.
    """
    name = (level or os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()
    numeric_level = getattr(logging, name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_records(records: AccountRecord | list[AccountRecord], output: str) -> None:
    if output == "table":
        print(format_table(records if isinstance(records, list) else [records]))
    else:
        print(format_json(records))


# ============================================================================
# COMMANDS
# ============================================================================


def cmd_list(client: AccountServiceClient, args: argparse.Namespace) -> int:
    """List every account. Returns 0 on success."""
    accounts = client.list_accounts()
    _print_records(accounts, args.output)
    return EXIT_OK


def cmd_get(client: AccountServiceClient, args: argparse.Namespace) -> int:
    """Show one account. Returns 0 on success."""
    account = client.get_account(args.account_id)
    _print_records(account, args.output)
    return EXIT_OK


def cmd_exists(client: AccountServiceClient, args: argparse.Namespace) -> int:
    """
    Print whether an account exists.

    The exit code is 0 either way; a missing account is an answer, not an
    error.
    """
    print("true" if client.account_exists(args.account_id) else "false")
    return EXIT_OK


def cmd_create(client: AccountServiceClient, args: argparse.Namespace) -> int:
    """Create an account and print the stored record."""
    request = AccountCreateRequest(
        id=args.account_id,
        revision=args.revision,
        name=args.name,
        favorite_color=args.favorite_color,
    )
    account = client.create_account(request)
    _print_records(account, args.output)
    return EXIT_OK


def cmd_delete(client: AccountServiceClient, args: argparse.Namespace) -> int:
    """Delete an account and print whether it existed."""
    print("true" if client.delete_account(args.account_id) else "false")
    return EXIT_OK


# ============================================================================
# ARGUMENT PARSING
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the gameon-accounts argument parser."""
    parser = argparse.ArgumentParser(
        prog="gameon-accounts",
        description="Manage player accounts on a Game On! account service",
    )
    ServiceConfig.add_arguments(parser)
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL}, or {ENV_LOG_LEVEL} env var)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    output_parent = argparse.ArgumentParser(add_help=False)
    output_parent.add_argument(
        "--output",
        "-o",
        choices=("json", "table"),
        default="json",
        help="Output format (default: json)",
    )

    list_parser = subparsers.add_parser(
        "list", help="List all accounts", parents=[output_parent]
    )
    list_parser.set_defaults(func=cmd_list)

    get_parser = subparsers.add_parser("get", help="Show one account", parents=[output_parent])
    get_parser.add_argument("account_id", help="Account id (_id)")
    get_parser.set_defaults(func=cmd_get)

    exists_parser = subparsers.add_parser("exists", help="Check whether an account exists")
    exists_parser.add_argument("account_id", help="Account id (_id)")
    exists_parser.set_defaults(func=cmd_exists)

    create_parser = subparsers.add_parser(
        "create", help="Create an account", parents=[output_parent]
    )
    create_parser.add_argument("--name", required=True, help="Display name")
    create_parser.add_argument(
        "--favorite-color", dest="favorite_color", default="", help="Favorite color"
    )
    create_parser.add_argument(
        "--id", dest="account_id", default="", help="Account id (normally server-assigned)"
    )
    create_parser.add_argument(
        "--rev", dest="revision", default="", help="Revision token, when already known"
    )
    create_parser.set_defaults(func=cmd_create)

    delete_parser = subparsers.add_parser("delete", help="Delete an account")
    delete_parser.add_argument("account_id", help="Account id (_id)")
    delete_parser.set_defaults(func=cmd_delete)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    configure_logging(args.log_level)

    try:
        config = ServiceConfig.from_namespace(args)
        client = AccountServiceClient(config)
    except (ConfigError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    with client:
        try:
            return int(args.func(client, args))
        except AccountServiceError as e:
            logger.debug("Command %s failed", args.command, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
