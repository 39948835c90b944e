"""Maintenance commands for the configured database."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from farm_ledger.core.logging_config import configure_logging
from farm_ledger.core.settings import settings
from farm_ledger.core.tokens import create_access_token
from farm_ledger.db.session import SessionLocal, create_tables
from farm_ledger.repositories.credential_store import CredentialStore


def init_db() -> int:
    """Create missing tables and seed the default accounts if none exist."""
    create_tables()
    with SessionLocal() as db:
        seeded = CredentialStore(db).seed_default_users()
    print(f"[manage] tables ready at {settings.database_url}; seeded={seeded}")
    return 0


def reset(confirmed: bool) -> int:
    """Wipe every table and reseed the default accounts."""
    if not confirmed:
        print("[manage] refusing to reset without --yes", file=sys.stderr)
        return 2
    with SessionLocal() as db:
        CredentialStore(db).reset_all()
    print("[manage] database reset; default accounts restored")
    return 0


def issue_token(username: str) -> int:
    """Print a bearer token for an existing user."""
    with SessionLocal() as db:
        user = CredentialStore(db).find_by_username(username)
        if user is None:
            print(f"[manage] unknown user {username!r}", file=sys.stderr)
            return 1
        print(create_access_token(user.id, user.username, user.role))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the Farm Ledger database")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create tables and seed default accounts")

    reset_parser = commands.add_parser("reset", help="Delete all data and reseed default accounts")
    reset_parser.add_argument("--yes", action="store_true", help="Confirm the destructive reset")

    token_parser = commands.add_parser("issue-token", help="Print a bearer token for a user")
    token_parser.add_argument("username")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    try:
        if args.command == "init-db":
            return init_db()
        if args.command == "reset":
            return reset(args.yes)
        return issue_token(args.username)
    except SQLAlchemyError as exc:
        print(f"[manage] ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
