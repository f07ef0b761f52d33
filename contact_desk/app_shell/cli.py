import argparse
import logging
import sys
from pathlib import Path

from contact_desk.adapters.auth.crypto import JWTAuthAdapter
from contact_desk.adapters.clock import SystemClock
from contact_desk.adapters.kv.sqlite_store import SQLiteKeyValueStore
from contact_desk.adapters.sqlite.migrator import SQLiteMigrator
from contact_desk.adapters.sqlite.repos import SQLiteUserRepo
from contact_desk.api.deps import Settings
from contact_desk.components.auth import SignupInput, run_signup
from contact_desk.components.entries import EntryService
from contact_desk.components.filters import (
    EntryFilter,
    apply_filters,
    export_csv,
    export_filename,
    parse_date_bound,
)
from contact_desk.domain.errors import StoreError
from contact_desk.domain.policy import PolicyEngine
from contact_desk.rules.loader import load_rules
from contact_desk.rules.models import Rules

logger = logging.getLogger("cli")


def get_rules(settings: Settings) -> Rules:
    if not Path(settings.rules_path).exists():
        logger.error("Rules file %s not found.", settings.rules_path)
        sys.exit(1)
    return load_rules(Path(settings.rules_path))


def handle_serve(settings: Settings, args: argparse.Namespace) -> None:
    import uvicorn

    print(f"Starting Contact Desk API at http://{args.host}:{args.port}")
    print(f"Database: {settings.db_path}")
    uvicorn.run(
        "contact_desk.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    applied = SQLiteMigrator(settings.db_path).run_migrations()
    print(f"Applied {len(applied)} migration(s) to {settings.db_path}.")


def handle_create_user(settings: Settings, args: argparse.Namespace) -> None:
    rules = get_rules(settings)
    SQLiteMigrator(settings.db_path).run_migrations()

    result = run_signup(
        SignupInput(email=args.email, password=args.password, name=args.name, role=args.role),
        SQLiteUserRepo(settings.db_path),
        JWTAuthAdapter(secret_key=settings.secret_key),
        SystemClock(),
        rules.auth,
    )
    if not result.success or result.user is None:
        logger.error("Could not create user: %s", result.error)
        sys.exit(1)

    print(f"Created user {result.user.email} with role '{result.user.role}'.")


def handle_export(settings: Settings, args: argparse.Namespace) -> None:
    """Write every entry (optionally filtered) as CSV. Reads the database directly."""
    rules = get_rules(settings)
    clock = SystemClock()
    service = EntryService(
        store=SQLiteKeyValueStore(settings.db_path),
        policy=PolicyEngine(rules),
        time=clock,
        rules=rules.entries,
    )

    try:
        flt = EntryFilter(
            term=args.search or "",
            date_from=parse_date_bound(args.date_from),
            date_to=parse_date_bound(args.date_to),
        )
    except ValueError as e:
        logger.error("Invalid date bound: %s", e)
        sys.exit(1)

    try:
        entries = apply_filters(service.list_all(), flt)
    except StoreError as e:
        logger.error("Could not read entries: %s", e)
        sys.exit(1)

    csv_text = export_csv(entries, rules.export)
    if args.output == "-":
        print(csv_text)
        return

    output = Path(args.output or export_filename(clock.today(), rules.export.filename_prefix))
    output.write_text(csv_text, encoding="utf-8")
    print(f"Exported {len(entries)} entries to {output}")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Contact Desk CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on changes")

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # create-user
    user_parser = subparsers.add_parser("create-user", help="Provision a user with a role")
    user_parser.add_argument("email", help="Login email")
    user_parser.add_argument("--password", required=True, help="Initial password")
    user_parser.add_argument("--name", help="Display name (defaults to the email local part)")
    user_parser.add_argument("--role", default="user", help="Role to assign (user, super_admin)")

    # export
    export_parser = subparsers.add_parser("export", help="Export entries as CSV")
    export_parser.add_argument(
        "--output", "-o", help="Output file ('-' for stdout; default user-entries-<date>.csv)"
    )
    export_parser.add_argument("--search", help="Text filter on name, mobile and address")
    export_parser.add_argument("--from", dest="date_from", help="First date added (YYYY-MM-DD)")
    export_parser.add_argument("--to", dest="date_to", help="Last date added (YYYY-MM-DD)")

    args = parser.parse_args(argv)
    settings = Settings()

    if args.command == "serve":
        handle_serve(settings, args)
    elif args.command == "migrate":
        handle_migrate(settings, args)
    elif args.command == "create-user":
        handle_create_user(settings, args)
    elif args.command == "export":
        handle_export(settings, args)


if __name__ == "__main__":
    main()
