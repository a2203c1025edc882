"""Run one CRM exercise against the configured database.

    python scripts/run_exercise.py init-db
    python scripts/run_exercise.py find-or-create "Acme"
    python scripts/run_exercise.py link-contacts contacts.json
    python scripts/run_exercise.py create-opportunities "Acme" "Renewal" "Upsell"
    python scripts/run_exercise.py insert-delete "Temp A" "Temp B"

Each command runs in its own session: it commits when it finishes and rolls
back if anything fails. Results are printed as JSON.

contacts.json holds either a list of contacts or {"contacts": [...]}, each
with last_name and optional first_name / email.

LOG_LEVEL controls verbosity (default: INFO).
"""
import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

# Resolve project root so imports work when run from any cwd
_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_ROOT))

from pydantic import ValidationError

from db.connection import create_schema, dispose_engine, get_db
from db.repositories import accounts as accounts_repo
from db.repositories import contacts as contacts_repo
from db.repositories import opportunities as opps_repo
from schemas import AccountOut, ContactBatchIn, ContactIn, ContactOut, OpportunityOut

logger = logging.getLogger(__name__)


def load_contacts(path: Path) -> list[ContactIn]:
    """Read and validate a contacts JSON file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"contacts": data}
    return ContactBatchIn.model_validate(data).contacts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CRM record exercises")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create tables from the ORM models")

    p = sub.add_parser("find-or-create", help="Find an account by name or create it")
    p.add_argument("name")

    p = sub.add_parser("link-contacts", help="Link contacts to accounts by last name")
    p.add_argument("file", type=Path)

    p = sub.add_parser("create-opportunities", help="Create missing opportunities on an account")
    p.add_argument("account")
    p.add_argument("names", nargs="+")

    p = sub.add_parser("insert-delete", help="Insert accounts, then delete them")
    p.add_argument("names", nargs="+")

    return parser


async def run(args: argparse.Namespace, contacts: Optional[list[ContactIn]] = None) -> Any:
    """Execute one parsed command and return a JSON-serializable result."""
    if args.command == "init-db":
        await create_schema()
        return {"status": "ok"}

    async with get_db() as session:
        if args.command == "find-or-create":
            account = await accounts_repo.find_or_create(session, args.name)
            return AccountOut.model_validate(account).model_dump(mode="json")

        if args.command == "link-contacts":
            records = [c.to_model() for c in contacts or []]
            await contacts_repo.link_to_accounts(session, records)
            return [ContactOut.model_validate(c).model_dump(mode="json") for c in records]

        if args.command == "create-opportunities":
            await opps_repo.create_missing(session, args.account, args.names)
            account = await accounts_repo.get_by_name(session, args.account)
            opps = await opps_repo.get_by_account(session, account.id)
            return [OpportunityOut.model_validate(o).model_dump(mode="json") for o in opps]

        if args.command == "insert-delete":
            removed = await accounts_repo.insert_then_delete(session, args.names)
            return {"removed": removed}

    raise ValueError(f"Unknown command: {args.command}")


async def _main(args: argparse.Namespace, contacts: Optional[list[ContactIn]]) -> Any:
    try:
        return await run(args, contacts)
    finally:
        await dispose_engine()


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(levelname)s %(message)s",
    )
    args = build_parser().parse_args(argv)

    contacts = None
    if args.command == "link-contacts":
        try:
            contacts = load_contacts(args.file)
        except ValidationError as exc:
            logger.error("Invalid contacts in %s:\n%s", args.file, exc)
            return 1

    result = asyncio.run(_main(args, contacts))
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
