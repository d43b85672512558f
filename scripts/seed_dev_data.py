"""Seed dev documents from scripts/seed-data.json into Firestore.

Each entry becomes one record in the "documents" collection, created through
the same repository the app uses. Entries whose (complainantName, subject,
receivedDate) already exist are skipped, so the script can be re-run.

Usage:
    python -m scripts.seed_dev_data [path/to/seed-data.json]

Requires: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH.
"""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from app.core.config import get_settings
from app.domain.exceptions import ValidationException
from app.domain.value_objects.core import DocumentFields
from app.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from app.infrastructure.firebase.repositories import FirestoreDocumentRepository


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees FIREBASE_* when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


def _parse_received_date(raw: str) -> datetime:
    """ISO 8601; naive values are wall time in the display timezone."""
    dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=get_settings().timezone)
    return dt


def _entry_to_fields(entry: dict) -> DocumentFields:
    return DocumentFields(
        complainant_name=entry.get("complainantName", ""),
        subject=entry.get("subject", ""),
        source=entry.get("source", ""),
        received_date=_parse_received_date(entry["receivedDate"]),
        notes=entry.get("notes", ""),
    )


async def run(path: Path) -> None:
    if not path.is_file():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    entries = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(entries, list):
        print("Seed file must contain a JSON array of documents", file=sys.stderr)
        sys.exit(1)

    if not init_firebase() or get_firestore_client() is None:
        print(
            "Firestore is not configured: set FIREBASE_SERVICE_ACCOUNT_KEY or "
            "FIREBASE_SERVICE_ACCOUNT_PATH",
            file=sys.stderr,
        )
        sys.exit(1)

    repo = FirestoreDocumentRepository(get_firestore_client())
    try:
        existing = {
            (d.complainant_name, d.subject, d.received_date) for d in await repo.list()
        }
        for entry in entries:
            try:
                fields = _entry_to_fields(entry)
            except (KeyError, ValueError, ValidationException) as e:
                print(f"  Skip invalid entry {entry!r}: {e}", file=sys.stderr)
                continue
            key = (fields.complainant_name, fields.subject, fields.received_date)
            if key in existing:
                print(f"  {fields.subject} ({fields.complainant_name}) already exists, skip")
                continue
            document_id = await repo.create(fields)
            existing.add(key)
            print(f"  {fields.subject} ({fields.source}) -> {document_id}")
    finally:
        await close_firebase()

    print("Seed completed.")


def main() -> None:
    _load_env()
    get_settings.cache_clear()
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-data.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
