"""recordgate record commands: ``check`` and ``load``.

Both commands read two JSON files:

- DECLARATION: a record type (see `recordgate.domain.declarations`).
- RECORDS: a list of objects, one per record, keyed by field name.

Output
- Per-record validation messages go to **stdout** (or a JSON report with
  ``--json``); summaries and failures go to **stderr**.

Failure modes
- Unreadable/malformed JSON or an invalid declaration → ``ClickException``.
- ``check`` exits with status 1 when any record is invalid.
- ``load --strict`` stops at the first invalid record and exits with status 1.
- Missing ``--db-url`` and ``RECORDGATE_DB_URL`` → ``ClickException`` with guidance.
- A malformed URL, an uninstalled driver or an unreachable database →
  ``ClickException``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from sqlalchemy.exc import ArgumentError, NoSuchModuleError

from recordgate import config
from recordgate.adapters.store.sqlalchemy import SqlAlchemyStore
from recordgate.domain.declarations import record_type_from_dict
from recordgate.domain.errors import DeclarationError, RecordInvalidError
from recordgate.interfaces.store import StoreError, StoreUnavailableError
from recordgate.service_layer.persistence import PersistenceGate

from .helpers import error, sanitize_url, success, warn

if TYPE_CHECKING:
    from recordgate.domain.records import Record, RecordType

logger = logging.getLogger(__name__)

MISSING_DB_URL_MSG = (
    f"{config.DB_URL_ENV_VAR} is not set.\n\n"
    "Pass --db-url or set it before running this command, e.g.:\n"
    f"  export {config.DB_URL_ENV_VAR}='sqlite:///records.db'"
)

INVALID_URL_FORMAT_MSG = "The database URL is not a valid SQLAlchemy database URL."

UNKNOWN_DIALECT_MSG = (
    "The database URL names a dialect or driver that is not installed.\n"
    "Install the driver package or use a 'sqlite:///' URL."
)

CANNOT_CONNECT_MSG = (
    "The database is not reachable.\n"
    "Please ensure the database is running and the URL is correct."
)

EXISTING_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot read {path}: {e}") from e


def _load_record_type(path: Path) -> RecordType:
    try:
        return record_type_from_dict(_read_json(path))
    except DeclarationError as e:
        raise click.ClickException(f"Invalid declaration in {path}: {e}") from e


def _load_rows(path: Path) -> list[dict[str, Any]]:
    rows = _read_json(path)
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise click.ClickException(f"{path} must contain a JSON list of objects.")
    return rows


def _open_store(db_url: str, *, reset: bool) -> SqlAlchemyStore:
    try:
        return SqlAlchemyStore.configure(db_url, reset=reset)
    except NoSuchModuleError as e:
        raise click.ClickException(UNKNOWN_DIALECT_MSG) from e
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    except StoreUnavailableError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e


def _build(record_type: RecordType, row: dict[str, Any]) -> tuple[Record | None, list[str]]:
    """Return the record for `row`, or None plus the reason it cannot be built."""
    try:
        return record_type.new(row), []
    except DeclarationError as e:
        return None, [str(e)]


@click.command()
@click.argument("declaration", type=EXISTING_PATH)
@click.argument("records", type=EXISTING_PATH)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON report to stdout.")
def check(declaration: Path, records: Path, as_json: bool) -> None:
    """Validate RECORDS against the rules in DECLARATION."""
    record_type = _load_record_type(declaration)
    rows = _load_rows(records)
    logger.info("Checking %d %s record(s)", len(rows), record_type.name)

    report = []
    for index, row in enumerate(rows, start=1):
        record, problems = _build(record_type, row)
        if record is not None and not record.is_valid():
            problems = record.error_messages
        report.append({"index": index, "valid": not problems, "errors": problems})

    invalid = [entry for entry in report if not entry["valid"]]
    if as_json:
        click.echo(json.dumps(report, indent=2))
    else:
        for entry in invalid:
            for message in entry["errors"]:
                click.echo(f"record {entry['index']}: {message}")

    if invalid:
        error(f"{len(invalid)} of {len(rows)} record(s) failed validation.")
        raise SystemExit(1)
    success(f"All {len(rows)} record(s) are valid.")


@click.command()
@click.argument("declaration", type=EXISTING_PATH)
@click.argument("records", type=EXISTING_PATH)
@click.option(
    "--db-url",
    "db_url",
    help=f"SQLAlchemy database URL (defaults to ${config.DB_URL_ENV_VAR}).",
    default=None,
)
@click.option("--reset", is_flag=True, help="Drop every existing table first.")
@click.option(
    "--strict",
    is_flag=True,
    help="Stop at the first invalid record instead of skipping it.",
)
def load(
    declaration: Path, records: Path, db_url: str | None, reset: bool, strict: bool
) -> None:
    """Save valid RECORDS into the table for DECLARATION."""
    record_type = _load_record_type(declaration)
    rows = _load_rows(records)
    if db_url is None:
        try:
            db_url = config.get_db_url()
        except config.DatabaseUrlNotSetError as e:
            raise click.ClickException(MISSING_DB_URL_MSG) from e

    store = _open_store(db_url, reset=reset)
    logger.info("Loading %s into %s", record_type.name, sanitize_url(db_url))
    try:
        store.create_table(record_type)
        gate = PersistenceGate(store)
        saved, rejected = _save_all(gate, record_type, rows, strict=strict)
        total = gate.count(record_type)
    except StoreError as e:
        raise click.ClickException(f"Store error: {e}") from e
    finally:
        store.dispose()

    if rejected:
        warn(f"{rejected} record(s) rejected.")
    success(f"Saved {saved} record(s); {record_type.name} now holds {total} row(s).")


def _save_all(
    gate: PersistenceGate,
    record_type: RecordType,
    rows: list[dict[str, Any]],
    *,
    strict: bool,
) -> tuple[int, int]:
    saved = rejected = 0
    for index, row in enumerate(rows, start=1):
        record, problems = _build(record_type, row)
        if record is None:
            problems_text = "; ".join(problems)
            if strict:
                error(f"record {index}: {problems_text}")
                raise SystemExit(1)
            click.echo(f"record {index}: {problems_text}")
            rejected += 1
            continue

        if strict:
            try:
                gate.save_or_raise(record)
            except RecordInvalidError as e:
                error(f"record {index}: {'; '.join(e.result.messages)}")
                raise SystemExit(1) from e
            saved += 1
        elif gate.save(record):
            saved += 1
        else:
            for message in record.error_messages:
                click.echo(f"record {index}: {message}")
            rejected += 1
    return saved, rejected
