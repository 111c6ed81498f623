"""
ulidia CLI

Command-line interface for generating, inspecting and storing identifiers.

Usage:
    ulidia generate --count 5
    ulidia generate --at 1609459200000
    ulidia decode 01ETXKWW000000000000000000 --json
    ulidia validate 01ETXKWW000000000000000000
    ulidia compare <a> <b>
    ulidia store insert --payload "hello"
    ulidia store list --since-ms 1609459200000
"""

import json
import uuid
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ulidia.core.codec import decode, is_valid
from ulidia.core.comparator import compare as compare_ids
from ulidia.core.generator import generate as generate_id
from ulidia.core.generator import generate_at
from ulidia.core.models import Identifier
from ulidia.kernel.errors import UlidError
from ulidia.kernel.logging import configure_logging
from ulidia.kernel.settings import UlidSettings
from ulidia.storage.sqlite import SQLiteUlidStore

settings = UlidSettings.from_env()

# Logs go to stderr so identifiers on stdout stay pipeable
configure_logging(json_output=settings.json_logs, log_level=settings.log_level)

app = typer.Typer(
    name="ulidia",
    help="ulidia - sortable 128-bit identifiers",
    add_completion=False,
)

store_app = typer.Typer(help="Identifier-keyed record store commands")
app.add_typer(store_app, name="store")


def parse_id(text: str) -> Identifier:
    """Decode an identifier argument, exiting with the violated rule on failure"""
    try:
        return decode(text)
    except UlidError as e:
        typer.echo(f"Error: {type(e).__name__}: {e}", err=True)
        raise typer.Exit(1)


def open_store(db: Optional[Path]) -> SQLiteUlidStore:
    """Open the record store, exiting with an error if the database is unusable"""
    try:
        return SQLiteUlidStore(db or settings.db_path)
    except UlidError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def describe(identifier: Identifier) -> dict[str, object]:
    try:
        created_at = identifier.created_at.isoformat()
    except OverflowError:
        created_at = None
    return {
        "ulid": str(identifier),
        "timestamp_ms": identifier.timestamp,
        "created_at": created_at,
        "randomness": identifier.randomness.hex(),
        "uuid": str(identifier.to_uuid()),
    }


@app.command()
def generate(
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Number of identifiers"),
    ] = 1,
    at: Annotated[
        Optional[int],
        typer.Option("--at", help="Fixed timestamp, ms since epoch"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Generate new identifiers"""
    try:
        ids = [generate_id() if at is None else generate_at(at) for _ in range(count)]
    except UlidError as e:
        typer.echo(f"Error: {type(e).__name__}: {e}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps([describe(i) for i in ids], indent=2))
        return
    for identifier in ids:
        typer.echo(str(identifier))


@app.command("decode")
def decode_cmd(
    ulid: Annotated[str, typer.Argument(help="Identifier to decode")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show the fields of an identifier"""
    info = describe(parse_id(ulid))

    if json_output:
        typer.echo(json.dumps(info, indent=2))
        return

    typer.echo(f"ULID: {info['ulid']}")
    typer.echo(f"  Timestamp: {info['timestamp_ms']} ms")
    if info["created_at"]:
        typer.echo(f"  Created: {info['created_at']}")
    typer.echo(f"  Randomness: {info['randomness']}")
    typer.echo(f"  UUID: {info['uuid']}")


@app.command()
def validate(
    ulid: Annotated[str, typer.Argument(help="Text to check")],
) -> None:
    """Check whether text is a valid identifier (exit code 1 if not)"""
    if is_valid(ulid):
        typer.echo("valid")
        return
    typer.echo("invalid")
    raise typer.Exit(1)


@app.command()
def timestamp(
    ulid: Annotated[str, typer.Argument(help="Identifier")],
) -> None:
    """Print the embedded timestamp in ms since epoch"""
    typer.echo(str(parse_id(ulid).timestamp))


@app.command()
def compare(
    a: Annotated[str, typer.Argument(help="First identifier")],
    b: Annotated[str, typer.Argument(help="Second identifier")],
) -> None:
    """Print -1, 0 or 1 as a is before, equal to or after b"""
    typer.echo(str(compare_ids(parse_id(a), parse_id(b))))


@app.command("to-uuid")
def to_uuid(
    ulid: Annotated[str, typer.Argument(help="Identifier")],
) -> None:
    """Print the identifier's 16 bytes as a UUID"""
    typer.echo(str(parse_id(ulid).to_uuid()))


@app.command("from-uuid")
def from_uuid(
    value: Annotated[str, typer.Argument(help="UUID string")],
) -> None:
    """Print the canonical identifier for a UUID's 16 bytes"""
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        typer.echo(f"Error: not a UUID: {value}", err=True)
        raise typer.Exit(1)
    typer.echo(str(Identifier.from_uuid(parsed)))


# Store commands


@store_app.command("insert")
def store_insert(
    payload: Annotated[str, typer.Option("--payload", help="Record payload")],
    ulid: Annotated[
        Optional[str],
        typer.Option("--id", help="Explicit identifier (generated if omitted)"),
    ] = None,
    db: Annotated[
        Optional[Path],
        typer.Option("--db", help="Database path"),
    ] = None,
) -> None:
    """Insert a record"""
    store = open_store(db)
    identifier = parse_id(ulid) if ulid else None
    try:
        identifier = store.insert(payload, identifier)
    except UlidError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(str(identifier))


@store_app.command("get")
def store_get(
    ulid: Annotated[str, typer.Argument(help="Identifier")],
    db: Annotated[
        Optional[Path],
        typer.Option("--db", help="Database path"),
    ] = None,
) -> None:
    """Show a record's payload"""
    store = open_store(db)
    payload = store.get(parse_id(ulid))
    if payload is None:
        typer.echo(f"Error: Record not found: {ulid}", err=True)
        raise typer.Exit(1)
    typer.echo(payload)


@store_app.command("list")
def store_list(
    since_ms: Annotated[
        Optional[int],
        typer.Option("--since-ms", help="Inclusive lower time bound"),
    ] = None,
    until_ms: Annotated[
        Optional[int],
        typer.Option("--until-ms", help="Inclusive upper time bound"),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", min=1, help="Maximum records"),
    ] = None,
    db: Annotated[
        Optional[Path],
        typer.Option("--db", help="Database path"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List records in identifier (creation) order"""
    store = open_store(db)
    try:
        records = store.scan(since_ms=since_ms, until_ms=until_ms, limit=limit)
    except UlidError as e:
        typer.echo(f"Error: {type(e).__name__}: {e}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(
            json.dumps([{"ulid": str(i), "payload": p} for i, p in records], indent=2)
        )
        return

    typer.echo(f"Records ({len(records)}):")
    for identifier, payload in records:
        typer.echo(f"  {identifier}: {payload}")


def main() -> None:
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
