"""
CLI integration tests

Uses Typer's CliRunner for isolated command testing.

Fun fact: Crockford Base32 is friendly to command lines - no characters in
the alphabet need quoting in any common shell!
"""

import json
import uuid

import pytest
from typer.testing import CliRunner

from tests.helpers import NEW_YEAR_2021_MS, NEW_YEAR_2021_PREFIX
from ulidia.cli.main import app
from ulidia.core.codec import decode, is_valid

NEW_YEAR_ID = NEW_YEAR_2021_PREFIX + "0" * 16


@pytest.fixture
def runner():
    """Typer CLI test runner"""
    return CliRunner()


# =============================================================================
# Generation
# =============================================================================


def test_generate_prints_one_identifier(runner):
    result = runner.invoke(app, ["generate"])
    assert result.exit_code == 0
    assert is_valid(result.stdout.strip())


def test_generate_count(runner):
    result = runner.invoke(app, ["generate", "--count", "5"])
    assert result.exit_code == 0
    lines = result.stdout.split()
    assert len(lines) == 5
    assert len(set(lines)) == 5


def test_generate_at_fixed_timestamp(runner):
    result = runner.invoke(app, ["generate", "--at", str(NEW_YEAR_2021_MS)])
    assert result.exit_code == 0
    assert result.stdout.startswith(NEW_YEAR_2021_PREFIX)


def test_generate_at_overflow_fails(runner):
    result = runner.invoke(app, ["generate", "--at", str(1 << 48)])
    assert result.exit_code == 1
    assert "TimestampOverflow" in result.output


def test_generate_json(runner):
    result = runner.invoke(app, ["generate", "--at", "1000000000000", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data[0]["timestamp_ms"] == 1_000_000_000_000
    assert data[0]["created_at"] == "2001-09-09T01:46:40+00:00"


# =============================================================================
# Inspection
# =============================================================================


def test_decode_json(runner):
    result = runner.invoke(app, ["decode", NEW_YEAR_ID.lower(), "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["ulid"] == NEW_YEAR_ID
    assert data["timestamp_ms"] == NEW_YEAR_2021_MS
    assert data["randomness"] == "00" * 10


def test_decode_text(runner):
    result = runner.invoke(app, ["decode", NEW_YEAR_ID])
    assert result.exit_code == 0
    assert f"Timestamp: {NEW_YEAR_2021_MS} ms" in result.stdout
    assert "2021-01-01T00:00:00+00:00" in result.stdout


@pytest.mark.parametrize(
    "text, rule",
    [
        ("0" * 25, "InvalidLength"),
        ("!" + "0" * 25, "InvalidCharacter"),
        ("8" + "0" * 25, "TimestampOverflow"),
    ],
)
def test_decode_reports_violated_rule(runner, text, rule):
    result = runner.invoke(app, ["decode", text])
    assert result.exit_code == 1
    assert rule in result.output


def test_decode_maximum_has_no_datetime(runner):
    """Timestamps past year 9999 still decode"""
    result = runner.invoke(app, ["decode", "7" + "Z" * 25, "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["created_at"] is None


def test_validate(runner):
    assert runner.invoke(app, ["validate", NEW_YEAR_ID]).exit_code == 0
    invalid = runner.invoke(app, ["validate", "invalid-ulid"])
    assert invalid.exit_code == 1
    assert "invalid" in invalid.stdout


def test_timestamp(runner):
    result = runner.invoke(app, ["timestamp", NEW_YEAR_ID])
    assert result.exit_code == 0
    assert result.stdout.strip() == str(NEW_YEAR_2021_MS)


def test_compare(runner):
    later = NEW_YEAR_2021_PREFIX[:-1] + "1" + "0" * 16
    assert runner.invoke(app, ["compare", NEW_YEAR_ID, later]).stdout.strip() == "-1"
    assert runner.invoke(app, ["compare", later, NEW_YEAR_ID]).stdout.strip() == "1"
    assert runner.invoke(app, ["compare", NEW_YEAR_ID, NEW_YEAR_ID.lower()]).stdout.strip() == "0"


def test_uuid_conversions(runner):
    result = runner.invoke(app, ["to-uuid", NEW_YEAR_ID])
    assert result.exit_code == 0
    as_uuid = uuid.UUID(result.stdout.strip())
    assert as_uuid.bytes == bytes(decode(NEW_YEAR_ID))

    back = runner.invoke(app, ["from-uuid", str(as_uuid)])
    assert back.exit_code == 0
    assert back.stdout.strip() == NEW_YEAR_ID


def test_from_uuid_rejects_garbage(runner):
    result = runner.invoke(app, ["from-uuid", "not-a-uuid"])
    assert result.exit_code == 1


# =============================================================================
# Store
# =============================================================================


def test_store_insert_get_and_list(runner, tmp_path):
    db = str(tmp_path / "cli.db")

    first = runner.invoke(app, ["store", "insert", "--payload", "alpha", "--id", NEW_YEAR_ID, "--db", db])
    assert first.exit_code == 0
    assert first.stdout.strip() == NEW_YEAR_ID

    second = runner.invoke(app, ["store", "insert", "--payload", "beta", "--db", db])
    assert second.exit_code == 0
    generated = second.stdout.strip()
    assert is_valid(generated)

    got = runner.invoke(app, ["store", "get", NEW_YEAR_ID, "--db", db])
    assert got.stdout.strip() == "alpha"

    listed = runner.invoke(app, ["store", "list", "--db", db, "--json"])
    assert listed.exit_code == 0
    assert [r["ulid"] for r in json.loads(listed.stdout)] == [NEW_YEAR_ID, generated]


def test_store_list_time_window(runner, tmp_path):
    db = str(tmp_path / "cli.db")
    runner.invoke(app, ["store", "insert", "--payload", "old", "--id", NEW_YEAR_ID, "--db", db])
    runner.invoke(app, ["store", "insert", "--payload", "new", "--db", db])

    result = runner.invoke(
        app, ["store", "list", "--db", db, "--until-ms", str(NEW_YEAR_2021_MS)]
    )
    assert result.exit_code == 0
    assert "Records (1):" in result.stdout
    assert "old" in result.stdout


def test_store_duplicate_insert_fails(runner, tmp_path):
    db = str(tmp_path / "cli.db")
    runner.invoke(app, ["store", "insert", "--payload", "a", "--id", NEW_YEAR_ID, "--db", db])
    result = runner.invoke(app, ["store", "insert", "--payload", "b", "--id", NEW_YEAR_ID, "--db", db])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_store_get_missing(runner, tmp_path):
    db = str(tmp_path / "cli.db")
    result = runner.invoke(app, ["store", "get", NEW_YEAR_ID, "--db", db])
    assert result.exit_code == 1
    assert "not found" in result.output


@pytest.mark.parametrize(
    "command",
    [
        ["store", "insert", "--payload", "x"],
        ["store", "get", NEW_YEAR_ID],
        ["store", "list"],
    ],
)
def test_store_unopenable_database_fails_cleanly(runner, tmp_path, command):
    db = str(tmp_path / "missing" / "cli.db")
    result = runner.invoke(app, command + ["--db", db])
    assert result.exit_code == 1
    assert "Cannot open database" in result.output
    assert isinstance(result.exception, SystemExit)
