"""
Pytest configuration and shared fixtures

Fun fact: conftest fixtures are looked up by argument name, so a test asks
for a frozen clock simply by naming a parameter test_time!
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from ulidia.core.generator import Generator
from ulidia.kernel.entropy import FixedRandomSource
from ulidia.kernel.time import FixedTimeProvider
from ulidia.storage.sqlite import SQLiteUlidStore


@pytest.fixture
def test_time() -> FixedTimeProvider:
    """Controllable clock frozen at 2021-01-01 00:00:00 UTC"""
    return FixedTimeProvider(datetime(2021, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def zero_random() -> FixedRandomSource:
    """Random source that always returns ten zero bytes"""
    return FixedRandomSource(bytes(10))


@pytest.fixture
def fixed_generator(test_time: FixedTimeProvider, zero_random: FixedRandomSource) -> Generator:
    """Fully deterministic generator"""
    return Generator(test_time, zero_random)


@pytest.fixture
def clocked_generator(test_time: FixedTimeProvider) -> Generator:
    """Generator with a controllable clock and real randomness"""
    return Generator(time_provider=test_time)


@pytest.fixture
def store(tmp_path: Path, clocked_generator: Generator) -> SQLiteUlidStore:
    """Fresh identifier store in a temporary database"""
    return SQLiteUlidStore(tmp_path / "ids.db", generator=clocked_generator)
