"""Shared fixtures for all tests."""

from pathlib import Path

import pytest

from rpgstats.config import get_settings
from rpgstats.stats import CharacterClass, ExperienceLedger, ProgressionEngine, ProgressionTable

DATA_DIR = Path(__file__).parent.parent / "data" / "progression"


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Make every test start from default settings.

    Settings are cached with lru_cache, so environment changes made by one
    test would otherwise leak into the next.
    """
    for name in (
        "PROGRESSION_DIR",
        "DEFAULT_STARTING_LEVEL",
        "USE_MODIFIERS",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(f"RPGSTATS_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def warrior_table() -> ProgressionTable:
    """Warrior curves with thresholds 100 / 250 / 500."""
    return ProgressionTable.from_nested(
        {
            "warrior": {
                "experience_to_level_up": [100, 250, 500],
                "health": [80, 95, 115, 140],
                "damage": [10, 12, 14, 17],
                "experience_reward": [20, 30, 45, 60],
            },
            "grunt": {
                "health": [30, 40, 55],
                "experience_reward": [10, 15, 25],
            },
        }
    )


@pytest.fixture
def ledger() -> ExperienceLedger:
    """Empty experience ledger."""
    return ExperienceLedger(owner="TestChar")


@pytest.fixture
def warrior(warrior_table, ledger):
    """Attached warrior engine starting at 0 XP."""
    engine = ProgressionEngine(
        warrior_table, CharacterClass.WARRIOR, ledger, use_modifiers=True, name="TestChar"
    )
    engine.attach()
    yield engine
    engine.detach()


@pytest.fixture
def data_dir() -> Path:
    """Progression content shipped with the repository."""
    return DATA_DIR
