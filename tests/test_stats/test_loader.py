"""Tests for loading progression content from YAML."""

from pathlib import Path

import pytest

from rpgstats.config import get_settings
from rpgstats.stats import (
    CharacterClass,
    ProgressionLoadError,
    ProgressionTable,
    ProgressionValidationError,
    Stat,
    load_progression,
    load_progression_from_directory,
    validate_progression,
)

WARRIOR_YAML = """
progression:
  - character_class: warrior
    stats:
      - stat: experience_to_level_up
        levels: [100, 250, 500]
      - stat: health
        levels: [80, 95, 115, 140]
"""

MAGE_YAML = """
progression:
  - character_class: mage
    stats:
      - stat: mana
        levels: [50, 65.5]
"""


def write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadFiles:
    """Tests for reading progression files."""

    def test_load_single_file(self, tmp_path):
        """A single YAML file can be loaded directly."""
        path = write(tmp_path / "warrior.yaml", WARRIOR_YAML)

        table = load_progression(path)

        assert table.get_levels(Stat.EXPERIENCE_TO_LEVEL_UP, CharacterClass.WARRIOR) == 3
        assert table.get_stat(Stat.HEALTH, CharacterClass.WARRIOR, 4) == 140

    def test_load_directory_merges_files(self, tmp_path):
        """Every .yaml and .yml file in a directory is merged."""
        write(tmp_path / "warrior.yaml", WARRIOR_YAML)
        write(tmp_path / "mage.yml", MAGE_YAML)

        table = load_progression_from_directory(tmp_path)

        assert table.classes() == [CharacterClass.WARRIOR, CharacterClass.MAGE]
        assert table.get_stat(Stat.MANA, CharacterClass.MAGE, 2) == 65.5

    def test_duplicate_curve_rejected(self, tmp_path):
        """The same (class, stat) curve may only be defined once."""
        write(tmp_path / "a.yaml", WARRIOR_YAML)
        write(tmp_path / "b.yaml", WARRIOR_YAML)

        with pytest.raises(ProgressionValidationError, match="Duplicate curve"):
            load_progression_from_directory(tmp_path)

    def test_unknown_stat_rejected(self, tmp_path):
        """Stat names must be known."""
        path = write(
            tmp_path / "bad.yaml",
            """
progression:
  - character_class: warrior
    stats:
      - stat: luck
        levels: [1, 2]
""",
        )

        with pytest.raises(ProgressionValidationError, match="warrior"):
            load_progression(path)

    def test_empty_levels_rejected(self, tmp_path):
        """A curve needs at least one level."""
        path = write(
            tmp_path / "bad.yaml",
            """
progression:
  - character_class: mage
    stats:
      - stat: mana
        levels: []
""",
        )

        with pytest.raises(ProgressionValidationError):
            load_progression(path)

    @pytest.mark.parametrize("value", [".nan", ".inf", "-.inf"])
    def test_non_finite_level_rejected(self, tmp_path, value):
        """Level values must be finite."""
        path = write(
            tmp_path / "bad.yaml",
            f"""
progression:
  - character_class: mage
    stats:
      - stat: mana
        levels: [50, {value}]
""",
        )

        with pytest.raises(ProgressionValidationError):
            load_progression(path)

    def test_non_numeric_level_rejected(self, tmp_path):
        """Level values must be numbers."""
        path = write(
            tmp_path / "bad.yaml",
            """
progression:
  - character_class: mage
    stats:
      - stat: mana
        levels: [50, lots]
""",
        )

        with pytest.raises(ProgressionValidationError):
            load_progression(path)


class TestLoadErrors:
    """Tests for unreadable or malformed files."""

    def test_missing_directory(self, tmp_path):
        """A missing directory is a load error."""
        with pytest.raises(ProgressionLoadError, match="does not exist"):
            load_progression_from_directory(tmp_path / "nope")

    def test_directory_without_yaml(self, tmp_path):
        """A directory must contain YAML files."""
        write(tmp_path / "notes.txt", "nothing here")
        with pytest.raises(ProgressionLoadError, match="No YAML files"):
            load_progression_from_directory(tmp_path)

    def test_not_a_directory(self, tmp_path):
        """Loading a file as a directory fails."""
        path = write(tmp_path / "warrior.yaml", WARRIOR_YAML)
        with pytest.raises(ProgressionLoadError, match="Not a directory"):
            load_progression_from_directory(path)

    def test_empty_file(self, tmp_path):
        """Empty files are rejected."""
        path = write(tmp_path / "empty.yaml", "")
        with pytest.raises(ProgressionLoadError, match="Empty YAML"):
            load_progression(path)

    def test_missing_progression_key(self, tmp_path):
        """The top-level 'progression' key is required."""
        path = write(tmp_path / "rooms.yaml", "rooms: []\n")
        with pytest.raises(ProgressionLoadError, match="Missing 'progression'"):
            load_progression(path)

    def test_progression_not_a_list(self, tmp_path):
        """'progression' must be a list."""
        path = write(tmp_path / "bad.yaml", "progression: warrior\n")
        with pytest.raises(ProgressionLoadError, match="must be a list"):
            load_progression(path)

    def test_invalid_yaml(self, tmp_path):
        """YAML syntax errors are reported as load errors."""
        path = write(tmp_path / "bad.yaml", "progression: [unclosed\n")
        with pytest.raises(ProgressionLoadError, match="YAML parsing error"):
            load_progression(path)


class TestValidateProgression:
    """Tests for content warnings."""

    def test_clean_content(self, warrior_table):
        """Well-formed curves produce no warnings."""
        assert validate_progression(warrior_table) == []

    def test_non_increasing_thresholds(self):
        """Thresholds that fail to increase are reported."""
        table = ProgressionTable.from_nested(
            {"warrior": {"experience_to_level_up": [100, 100, 90]}}
        )

        warnings = validate_progression(table)

        assert len(warnings) == 2
        assert "level 1" in warnings[0]
        assert "level 3" in warnings[1]

    def test_short_stat_curve(self):
        """Curves that cannot cover the reachable levels are reported."""
        table = ProgressionTable.from_nested(
            {"mage": {"experience_to_level_up": [10, 20], "health": [5, 6]}}
        )

        warnings = validate_progression(table)

        assert warnings == ["Stat 'health' for 'mage' defines 2 levels but level 3 is reachable"]

    def test_classes_without_thresholds_skipped(self):
        """Classes that never level are not checked."""
        table = ProgressionTable.from_nested({"grunt": {"health": [30]}})
        assert validate_progression(table) == []


class TestDefaultContent:
    """Tests against the content shipped with the repository."""

    def test_shipped_content_loads_cleanly(self, data_dir):
        """The bundled progression directory loads without warnings."""
        table = load_progression(data_dir)

        assert validate_progression(table) == []
        assert table.get_stat(Stat.EXPERIENCE_TO_LEVEL_UP, CharacterClass.WARRIOR, 1) == 100

    def test_default_path_from_settings(self, data_dir, monkeypatch):
        """Without a path the configured progression directory is used."""
        monkeypatch.setenv("RPGSTATS_PROGRESSION_DIR", str(data_dir))
        get_settings.cache_clear()

        table = load_progression()

        assert CharacterClass.GRUNT in table.classes()
