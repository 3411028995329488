"""
Progression loader module for rpgstats.

Handles loading and validating progression curves from YAML files.
"""

from pathlib import Path
from typing import Annotated, Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from rpgstats.config import get_settings

from .enums import CharacterClass, Stat
from .progression import ProgressionTable

logger = structlog.get_logger(__name__)


class ProgressionLoadError(Exception):
    """Raised when there's an error loading progression data."""

    pass


class ProgressionValidationError(Exception):
    """Raised when progression validation fails."""

    pass


class StatCurve(BaseModel):
    """
    One stat's values for a character class.

    Attributes:
        stat: The stat this curve defines
        levels: Values for level 1, 2, 3... in order
    """

    stat: Stat = Field(..., description="Stat this curve defines")
    levels: list[Annotated[float, Field(allow_inf_nan=False)]] = Field(
        ..., min_length=1, description="Values indexed by level, 1-based"
    )


class ClassProgression(BaseModel):
    """
    All stat curves for one character class.

    Attributes:
        character_class: The class these curves belong to
        stats: Stat curves for the class
    """

    character_class: CharacterClass = Field(..., description="Character class")
    stats: list[StatCurve] = Field(default_factory=list, description="Stat curves")


def load_yaml_file(file_path: Path) -> list[dict[str, Any]]:
    """
    Load a YAML file containing progression definitions.

    Args:
        file_path: Path to the YAML file

    Returns:
        List of class progression dictionaries

    Raises:
        ProgressionLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ProgressionLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise ProgressionLoadError(f"File not found: {file_path}") from e
    except OSError as e:
        raise ProgressionLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise ProgressionLoadError(f"Empty YAML file: {file_path}")

    if not isinstance(data, dict) or "progression" not in data:
        raise ProgressionLoadError(f"Missing 'progression' key in {file_path}")

    entries = data["progression"]
    if not isinstance(entries, list):
        raise ProgressionLoadError(f"'progression' must be a list in {file_path}")

    return entries


def create_class_progression(entry: dict[str, Any], file_path: Path) -> ClassProgression:
    """
    Create a ClassProgression from dictionary data.

    Raises:
        ProgressionValidationError: If Pydantic validation fails
    """
    try:
        return ClassProgression(**entry)
    except (ValidationError, TypeError) as e:
        class_name = "unknown"
        if isinstance(entry, dict):
            class_name = entry.get("character_class", "unknown")
        raise ProgressionValidationError(
            f"Invalid progression for class '{class_name}' in {file_path}: {e}"
        ) from e


def load_progression_files(files: list[Path]) -> ProgressionTable:
    """
    Load and merge progression curves from several YAML files.

    Raises:
        ProgressionLoadError: If a file cannot be loaded
        ProgressionValidationError: If an entry is invalid or a curve is defined twice
    """
    curves: dict[tuple[Stat, CharacterClass], list[float]] = {}

    for yaml_file in files:
        for entry in load_yaml_file(yaml_file):
            progression = create_class_progression(entry, yaml_file)

            for curve in progression.stats:
                key = (curve.stat, progression.character_class)
                # Check for duplicate curves across all files
                if key in curves:
                    raise ProgressionValidationError(
                        f"Duplicate curve for stat '{curve.stat}' and class "
                        f"'{progression.character_class}' found in {yaml_file}"
                    )
                curves[key] = curve.levels

    return ProgressionTable(curves)


def load_progression_from_directory(directory: Path) -> ProgressionTable:
    """
    Load all progression YAML files from a directory.

    Args:
        directory: Path to the directory containing YAML files

    Returns:
        ProgressionTable with every curve found

    Raises:
        ProgressionLoadError: If directory doesn't exist or files can't be loaded
        ProgressionValidationError: If progression validation fails
    """
    if not directory.exists():
        raise ProgressionLoadError(f"Directory does not exist: {directory}")

    if not directory.is_dir():
        raise ProgressionLoadError(f"Not a directory: {directory}")

    yaml_files = sorted(list(directory.glob("*.yaml")) + list(directory.glob("*.yml")))

    if not yaml_files:
        raise ProgressionLoadError(f"No YAML files found in {directory}")

    return load_progression_files(yaml_files)


def validate_progression(table: ProgressionTable) -> list[str]:
    """
    Check progression content for authoring problems.

    Args:
        table: The loaded table

    Returns:
        List of warning messages (non-critical issues)
    """
    warnings: list[str] = []

    for character_class in table.classes():
        if not table.has_curve(Stat.EXPERIENCE_TO_LEVEL_UP, character_class):
            continue

        thresholds = table.curves[(Stat.EXPERIENCE_TO_LEVEL_UP, character_class)]
        for level in range(1, len(thresholds)):
            if thresholds[level] <= thresholds[level - 1]:
                warnings.append(
                    f"Experience thresholds for '{character_class}' do not increase "
                    f"between level {level} ({thresholds[level - 1]:g}) and level "
                    f"{level + 1} ({thresholds[level]:g})"
                )

        # Past the last threshold a character sits at len(thresholds) + 1
        reachable = len(thresholds) + 1
        for stat in table.stats_for(character_class):
            if stat is Stat.EXPERIENCE_TO_LEVEL_UP:
                continue
            defined = table.get_levels(stat, character_class)
            if defined < reachable:
                warnings.append(
                    f"Stat '{stat}' for '{character_class}' defines {defined} levels "
                    f"but level {reachable} is reachable"
                )

    return warnings


def load_progression(path: Path | None = None) -> ProgressionTable:
    """
    Load and validate progression content.

    This is the main entry point for loading progression data.

    Args:
        path: A YAML file or a directory of YAML files. If None, uses the
            configured progression directory.

    Returns:
        The loaded ProgressionTable

    Raises:
        ProgressionLoadError: If loading fails
        ProgressionValidationError: If validation fails
    """
    if path is None:
        path = get_settings().progression_dir

    if path.is_file():
        table = load_progression_files([path])
    else:
        table = load_progression_from_directory(path)

    for warning in validate_progression(table):
        logger.warning("progression_warning", path=str(path), warning=warning)

    logger.info(
        "progression_loaded",
        path=str(path),
        curves=len(table),
        classes=[str(character_class) for character_class in table.classes()],
    )

    return table
