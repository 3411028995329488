"""Character stats - progression curves, experience, modifiers and leveling."""

from .engine import LevelUp, ProgressionEngine
from .enums import CHARACTER_CLASS_NAMES, STAT_NAMES, CharacterClass, Stat
from .events import Event
from .experience import ExperienceLedger, InvalidArgumentError, award_defeat_experience
from .loader import (
    ProgressionLoadError,
    ProgressionValidationError,
    load_progression,
    load_progression_from_directory,
    validate_progression,
)
from .modifiers import ModifierContribution, ModifierProvider, StatModifiers, aggregate_modifiers
from .progression import OutOfRangeError, ProgressionTable

__all__ = [
    "CharacterClass",
    "Stat",
    "CHARACTER_CLASS_NAMES",
    "STAT_NAMES",
    "Event",
    "ProgressionTable",
    "OutOfRangeError",
    "load_progression",
    "load_progression_from_directory",
    "validate_progression",
    "ProgressionLoadError",
    "ProgressionValidationError",
    "ExperienceLedger",
    "InvalidArgumentError",
    "award_defeat_experience",
    "ModifierProvider",
    "ModifierContribution",
    "StatModifiers",
    "aggregate_modifiers",
    "ProgressionEngine",
    "LevelUp",
]
