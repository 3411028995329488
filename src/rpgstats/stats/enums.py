"""Lookup keys shared by progression content and the engine."""

from enum import StrEnum


class CharacterClass(StrEnum):
    """Character archetypes. Used only as progression lookup keys."""

    PLAYER = "player"
    WARRIOR = "warrior"
    MAGE = "mage"
    ARCHER = "archer"
    GRUNT = "grunt"


class Stat(StrEnum):
    """Measurable character attributes."""

    HEALTH = "health"
    EXPERIENCE_REWARD = "experience_reward"  # XP granted to whoever defeats this character
    EXPERIENCE_TO_LEVEL_UP = "experience_to_level_up"  # Cumulative XP thresholds
    DAMAGE = "damage"
    DEFENCE = "defence"
    MANA = "mana"
    MANA_REGEN_RATE = "mana_regen_rate"


# Constant names for easy import
CHARACTER_CLASS_NAMES = [cls.value for cls in CharacterClass]
STAT_NAMES = [stat.value for stat in Stat]
