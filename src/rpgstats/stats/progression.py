"""
Progression table for rpgstats.

Immutable lookup of per-class, per-stat curves indexed by level.
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from .enums import CharacterClass, Stat


class OutOfRangeError(LookupError):
    """Raised when a level or (stat, class) pair is not present in the table."""

    pass


class ProgressionTable:
    """
    Read-only lookup of progression curves.

    Each curve is an ordered, 1-based sequence of values for one
    (stat, character class) pair. Curves are frozen at construction, so a
    table may be shared by every character and read from any thread.

    Attributes:
        curves: Mapping of (stat, character_class) to the tuple of level values
    """

    def __init__(
        self, curves: Mapping[tuple[Stat, CharacterClass], Sequence[float]] | None = None
    ) -> None:
        """
        Build a table from a mapping of curves.

        Args:
            curves: Mapping of (stat, character_class) to level values. Level 1
                is the first element.
        """
        frozen: dict[tuple[Stat, CharacterClass], tuple[float, ...]] = {}
        for (stat, character_class), levels in (curves or {}).items():
            frozen[(Stat(stat), CharacterClass(character_class))] = tuple(
                float(value) for value in levels
            )
        self.curves: Mapping[tuple[Stat, CharacterClass], tuple[float, ...]] = MappingProxyType(
            frozen
        )

    @classmethod
    def from_nested(
        cls, data: Mapping[CharacterClass | str, Mapping[Stat | str, Iterable[float]]]
    ) -> "ProgressionTable":
        """
        Build a table from ``{class: {stat: [values...]}}``.

        Convenient for hosts and tests that define curves inline.
        """
        curves: dict[tuple[Stat, CharacterClass], list[float]] = {}
        for character_class, stats in data.items():
            for stat, levels in stats.items():
                curves[(Stat(stat), CharacterClass(character_class))] = list(levels)
        return cls(curves)

    def _curve(self, stat: Stat, character_class: CharacterClass) -> tuple[float, ...]:
        try:
            return self.curves[(stat, character_class)]
        except KeyError:
            raise OutOfRangeError(
                f"No progression curve for stat '{stat}' and class '{character_class}'"
            ) from None

    def get_stat(self, stat: Stat, character_class: CharacterClass, level: int) -> float:
        """
        Get the curve value for a level.

        Args:
            stat: The stat to look up
            character_class: The character class to look up
            level: 1-based level

        Returns:
            The value defined for that level

        Raises:
            OutOfRangeError: If the pair is undefined or level is outside 1..len(curve)
        """
        curve = self._curve(stat, character_class)
        if level < 1 or level > len(curve):
            raise OutOfRangeError(
                f"Level {level} out of range for stat '{stat}' and class "
                f"'{character_class}' (defined levels: 1-{len(curve)})"
            )
        return curve[level - 1]

    def get_levels(self, stat: Stat, character_class: CharacterClass) -> int:
        """
        Get the number of defined levels for a curve.

        Raises:
            OutOfRangeError: If the pair is undefined
        """
        return len(self._curve(stat, character_class))

    def has_curve(self, stat: Stat, character_class: CharacterClass) -> bool:
        """Check whether a curve exists for the pair."""
        return (stat, character_class) in self.curves

    def classes(self) -> list[CharacterClass]:
        """Get every character class with at least one curve, in enum order."""
        present = {character_class for _, character_class in self.curves}
        return [character_class for character_class in CharacterClass if character_class in present]

    def stats_for(self, character_class: CharacterClass) -> list[Stat]:
        """Get every stat defined for a class, in enum order."""
        return [stat for stat in Stat if (stat, character_class) in self.curves]

    def __len__(self) -> int:
        return len(self.curves)

    def __repr__(self) -> str:
        return f"ProgressionTable(curves={len(self.curves)})"
