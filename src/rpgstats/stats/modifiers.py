"""Stat modifiers contributed by equipment, buffs and debuffs."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .enums import Stat


@runtime_checkable
class ModifierProvider(Protocol):
    """Anything that can adjust a character's stats."""

    def get_additive_modifiers(self, stat: Stat) -> Iterable[float]:
        """Flat amounts added to the base value of ``stat``."""
        ...

    def get_percentage_modifiers(self, stat: Stat) -> Iterable[float]:
        """Percentages (50 means +50%) applied after the additive amounts."""
        ...


@dataclass(frozen=True)
class ModifierContribution:
    """Summed modifiers for one stat query."""

    additive: float = 0.0
    percentage: float = 0.0


def aggregate_modifiers(stat: Stat, providers: Iterable[ModifierProvider]) -> ModifierContribution:
    """
    Sum every provider's contributions to a stat.

    Args:
        stat: The stat being queried
        providers: Providers attached to the character

    Returns:
        ModifierContribution with the additive and percentage totals
    """
    additive = 0.0
    percentage = 0.0

    for provider in providers:
        for modifier in provider.get_additive_modifiers(stat):
            additive += modifier
        for modifier in provider.get_percentage_modifiers(stat):
            percentage += modifier

    return ModifierContribution(additive=additive, percentage=percentage)


@dataclass
class StatModifiers:
    """
    Simple modifier provider backed by per-stat lists.

    Suitable for an equipped item or a timed buff.

    Example:
        >>> sword = StatModifiers(name="sword", additive={Stat.DAMAGE: [5]})
        >>> list(sword.get_additive_modifiers(Stat.DAMAGE))
        [5]
    """

    name: str = ""
    additive: dict[Stat, list[float]] = field(default_factory=dict)
    percentage: dict[Stat, list[float]] = field(default_factory=dict)

    def add_additive(self, stat: Stat, amount: float) -> None:
        self.additive.setdefault(stat, []).append(amount)

    def add_percentage(self, stat: Stat, amount: float) -> None:
        self.percentage.setdefault(stat, []).append(amount)

    def get_additive_modifiers(self, stat: Stat) -> Iterable[float]:
        return iter(self.additive.get(stat, ()))

    def get_percentage_modifiers(self, stat: Stat) -> Iterable[float]:
        return iter(self.percentage.get(stat, ()))
