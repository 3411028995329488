"""
Progression engine for rpgstats.

Derives a character's level and stat values from its experience ledger, the
shared progression table and any attached modifier providers, and announces
level-ups.
"""

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import structlog

from rpgstats.config import get_settings

from .enums import CharacterClass, Stat
from .events import Event
from .experience import ExperienceLedger, InvalidArgumentError
from .modifiers import ModifierContribution, ModifierProvider, aggregate_modifiers
from .progression import ProgressionTable

logger = structlog.get_logger(__name__)

MIN_STARTING_LEVEL = 1
MAX_STARTING_LEVEL = 100


@dataclass(frozen=True)
class LevelUp:
    """Details of a detected level-up."""

    old_level: int
    new_level: int

    @property
    def levels_gained(self) -> int:
        return self.new_level - self.old_level


LevelUpEffect = Callable[[LevelUp], None]


class ProgressionEngine:
    """
    Level and stat calculator for one character.

    The level is computed lazily on first access and memoized. After that it
    only changes when the ledger reports new experience and the recomputed
    level is higher, so it never decreases.

    A single experience gain that crosses several thresholds produces one
    ``on_level_up`` emission whose LevelUp spans all of them.

    Attributes:
        character_class: Class used for every progression lookup
        ledger: Experience ledger, or None for characters that never level
        starting_level: Level used when there is no ledger
        use_modifiers: Whether modifier providers are applied to stats
        on_level_up: Event raised with a LevelUp after each detected level-up
    """

    def __init__(
        self,
        table: ProgressionTable,
        character_class: CharacterClass,
        ledger: ExperienceLedger | None = None,
        *,
        starting_level: int | None = None,
        use_modifiers: bool | None = None,
        modifier_providers: Iterable[ModifierProvider] = (),
        level_up_effect: LevelUpEffect | None = None,
        name: str | None = None,
    ) -> None:
        """
        Create an engine for one character.

        Args:
            table: Shared progression table
            character_class: The character's class
            ledger: The character's experience ledger, if it can gain experience
            starting_level: Level for characters without a ledger (1-100).
                Defaults to the configured default starting level.
            use_modifiers: Apply modifier providers. Defaults to configuration.
            modifier_providers: Initial modifier providers
            level_up_effect: Presentation hook run on each level-up, before
                ``on_level_up`` is emitted
            name: Optional character name used in log events

        Raises:
            InvalidArgumentError: If starting_level is outside 1-100
        """
        settings = get_settings()
        if starting_level is None:
            starting_level = settings.default_starting_level
        if use_modifiers is None:
            use_modifiers = settings.use_modifiers

        if not MIN_STARTING_LEVEL <= starting_level <= MAX_STARTING_LEVEL:
            raise InvalidArgumentError(
                f"starting_level must be between {MIN_STARTING_LEVEL} and "
                f"{MAX_STARTING_LEVEL}, got {starting_level}"
            )

        self.table = table
        self.character_class = CharacterClass(character_class)
        self.ledger = ledger
        self.starting_level = starting_level
        self.use_modifiers = use_modifiers
        self.level_up_effect = level_up_effect
        self.name = name
        self.on_level_up = Event("level_up")

        self._modifier_providers: list[ModifierProvider] = list(modifier_providers)
        self._current_level: int | None = None
        self._attached = False

    # Lifecycle

    @property
    def is_attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        """
        Start listening to the ledger.

        Memoizes the current level first so the next gain is measured against
        it. Calling attach twice is a no-op.
        """
        self.force_init()
        if self.ledger is None or self._attached:
            return
        self.ledger.on_experience_gained.subscribe(self._on_experience_gained)
        self._attached = True

    def detach(self) -> None:
        """Stop listening to the ledger. Safe to call when not attached."""
        if self.ledger is None or not self._attached:
            return
        self.ledger.on_experience_gained.unsubscribe(self._on_experience_gained)
        self._attached = False

    @contextmanager
    def activated(self) -> Iterator["ProgressionEngine"]:
        """
        Attach for the duration of a block.

        The engine is detached on exit, including when the block raises.
        """
        self.attach()
        try:
            yield self
        finally:
            self.detach()

    # Level

    @property
    def is_initialized(self) -> bool:
        return self._current_level is not None

    def force_init(self) -> None:
        """Compute and memoize the level if that has not happened yet."""
        if self._current_level is None:
            self._current_level = self.calculate_level()

    def get_level(self) -> int:
        """Get the memoized level, computing it on first access."""
        if self._current_level is None:
            self._current_level = self.calculate_level()
        return self._current_level

    def calculate_level(self) -> int:
        """
        Compute the level from the current experience.

        Returns the first level whose experience threshold is strictly
        greater than the current experience, or one past the last defined
        level when every threshold has been reached. Thresholds are assumed
        to increase; they are not checked here.

        Raises:
            OutOfRangeError: If the class has no experience_to_level_up curve
        """
        if self.ledger is None:
            return self.starting_level

        current_xp = self.ledger.get_experience_points()
        max_level = self.table.get_levels(Stat.EXPERIENCE_TO_LEVEL_UP, self.character_class)

        for level in range(1, max_level + 1):
            xp_to_level_up = self.table.get_stat(
                Stat.EXPERIENCE_TO_LEVEL_UP, self.character_class, level
            )
            if xp_to_level_up > current_xp:
                return level

        return max_level + 1

    def _on_experience_gained(self) -> None:
        if self._current_level is None:
            # Nothing to compare against yet
            self.force_init()
            return

        new_level = self.calculate_level()
        if new_level <= self._current_level:
            return

        level_up = LevelUp(old_level=self._current_level, new_level=new_level)
        self._current_level = new_level

        logger.info(
            "character_leveled_up",
            character_name=self.name,
            character_class=str(self.character_class),
            old_level=level_up.old_level,
            new_level=level_up.new_level,
        )

        self._run_level_up_effect(level_up)
        self.on_level_up.emit(level_up)

    def _run_level_up_effect(self, level_up: LevelUp) -> None:
        if self.level_up_effect is None:
            return
        try:
            self.level_up_effect(level_up)
        except Exception as e:
            logger.error(
                "level_up_effect_failed",
                character_name=self.name,
                new_level=level_up.new_level,
                error=str(e),
                exc_info=True,
            )

    def is_max_level(self) -> bool:
        """Check whether the character has passed the last experience threshold."""
        return self.get_level() > self.table.get_levels(
            Stat.EXPERIENCE_TO_LEVEL_UP, self.character_class
        )

    # Stats

    def get_character_class(self) -> CharacterClass:
        return self.character_class

    def get_stat(self, stat: Stat) -> float:
        """
        Get a stat value at the current level with modifiers applied.

        Formula: (base + additive) * (1 + percentage / 100)

        Raises:
            OutOfRangeError: If the curve does not cover the current level
        """
        modifiers = self.get_modifiers(stat)
        return (self.get_base_stat(stat) + modifiers.additive) * (1 + modifiers.percentage / 100)

    def get_base_stat(self, stat: Stat) -> float:
        """Get the raw progression value at the current level."""
        return self.table.get_stat(stat, self.character_class, self.get_level())

    def get_modifiers(self, stat: Stat) -> ModifierContribution:
        """Get summed modifiers for a stat, zero when modifiers are disabled."""
        if not self.use_modifiers:
            return ModifierContribution()
        return aggregate_modifiers(stat, tuple(self._modifier_providers))

    @property
    def modifier_providers(self) -> tuple[ModifierProvider, ...]:
        return tuple(self._modifier_providers)

    def add_modifier_provider(self, provider: ModifierProvider) -> None:
        if provider not in self._modifier_providers:
            self._modifier_providers.append(provider)

    def remove_modifier_provider(self, provider: ModifierProvider) -> None:
        if provider in self._modifier_providers:
            self._modifier_providers.remove(provider)

    # Experience

    def exp_to_next_level_up(self) -> float:
        """
        Get the experience threshold of the current level.

        Raises:
            OutOfRangeError: If the character is past the last threshold
        """
        return self.table.get_stat(
            Stat.EXPERIENCE_TO_LEVEL_UP, self.character_class, self.get_level()
        )

    def get_exp_progression(self) -> float:
        """
        Get progress through the current level, nominally 0.0 to 1.0.

        Returns 1.0 past the last threshold and for a zero-width level band,
        and 0.0 for characters without a ledger.
        """
        if self.ledger is None:
            return 0.0
        if self.is_max_level():
            return 1.0

        current_xp = self.ledger.get_experience_points()
        level = self.get_level()
        upper = self.exp_to_next_level_up()
        lower = 0.0
        if level > 1:
            lower = self.table.get_stat(
                Stat.EXPERIENCE_TO_LEVEL_UP, self.character_class, level - 1
            )

        span = upper - lower
        if span == 0:
            return 1.0
        return (current_xp - lower) / span

    def __repr__(self) -> str:
        level = self._current_level if self._current_level is not None else "uninitialized"
        return (
            f"ProgressionEngine(name={self.name!r}, class={self.character_class.value!r}, "
            f"level={level})"
        )
