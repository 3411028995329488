"""Experience ledger for rpgstats."""

from typing import TYPE_CHECKING

import structlog

from .enums import Stat
from .events import Event

if TYPE_CHECKING:
    from .engine import ProgressionEngine

logger = structlog.get_logger(__name__)


class InvalidArgumentError(ValueError):
    """Raised when an experience amount or restored value is negative."""

    pass


class ExperienceLedger:
    """
    Accumulated experience points for one character.

    Experience only ever grows. Every successful :meth:`add_experience`,
    including an amount of zero, notifies ``on_experience_gained``
    subscribers synchronously in subscription order.

    Attributes:
        on_experience_gained: Event raised after each gain, with no arguments
    """

    def __init__(self, experience_points: float = 0.0, owner: str | None = None) -> None:
        """
        Create a ledger.

        Args:
            experience_points: Starting experience, e.g. from saved state
            owner: Optional name used in log events
        """
        _check_non_negative(experience_points, "experience_points")
        self._experience_points = float(experience_points)
        self.owner = owner
        self.on_experience_gained = Event("experience_gained")

    def get_experience_points(self) -> float:
        """Get the current accumulated experience."""
        return self._experience_points

    def add_experience(self, amount: float, source: str = "unknown") -> None:
        """
        Add experience and notify subscribers.

        Args:
            amount: Experience to add, must be >= 0
            source: Source description for logging (e.g., "defeat", "quest_complete")

        Raises:
            InvalidArgumentError: If amount is negative or NaN
        """
        _check_non_negative(amount, "amount")

        old_xp = self._experience_points
        self._experience_points += amount

        logger.info(
            "experience_gained",
            owner=self.owner,
            amount=amount,
            source=source,
            old_xp=old_xp,
            new_xp=self._experience_points,
        )

        self.on_experience_gained.emit()

    def capture_state(self) -> float:
        """Get the value to persist for this ledger."""
        return self._experience_points

    def restore_state(self, state: float) -> None:
        """
        Replace the experience value from saved state.

        Intended for character creation, before a progression engine has
        computed a level. Subscribers are not notified.

        Raises:
            InvalidArgumentError: If the saved value is negative or NaN
        """
        _check_non_negative(state, "state")
        self._experience_points = float(state)

        logger.debug("experience_restored", owner=self.owner, xp=self._experience_points)


def _check_non_negative(value: float, name: str) -> None:
    # NaN fails every comparison, so test for the valid range
    if not value >= 0:
        raise InvalidArgumentError(f"{name} must be a non-negative number, got {value}")


def award_defeat_experience(defeated: "ProgressionEngine", ledger: ExperienceLedger) -> float:
    """
    Grant the experience reward of a defeated character.

    Args:
        defeated: Progression engine of the character that was defeated
        ledger: Ledger of the character that gets the reward

    Returns:
        The amount of experience awarded
    """
    reward = defeated.get_stat(Stat.EXPERIENCE_REWARD)
    ledger.add_experience(reward, source="defeat")
    return reward
