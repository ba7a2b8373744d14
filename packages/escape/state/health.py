"""
Health - a clamped, immutable hit point quantity.

Health never goes below zero and is never healed past the owner's maximum.
Values are immutable; damage and heal_to_max return new Health objects and the
owning combatant rebinds its attribute. The maximum is held by the combatant,
not by Health itself.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Union

__all__ = ["Health", "HealthLike"]


HealthLike = Union["Health", int]


def _as_int(value: HealthLike) -> int:
    if isinstance(value, Health):
        return value.value
    return int(value)


@total_ordering
class Health:
    """Non-negative hit points."""

    __slots__ = ("_value",)

    def __init__(self, value: HealthLike):
        value = _as_int(value)
        if value < 0:
            raise ValueError(f"Health cannot be negative: {value}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    @property
    def is_zero(self) -> bool:
        return self._value == 0

    def damage(self, amount: int) -> Health:
        """Subtract amount, flooring at zero."""
        if amount < 0:
            raise ValueError(f"Damage amount cannot be negative: {amount}")
        return Health(max(0, self._value - amount))

    def heal_to_max(self, amount: int, max_health: HealthLike) -> Health:
        """Add amount, capping at max_health."""
        if amount < 0:
            raise ValueError(f"Heal amount cannot be negative: {amount}")
        return Health(min(_as_int(max_health), self._value + amount))

    # -------------------------------------------------------------------------
    # Display arithmetic and comparison
    # -------------------------------------------------------------------------

    def __sub__(self, other: HealthLike) -> int:
        # Plain int: used for "healed by N HP", never stored back as Health
        return self._value - _as_int(other)

    def __rsub__(self, other: int) -> int:
        return int(other) - self._value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Health, int)):
            return self._value == _as_int(other)
        return NotImplemented

    def __lt__(self, other: HealthLike) -> bool:
        if isinstance(other, (Health, int)):
            return self._value < _as_int(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Health({self._value})"

    def __str__(self) -> str:
        return str(self._value)
