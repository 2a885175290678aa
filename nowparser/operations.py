"""
Shorthand operations.

An expression such as ``now-4d/h+13m`` is a sequence of two kinds of
operation applied left to right to a running instant:

- :class:`Adjust` adds or subtracts a signed quantity of a unit (``-4d``, ``+13m``)
- :class:`Round` snaps down to the start of the current unit period (``/h``)

Unit codes are case-sensitive: ``m`` is a minute, ``M`` is a month.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Union


# =============================================================================
# Units
# =============================================================================

class Unit(Enum):
    """Calendar units, valued by their shorthand code."""
    SECOND = "s"
    MINUTE = "m"
    HOUR = "h"
    DAY = "d"
    WEEK = "w"
    MONTH = "M"
    YEAR = "y"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> "Unit":
        """Look up a unit by its shorthand code. Raises ``KeyError`` if unknown."""
        try:
            return cls(code)
        except ValueError:
            raise KeyError(code) from None


UNIT_CODES = "".join(unit.code for unit in Unit)

# Exact durations for the units that have one. Months and years have no
# fixed length.
FIXED_DURATIONS = {
    Unit.SECOND: timedelta(seconds=1),
    Unit.MINUTE: timedelta(minutes=1),
    Unit.HOUR: timedelta(hours=1),
    Unit.DAY: timedelta(days=1),
    Unit.WEEK: timedelta(weeks=1),
}

# Approximate durations used only to break an arbitrary difference down
# into shorthand, largest unit first. Not calendar-aware.
APPROXIMATE_DURATIONS = (
    (Unit.YEAR, timedelta(days=365)),
    (Unit.MONTH, timedelta(days=30)),
    (Unit.WEEK, timedelta(weeks=1)),
    (Unit.DAY, timedelta(days=1)),
    (Unit.HOUR, timedelta(hours=1)),
    (Unit.MINUTE, timedelta(minutes=1)),
    (Unit.SECOND, timedelta(seconds=1)),
)


# =============================================================================
# Operations
# =============================================================================

@dataclass(frozen=True)
class Adjust:
    """
    Add or subtract ``magnitude`` units.

    Examples:
        Adjust(sign='-', magnitude=4, unit=Unit.DAY)    # "-4d"
        Adjust(sign='+', magnitude=13, unit=Unit.MINUTE)  # "+13m"
    """
    sign: str
    magnitude: int
    unit: Unit

    def __post_init__(self):
        if self.sign not in ("+", "-"):
            raise ValueError("Adjust sign must be '+' or '-', not %r" % self.sign)
        if self.magnitude < 0:
            raise ValueError("Adjust magnitude must not be negative: %r" % self.magnitude)

    @property
    def signed_value(self) -> int:
        return self.magnitude if self.sign == "+" else -self.magnitude

    @property
    def token(self) -> str:
        return f"{self.sign}{self.magnitude}{self.unit.code}"

    def __repr__(self) -> str:
        return f"Adjust(sign='{self.sign}', magnitude={self.magnitude}, unit={self.unit.name})"


@dataclass(frozen=True)
class Round:
    """Snap to the start of the current ``unit`` period, e.g. ``/h``."""
    unit: Unit

    @property
    def token(self) -> str:
        return f"/{self.unit.code}"

    def __repr__(self) -> str:
        return f"Round(unit={self.unit.name})"


Operation = Union[Adjust, Round]


def to_shorthand(operations) -> str:
    """Render operations back to an expression string."""
    return "now" + "".join(op.token for op in operations)
