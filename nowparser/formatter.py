"""
Inverse of the shorthand parser.

Given a target instant and a reference instant, find the coarsest unit the
target sits on a boundary of and describe it relative to the reference:

    2019-01-01T00:00:00Z  ->  "now-1y/y"
    2020-06-28T00:00:00Z  ->  "now+16d/w"   (a Sunday)
    2020-06-08T08:13:17Z  ->  "now-4d-5h-7m"

Boundaries are tested from coarsest to finest and the first match wins, so a
Sunday that is also the first of a month is written at month precision.
"""

import logging
from datetime import timedelta

from nowparser.evaluator import round_down
from nowparser.operations import APPROXIMATE_DURATIONS, FIXED_DURATIONS, Unit
from nowparser.utils import date_only

logger = logging.getLogger(__name__)

PRECISION_ORDER = (
    Unit.YEAR,
    Unit.MONTH,
    Unit.WEEK,
    Unit.DAY,
    Unit.HOUR,
    Unit.MINUTE,
)


def _signed(count, unit, suffix=""):
    if count == 0:
        return "now/%s" % unit.code
    sign = "+" if count > 0 else "-"
    return "now%s%d%s%s" % (sign, abs(count), unit.code, suffix)


def is_aligned(date_obj, unit):
    """True if ``date_obj`` is the first instant of its ``unit`` period."""
    return round_down(date_obj, unit) == date_obj


class ShorthandFormatter:
    """Converts datetimes into the shortest matching shorthand string."""

    def format(self, date_obj, now, settings):
        for unit in PRECISION_ORDER:
            if is_aligned(date_obj, unit):
                logger.debug(f"{date_obj.isoformat()} is aligned to {unit.name}")
                return self._format_aligned(date_obj, now, unit, settings.ROUND_TRIP_FORMAT)

        return self._format_breakdown(date_obj, now)

    def _format_aligned(self, date_obj, now, unit, round_trip):
        if unit == Unit.YEAR:
            years = date_obj.year - now.year
            return _signed(years, Unit.YEAR, suffix="/y")

        if unit == Unit.MONTH:
            months = (date_obj.year - now.year) * 12 + date_obj.month - now.month
            return _signed(months, Unit.MONTH, suffix="/M" if round_trip else "")

        if unit == Unit.WEEK:
            # Counted in days from the reference's date, whatever its weekday
            days = (date_obj - date_only(now)).days
            if days == 0:
                return "now/w"
            return _signed(days, Unit.DAY, suffix="/w")

        if round_trip:
            count = (date_obj - round_down(now, unit)) // FIXED_DURATIONS[unit]
            return _signed(count, unit, suffix="/" + unit.code)

        return self._format_elapsed(date_obj, now, unit)

    def _format_elapsed(self, date_obj, now, unit):
        """Whole units elapsed between ``now`` and ``date_obj``, without rounding."""
        difference = date_obj - now
        count = abs(difference) // FIXED_DURATIONS[unit]
        if difference < timedelta(0):
            count = -count
        return _signed(count, unit)

    def _format_breakdown(self, date_obj, now):
        difference = date_obj - now
        sign = "+" if difference >= timedelta(0) else "-"
        remaining = abs(difference)

        result = "now"
        for unit, duration in APPROXIMATE_DURATIONS:
            value, remaining = divmod(remaining, duration)
            if value > 0:
                result += f"{sign}{value}{unit.code}"

        logger.debug(f"{date_obj.isoformat()} has sub-minute precision, written as '{result}'")
        return result


shorthand_formatter = ShorthandFormatter()
