from datetime import timedelta

from dateutil.relativedelta import relativedelta

from nowparser.errors import EvaluationError, OutOfRangeError
from nowparser.operations import FIXED_DURATIONS, Adjust, Round, Unit


def days_since_sunday(date_obj):
    # datetime.weekday() counts from Monday
    return (date_obj.weekday() + 1) % 7


def adjust(date_obj, operation):
    """Apply an :class:`Adjust`. Months and years follow the calendar,
    clamping the day to the end of a shorter month."""
    value = operation.signed_value
    unit = operation.unit

    if unit == Unit.YEAR:
        return date_obj + relativedelta(years=value)
    if unit == Unit.MONTH:
        return date_obj + relativedelta(months=value)
    if unit in FIXED_DURATIONS:
        return date_obj + FIXED_DURATIONS[unit] * value

    raise EvaluationError("Invalid adjustment unit: %r" % (unit,))


def round_down(date_obj, unit):
    """Snap ``date_obj`` to the start of its current ``unit`` period."""
    if unit == Unit.SECOND:
        return date_obj.replace(microsecond=0)
    if unit == Unit.MINUTE:
        return date_obj.replace(second=0, microsecond=0)
    if unit == Unit.HOUR:
        return date_obj.replace(minute=0, second=0, microsecond=0)

    midnight = date_obj.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == Unit.DAY:
        return midnight
    if unit == Unit.WEEK:
        return midnight - timedelta(days=days_since_sunday(midnight))
    if unit == Unit.MONTH:
        return midnight.replace(day=1)
    if unit == Unit.YEAR:
        return midnight.replace(month=1, day=1)

    raise EvaluationError("Invalid rounding unit: %r" % (unit,))


def evaluate(operations, base):
    """Apply ``operations`` in order, starting from ``base``."""
    date_obj = base
    for operation in operations:
        try:
            if isinstance(operation, Adjust):
                date_obj = adjust(date_obj, operation)
            elif isinstance(operation, Round):
                date_obj = round_down(date_obj, operation.unit)
            else:
                raise EvaluationError("Unknown operation: %r" % (operation,))
        except (OverflowError, ValueError) as e:
            raise OutOfRangeError(operation.token) from e
    return date_obj
