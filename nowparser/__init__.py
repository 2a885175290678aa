__version__ = "1.0.0"

from .conf import Settings, SettingValidationError, apply_settings
from .date import ShorthandDateParser
from .errors import (
    EvaluationError,
    FormatError,
    InvalidSignError,
    MissingPrefixError,
    OutOfRangeError,
    UnmatchedTextError,
)
from .operations import Adjust, Operation, Round, Unit, to_shorthand

_default_parser = ShorthandDateParser()


def _get_parser(settings):
    if settings._default:
        return _default_parser
    return ShorthandDateParser(settings=settings)


@apply_settings
def parse(date_string, now=None, settings=None):
    """Resolve a shorthand date string to a UTC datetime.

    A shorthand string is ``now`` followed by any number of operations, applied
    left to right: ``+Nu``/``-Nu`` shift by N units and ``/u`` rounds down to the
    start of the current unit. Units are ``s``, ``m`` (minute), ``h``, ``d``,
    ``w`` (weeks start on Sunday), ``M`` (month) and ``y``.

    :param date_string:
        A string such as ``"now-4d/h-4h+13m/h"``.
    :type date_string: str

    :param now:
        The reference instant. Naive datetimes are taken as UTC. Defaults to the
        ``RELATIVE_BASE`` setting, or the current time.
    :type now: datetime.datetime

    :param settings:
        Configure customized behavior using settings defined in :mod:`nowparser.conf.Settings`.
    :type settings: dict

    :return: Returns a timezone-aware UTC :class:`datetime.datetime`.

    :raises:
        ``MissingPrefixError``, ``InvalidSignError``, ``UnmatchedTextError`` and
        ``OutOfRangeError``
        (all ``FormatError``, a ``ValueError``); ``SettingValidationError``.

    Example usage::

        >>> import nowparser
        >>> from datetime import datetime, timezone
        >>> now = datetime(2020, 6, 12, 13, 20, 17, 486000, tzinfo=timezone.utc)
        >>> nowparser.parse("now-1y/y", now=now)
        datetime.datetime(2019, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> nowparser.parse("now+2d/w", now=now)
        datetime.datetime(2020, 6, 14, 0, 0, tzinfo=datetime.timezone.utc)
    """
    return _get_parser(settings).get_date(date_string, now=now)


@apply_settings
def format(date_obj, now=None, settings=None):
    """Describe a datetime as a shorthand string relative to ``now``.

    The coarsest unit boundary ``date_obj`` falls on (year, month, week, day,
    hour, minute) decides the precision of the result. With the default
    ``ROUND_TRIP_FORMAT`` setting, ``parse(format(d, now), now) == d`` for any
    such aligned ``d``. To get this, the month, day, hour and minute forms carry a
    rounding suffix (``now-3M/M``, ``now-2d/d``). The historical strings had no
    suffix (``now-3M``, ``now-2d``) and did not parse back to ``d``. Set
    ``ROUND_TRIP_FORMAT`` to ``False`` to produce them instead.

    Example usage::

        >>> nowparser.format(datetime(2020, 6, 28, tzinfo=timezone.utc), now=now)
        'now+16d/w'
    """
    return _get_parser(settings).format(date_obj, now=now)
