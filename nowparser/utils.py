from datetime import datetime, timezone


def to_utc(date_obj):
    """Return ``date_obj`` as an aware UTC datetime. Naive values are taken as UTC."""
    if not isinstance(date_obj, datetime):
        raise TypeError(
            "Expected a datetime, not {}".format(type(date_obj).__name__)
        )
    if date_obj.tzinfo is None:
        return date_obj.replace(tzinfo=timezone.utc)
    return date_obj.astimezone(timezone.utc)


def get_reference_instant(now, settings):
    """Resolve the instant shorthand offsets are relative to.

    An explicit ``now`` wins over ``RELATIVE_BASE``; without either the
    clock is read, once.
    """
    if now is None:
        now = settings.RELATIVE_BASE or datetime.now(tz=timezone.utc)
    return to_utc(now)


def date_only(date_obj):
    """Strip the time of day, keeping the calendar date and tzinfo."""
    return date_obj.replace(hour=0, minute=0, second=0, microsecond=0)
