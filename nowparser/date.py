from nowparser.conf import apply_settings, check_settings
from nowparser.evaluator import evaluate
from nowparser.extractor import operation_extractor
from nowparser.formatter import shorthand_formatter
from nowparser.utils import get_reference_instant, to_utc


class ShorthandDateParser:
    """
    Class which handles parsing and formatting of shorthand date strings.

    :param settings:
        Configure customized behavior using settings defined in :mod:`nowparser.conf.Settings`.
    :type settings: dict

    :raises:
        ``SettingValidationError``: A provided setting is not valid.
    """

    @apply_settings
    def __init__(self, settings=None):
        check_settings(settings)
        self._settings = settings

    def get_operations(self, date_string):
        """Return the :class:`Adjust`/:class:`Round` operations of ``date_string``."""
        return operation_extractor.extract(date_string, self._settings)

    def get_date(self, date_string, now=None):
        """
        Resolve ``date_string`` against ``now``.

        :param date_string:
            A shorthand string such as ``"now-4d/h"``.
        :type date_string: str

        :param now:
            Reference instant. Defaults to ``RELATIVE_BASE`` and then to the current time.
        :type now: datetime.datetime

        :return: The resolved UTC datetime.

        :raises:
            ``MissingPrefixError``: the string does not start with ``now``,
            ``InvalidSignError``: an operation is not introduced by ``+``, ``-`` or ``/``,
            ``UnmatchedTextError``: stray characters under ``STRICT_PARSING``.
        """
        operations = self.get_operations(date_string)
        base = get_reference_instant(now, self._settings)

        date_obj = evaluate(operations, base)

        if not self._settings.RETURN_AS_TIMEZONE_AWARE:
            date_obj = date_obj.replace(tzinfo=None)
        return date_obj

    def format(self, date_obj, now=None):
        """Describe ``date_obj`` as a shorthand string relative to ``now``."""
        date_obj = to_utc(date_obj)
        base = get_reference_instant(now, self._settings)
        return shorthand_formatter.format(date_obj, base, self._settings)
