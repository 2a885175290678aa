import logging

import regex as re

from nowparser.errors import InvalidSignError, MissingPrefixError, UnmatchedTextError
from nowparser.operations import UNIT_CODES, Adjust, Round, Unit

logger = logging.getLogger(__name__)

PREFIX = "now"
VALID_SIGNS = ("+", "-", "/")

# '-4d', '+13m', '3h' (unsigned, rejected later) or '/h'
OPERATION_PATTERN = re.compile(r"[+-]?[0-9]+[%(units)s]|/[%(units)s]" % {"units": UNIT_CODES})


class OperationExtractor:
    """Splits shorthand strings like "now-4d/h-4h+13m/h" into operations."""

    def tokenize(self, date_string, strict=False):
        """Return the raw operation tokens found after the ``now`` prefix."""
        if not date_string.startswith(PREFIX):
            raise MissingPrefixError(date_string)

        operations = date_string[len(PREFIX):]
        tokens = OPERATION_PATTERN.findall(operations)

        unmatched = OPERATION_PATTERN.sub("", operations)
        if unmatched:
            if strict:
                raise UnmatchedTextError(date_string, unmatched)
            logger.debug(f"Skipping unmatched text {unmatched!r} in '{date_string}'")

        return tokens

    def parse_token(self, token):
        sign = token[0]
        if sign not in VALID_SIGNS:
            raise InvalidSignError(token)

        unit = Unit.from_code(token[-1])
        if sign == "/":
            return Round(unit=unit)

        digits = token[1:-1]
        magnitude = int(digits) if digits else 1
        return Adjust(sign=sign, magnitude=magnitude, unit=unit)

    def extract(self, date_string, settings):
        if not isinstance(date_string, str):
            raise TypeError("Input type must be str")

        tokens = self.tokenize(date_string, strict=settings.STRICT_PARSING)
        operations = [self.parse_token(token) for token in tokens]
        logger.debug(f"Extracted {operations} from '{date_string}'")
        return operations


operation_extractor = OperationExtractor()
