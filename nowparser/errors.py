class FormatError(ValueError):
    """Raised when a shorthand date string cannot be parsed."""


class MissingPrefixError(FormatError):
    def __init__(self, date_string):
        self.date_string = date_string
        super().__init__("Invalid date string: Must start with 'now'.")


class InvalidSignError(FormatError):
    def __init__(self, token):
        self.token = token
        super().__init__("Invalid sign in operation '{}'".format(token))


class UnmatchedTextError(FormatError):
    """Raised under ``STRICT_PARSING`` when characters match no operation."""

    def __init__(self, date_string, unmatched):
        self.date_string = date_string
        self.unmatched = unmatched
        super().__init__(
            "Unrecognized text {!r} in date string {!r}".format(unmatched, date_string)
        )


class EvaluationError(RuntimeError):
    """An operation reached the evaluator with a unit or type it cannot apply."""


class OutOfRangeError(FormatError):
    """Raised when an operation moves the date outside the supported calendar range."""

    def __init__(self, token):
        self.token = token
        super().__init__("Operation '{}' is out of the supported date range".format(token))
