"""
Tests for operation extraction and evaluation.
"""

import pytest
from datetime import datetime, timezone
from types import SimpleNamespace

from nowparser.conf import Settings
from nowparser.errors import EvaluationError, InvalidSignError, MissingPrefixError
from nowparser.evaluator import adjust, days_since_sunday, evaluate, round_down
from nowparser.extractor import OperationExtractor, operation_extractor
from nowparser.operations import Adjust, Round, Unit, to_shorthand


NOW = datetime(2020, 6, 12, 13, 20, 17, 486000, tzinfo=timezone.utc)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


# =============================================================================
# Units and operations
# =============================================================================

class TestUnit:
    """Tests for the Unit enum."""

    def test_codes_are_case_sensitive(self):
        assert Unit.from_code("m") is Unit.MINUTE
        assert Unit.from_code("M") is Unit.MONTH

    def test_all_codes(self):
        assert [unit.code for unit in Unit] == ["s", "m", "h", "d", "w", "M", "y"]

    def test_unknown_code(self):
        with pytest.raises(KeyError):
            Unit.from_code("q")


class TestOperations:
    """Tests for Adjust and Round values."""

    def test_signed_value(self):
        assert Adjust(sign="-", magnitude=4, unit=Unit.DAY).signed_value == -4
        assert Adjust(sign="+", magnitude=4, unit=Unit.DAY).signed_value == 4

    def test_tokens(self):
        assert Adjust(sign="+", magnitude=13, unit=Unit.MINUTE).token == "+13m"
        assert Round(unit=Unit.MONTH).token == "/M"

    def test_to_shorthand(self):
        operations = [Adjust("-", 4, Unit.DAY), Round(Unit.HOUR)]
        assert to_shorthand(operations) == "now-4d/h"
        assert to_shorthand([]) == "now"

    def test_invalid_adjust_sign(self):
        with pytest.raises(ValueError):
            Adjust(sign="/", magnitude=1, unit=Unit.DAY)

    def test_operations_are_immutable(self):
        operation = Round(unit=Unit.DAY)
        with pytest.raises(AttributeError):
            operation.unit = Unit.HOUR


# =============================================================================
# Extraction
# =============================================================================

class TestExtractor:
    """Tests for splitting expressions into operations."""

    @pytest.fixture
    def settings(self):
        return Settings()

    def test_extractor_singleton(self):
        assert isinstance(operation_extractor, OperationExtractor)

    def test_tokenize(self):
        tokens = operation_extractor.tokenize("now-4d/h-4h+13m/h")
        assert tokens == ["-4d", "/h", "-4h", "+13m", "/h"]

    def test_tokenize_keeps_unsigned_digits(self):
        assert operation_extractor.tokenize("now-4d/3h") == ["-4d", "3h"]

    def test_extract(self, settings):
        operations = operation_extractor.extract("now-4d/h+13m", settings)
        assert operations == [
            Adjust(sign="-", magnitude=4, unit=Unit.DAY),
            Round(unit=Unit.HOUR),
            Adjust(sign="+", magnitude=13, unit=Unit.MINUTE),
        ]

    def test_extract_minutes_and_months(self, settings):
        operations = operation_extractor.extract("now-10M+5m", settings)
        assert [op.unit for op in operations] == [Unit.MONTH, Unit.MINUTE]

    def test_extract_nothing(self, settings):
        assert operation_extractor.extract("now", settings) == []

    def test_multi_digit_magnitude(self, settings):
        operations = operation_extractor.extract("now+120s", settings)
        assert operations == [Adjust(sign="+", magnitude=120, unit=Unit.SECOND)]

    def test_missing_magnitude_defaults_to_one(self):
        """Test a signed token without digits is read as magnitude 1."""
        assert operation_extractor.parse_token("+d") == Adjust(sign="+", magnitude=1, unit=Unit.DAY)

    def test_round_token(self):
        assert operation_extractor.parse_token("/w") == Round(unit=Unit.WEEK)

    def test_invalid_sign(self):
        with pytest.raises(InvalidSignError, match="Invalid sign in operation '3h'"):
            operation_extractor.parse_token("3h")

    def test_missing_prefix(self, settings):
        with pytest.raises(MissingPrefixError):
            operation_extractor.extract(" now-1d", settings)


# =============================================================================
# Evaluation
# =============================================================================

class TestRoundDown:
    """Tests for snapping to the start of a unit."""

    @pytest.mark.parametrize("unit, expected", [
        (Unit.SECOND, utc(2020, 6, 12, 13, 20, 17)),
        (Unit.MINUTE, utc(2020, 6, 12, 13, 20)),
        (Unit.HOUR, utc(2020, 6, 12, 13)),
        (Unit.DAY, utc(2020, 6, 12)),
        (Unit.WEEK, utc(2020, 6, 7)),
        (Unit.MONTH, utc(2020, 6, 1)),
        (Unit.YEAR, utc(2020, 1, 1)),
    ])
    def test_round_down(self, unit, expected):
        assert round_down(NOW, unit) == expected

    def test_sunday_rounds_to_itself(self):
        sunday = utc(2020, 6, 7, 18, 45)
        assert round_down(sunday, Unit.WEEK) == utc(2020, 6, 7)

    def test_week_across_month_boundary(self):
        assert round_down(utc(2020, 7, 2, 9), Unit.WEEK) == utc(2020, 6, 28)

    def test_days_since_sunday(self):
        assert days_since_sunday(utc(2020, 6, 7)) == 0
        assert days_since_sunday(utc(2020, 6, 12)) == 5
        assert days_since_sunday(utc(2020, 6, 13)) == 6

    def test_unknown_unit(self):
        with pytest.raises(EvaluationError):
            round_down(NOW, "q")


class TestAdjust:
    """Tests for calendar-aware adjustment."""

    def test_month_overflow_clamps(self):
        result = adjust(utc(2021, 1, 31), Adjust("+", 1, Unit.MONTH))
        assert result == utc(2021, 2, 28)

    def test_month_carries_into_year(self):
        result = adjust(utc(2020, 11, 15), Adjust("+", 3, Unit.MONTH))
        assert result == utc(2021, 2, 15)

    def test_week(self):
        assert adjust(NOW, Adjust("-", 1, Unit.WEEK)) == utc(2020, 6, 5, 13, 20, 17, 486000)

    def test_unknown_unit(self):
        operation = SimpleNamespace(signed_value=1, unit="q")
        with pytest.raises(EvaluationError):
            adjust(NOW, operation)


class TestEvaluate:
    """Tests for applying operation sequences."""

    def test_empty_sequence(self):
        assert evaluate([], NOW) == NOW

    def test_sequence_is_applied_in_order(self):
        operations = [Adjust("-", 4, Unit.DAY), Round(Unit.HOUR), Adjust("-", 4, Unit.HOUR)]
        assert evaluate(operations, NOW) == utc(2020, 6, 8, 9)

    def test_base_is_not_modified(self):
        base = NOW
        evaluate([Round(Unit.YEAR)], base)
        assert base == utc(2020, 6, 12, 13, 20, 17, 486000)

    def test_unknown_operation(self):
        with pytest.raises(EvaluationError):
            evaluate(["-4d"], NOW)

    def test_evaluation_error_is_not_a_format_error(self):
        assert not issubclass(EvaluationError, ValueError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
