"""
Tests for the Value Evaluator
=============================
"""

import pytest

from marketplace_messages import CatalogNotFound, FailureKind
from marketplace_messages.validation import SUCCESS, ValueEvaluator, is_missing


@pytest.fixture
def evaluator(catalog):
    return ValueEvaluator(catalog)


class TestScenario:
    """Single integer element 'power' (s1)."""

    def test_valid_value(self, evaluator):
        """A correct integer passes."""
        result = evaluator.evaluate("X", {"s1": 42})
        assert result.ok is True
        assert result.status == SUCCESS

    def test_wrong_type(self, evaluator):
        """A string where an integer is expected fails on type."""
        result = evaluator.evaluate("X", {"s1": "42"})
        assert result.ok is False
        assert result.failure == FailureKind.INVALID_TYPE
        assert result.status == "Type for power (s1) is invalid"

    def test_missing_value(self, evaluator):
        """No value at all fails as missing."""
        result = evaluator.evaluate("X", {})
        assert result.failure == FailureKind.MISSING_VALUE
        assert result.reason == "Value for power (s1) is missing"
        assert result.element.semantic_id == "s1"

    def test_none_values(self, evaluator):
        """A None value set is treated as empty."""
        assert evaluator.evaluate("X", None).failure == FailureKind.MISSING_VALUE

    def test_huge_integer(self, evaluator):
        """Integers beyond float range are checked, not raised on."""
        assert evaluator.evaluate("X", {"s1": 10 ** 400}).ok is True

    def test_zero_counts_as_missing(self, evaluator):
        """Falsy values are missing values."""
        assert evaluator.evaluate("X", {"s1": 0}).failure == FailureKind.MISSING_VALUE


class TestFailFast:
    """Test ordering of diagnostics."""

    def test_first_element_reported(self, evaluator):
        """With everything missing, the first element is reported."""
        result = evaluator.evaluate("drill", {})
        assert result.reason == "Value for depth (d1) is missing"

    def test_stops_at_first_problem(self, evaluator):
        """A later problem is not reported before an earlier one."""
        result = evaluator.evaluate("drill", {"d1": "30"})
        assert result.reason == "Type for depth (d1) is invalid"

    def test_schema_order(self, evaluator):
        """Once depth passes, material is checked next."""
        result = evaluator.evaluate("drill", {"d1": 30})
        assert result.reason == "Value for material (d2) is missing"

    def test_price_not_required(self, evaluator):
        """The price element is not part of the evaluated schema."""
        assert evaluator.evaluate("drill", {"d1": 30, "d2": "steel"}).ok


class TestBooleans:
    """Boolean elements are exempt from the missing check."""

    def test_absent_boolean_passes(self, evaluator):
        """No flag is fine."""
        assert evaluator.evaluate("drill", {"d1": 30, "d2": "steel"}).ok

    def test_false_passes(self, evaluator):
        """False is a present boolean."""
        assert evaluator.evaluate("drill", {"d1": 30, "d2": "steel", "d3": False}).ok

    def test_wrong_typed_boolean_fails(self, evaluator):
        """A non-bool flag fails on type."""
        result = evaluator.evaluate("drill", {"d1": 30, "d2": "steel", "d3": "yes"})
        assert result.reason == "Type for cooling (d3) is invalid"


class TestErrors:
    """Test error propagation."""

    def test_unknown_irdi(self, evaluator):
        """Catalog errors are raised, not returned."""
        with pytest.raises(CatalogNotFound):
            evaluator.evaluate("missing", {})


class TestIsMissing:
    """Test the missing-value check."""

    @pytest.mark.parametrize("value", [None, False, "", 0, 0.0, float("nan")])
    def test_missing(self, value):
        assert is_missing(value) is True

    @pytest.mark.parametrize("value", [True, "x", 1, -1, 0.5, 10 ** 400, {}, []])
    def test_present(self, value):
        assert is_missing(value) is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
