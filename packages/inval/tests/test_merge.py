"""Tests for combining inputs with the + operator."""

import pytest

from dataknobs_inval import IdOf, Input, InputMerge, UnsupportedInputError, rule


class TestInputMerge:
    """Test exhaustive validation of merged inputs."""

    def test_plus_builds_merge(self, passing):
        """Test adding two inputs gives a merge of both."""
        first = Input("a", 1, passing)
        second = Input("b", 2, passing)
        merged = first + second
        assert isinstance(merged, InputMerge)
        assert merged.leaves == [first, second]

    def test_success_lists_values(self, passing):
        """Test a passing merge lists both values."""
        result = (Input("a", 1, passing) + Input("b", "two", passing))()
        assert result.valid
        assert result.value == [1, "two"]

    def test_nested_merges_flatten(self, passing):
        """Test values follow leaf order however merges are nested."""
        left = Input(1, "a", passing) + Input(2, 1, passing)
        middle = Input(3, "b", passing)
        right = Input(4, 2, passing) + Input(5, "c", passing) + Input(6, 3, passing)
        merged = (left + middle) + right
        assert merged().value == ["a", 1, "b", 2, "c", 3]
        assert [str(leaf.id) for leaf in merged.leaves] == ["1", "2", "3", "4", "5", "6"]

    def test_failures_accumulate(self, failing):
        """Test violations of both sides are reported in order."""
        result = (Input(1, 1, failing) + Input(2, 2, failing))()
        assert not result.valid
        assert [v.id for v in result.violations] == [IdOf(1), IdOf(2)]

    def test_one_side_failing(self, passing, failing):
        """Test a single failing side fails the merge."""
        result = (Input(1, 1, passing) + Input(2, 2, failing))()
        assert not result.valid
        assert result.value is None
        assert [v.id for v in result.violations] == [IdOf(2)]

    def test_right_side_evaluated_after_left_failure(self, marker, calls):
        """Test merges never short-circuit."""
        merged = Input(1, 1, marker("a", fail=True)) + Input(2, 2, marker("b", fail=True))
        result = merged()
        assert calls == ["a", "b"]
        assert [v.message for v in result.violations] == ["a failed", "b failed"]

    def test_nested_failure_order(self):
        """Test nested failing leaves keep declaration order."""
        bad = rule(lambda check, value: check.error(str(value)))
        merged = Input("x", 1, bad) + (Input("y", 2, bad) + Input("z", 3, bad))
        assert [str(v) for v in merged().violations] == ["x: 1", "y: 2", "z: 3"]

    def test_unsupported_operand(self, passing):
        """Test only inputs and merges can be added."""
        bound = Input(1, 1, passing)
        with pytest.raises(UnsupportedInputError):
            bound + 0
        with pytest.raises(UnsupportedInputError):
            0 + bound
        with pytest.raises(TypeError):
            bound + "text"

    def test_unsupported_operand_on_merge(self, passing):
        """Test merges reject foreign operands too."""
        merged = Input(1, 1, passing) + Input(2, 2, passing)
        with pytest.raises(UnsupportedInputError):
            merged + [1]

    def test_run_validations(self, failing):
        """Test run_validations matches calling the merge."""
        merged = Input(1, 1, failing) + Input(2, 2, failing)
        assert merged.run_validations() == merged()
