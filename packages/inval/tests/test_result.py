"""Tests for ValidationResult."""

import pytest

from dataknobs_inval import IdOf, UsageError, ValidationError, ValidationResult, Violation


class TestValidationResult:
    """Test ValidationResult functionality."""

    def test_success_result(self):
        """Test creating a successful result."""
        result = ValidationResult.success(42)
        assert result.valid is True
        assert result.value == 42
        assert result.error is None
        assert result.violations == ()
        assert bool(result) is True

    def test_failure_result(self):
        """Test creating a failed result."""
        error = ValidationError.of("age", "too young")
        result = ValidationResult.failure(error)
        assert result.valid is False
        assert result.error is error
        assert result.violations == (Violation(IdOf("age"), "too young"),)
        assert bool(result) is False

    def test_get_or_raise(self):
        """Test unwrapping raises the report on failure."""
        assert ValidationResult.success("ok").get_or_raise() == "ok"
        with pytest.raises(ValidationError) as info:
            ValidationResult.failure(ValidationError.of("a", "b")).get_or_raise()
        assert info.value.violations[0].message == "b"

    def test_get_or_none(self):
        """Test unwrapping to None on failure."""
        assert ValidationResult.success(0).get_or_none() == 0
        assert ValidationResult.failure(ValidationError.of("a", "b")).get_or_none() is None

    def test_get_or_raise_without_error(self):
        """Test a failed result with no error is a usage error."""
        with pytest.raises(UsageError):
            ValidationResult(valid=False).get_or_raise()

    def test_map(self):
        """Test map transforms successes only."""
        assert ValidationResult.success(2).map(lambda v: v * 10).value == 20
        failed = ValidationResult.failure(ValidationError.of("a", "b"))
        assert failed.map(lambda v: v * 10) is failed

    def test_flat_map(self):
        """Test chaining result-producing functions."""
        result = ValidationResult.success(2).flat_map(lambda v: ValidationResult.success(v + 1))
        assert result.value == 3
        failed = ValidationResult.failure(ValidationError.of("a", "b"))
        assert failed.flat_map(lambda v: ValidationResult.success(v)) is failed

    def test_callbacks(self):
        """Test on_success and on_failure fire on the matching outcome."""
        seen = []
        ValidationResult.success(1).on_success(seen.append).on_failure(seen.append)
        error = ValidationError.of("a", "b")
        ValidationResult.failure(error).on_success(seen.append).on_failure(seen.append)
        assert seen == [1, error]

    def test_structural_equality(self):
        """Test equal outcomes compare equal."""
        assert ValidationResult.success([1, 2]) == ValidationResult.success([1, 2])
        assert ValidationResult.failure(ValidationError.of("a", "b")) == ValidationResult.failure(
            ValidationError.of("a", "b")
        )
