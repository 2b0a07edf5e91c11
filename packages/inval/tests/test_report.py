"""Tests for violations, reports and the report builder."""

import pickle

import pytest

from dataknobs_inval import (
    IdOf,
    InvalError,
    ReportBuilder,
    RuleContractError,
    UsageError,
    ValidationError,
    Violation,
)


class TestViolation:
    """Test single violations."""

    def test_renders_id_and_message(self):
        """Test str() renders 'id: message'."""
        assert str(Violation(IdOf("email"), "Not a valid email.")) == "email: Not a valid email."

    def test_to_dict(self):
        """Test dictionary form."""
        assert Violation(IdOf(1), "error").to_dict() == {"id": "1", "message": "error"}


class TestValidationError:
    """Test the violation report."""

    def test_single_violation(self):
        """Test creating a report with one violation."""
        error = ValidationError.of(1, "error")
        assert error.violations == (Violation(IdOf(1), "error"),)
        assert len(error) == 1

    def test_renders_one_violation_per_line(self):
        """Test str() renders every violation on its own line."""
        error = ValidationError([Violation(IdOf(1), "error#1"), Violation(IdOf(1), "error#2")])
        assert str(error) == "1: error#1\n1: error#2"

    def test_empty_report_rejected(self):
        """Test a report cannot be empty."""
        with pytest.raises(UsageError):
            ValidationError([])

    def test_structural_equality(self):
        """Test reports with the same violations are equal."""
        assert ValidationError.of("a", "x") == ValidationError.of("a", "x")
        assert ValidationError.of("a", "x") != ValidationError.of("a", "y")
        assert hash(ValidationError.of("a", "x")) == hash(ValidationError.of("a", "x"))

    def test_ids_and_messages(self):
        """Test lookups by identifier."""
        error = ValidationError(
            [
                Violation(IdOf("name"), "required"),
                Violation(IdOf("age"), "too young"),
                Violation(IdOf("name"), "too short"),
            ]
        )
        assert error.ids == [IdOf("name"), IdOf("age")]
        assert error.messages_for("name") == ["required", "too short"]
        assert error.messages_for(IdOf("age")) == ["too young"]
        assert error.messages_for("missing") == []

    def test_to_dict_and_context(self):
        """Test dictionary form and exception context."""
        error = ValidationError.of("email", "invalid")
        expected = [{"id": "email", "message": "invalid"}]
        assert error.to_dict() == {"violations": expected}
        assert error.context == {"violations": expected}

    def test_is_package_error(self):
        """Test the report can be raised and caught as the package base error."""
        with pytest.raises(InvalError):
            raise ValidationError.of("a", "b")

    def test_iterable(self):
        """Test iterating yields violations in order."""
        error = ValidationError([Violation(IdOf(1), "a"), Violation(IdOf(2), "b")])
        assert [v.message for v in error] == ["a", "b"]

    def test_pickle(self):
        """Test reports survive pickling."""
        error = ValidationError.of("a", "b")
        assert pickle.loads(pickle.dumps(error)) == error


class TestReportBuilder:
    """Test accumulating violations."""

    def test_build(self):
        """Test building from added violations."""
        error = ReportBuilder().add(1, "error#1").add(1, "error#2").build()
        assert error.violations == (
            Violation(IdOf(1), "error#1"),
            Violation(IdOf(1), "error#2"),
        )

    def test_extend_keeps_order(self):
        """Test extending appends another report's violations in order."""
        builder = ReportBuilder().add("a", "first")
        builder.extend(ValidationError([Violation(IdOf("b"), "second"), Violation(IdOf("c"), "third")]))
        assert [str(v) for v in builder.build()] == ["a: first", "b: second", "c: third"]
        assert len(builder) == 3

    def test_extend_rejects_other_errors(self):
        """Test only reports can be merged into a builder."""
        with pytest.raises(RuleContractError) as info:
            ReportBuilder().extend(RuntimeError("boom"))
        assert isinstance(info.value.__cause__, RuntimeError)

    def test_build_result_failure(self):
        """Test non-empty builders produce failures."""
        result = ReportBuilder().add(1, "error#1").add(1, "error#2").build_result("foo")
        assert result.valid is False
        assert len(result.violations) == 2

    def test_build_result_success(self):
        """Test empty builders produce success."""
        result = ReportBuilder().build_result("foo")
        assert result.valid is True
        assert result.value == "foo"

    def test_build_result_with_supplier(self):
        """Test the supplier only runs on success."""
        assert ReportBuilder().build_result_with(lambda: "foo").value == "foo"

        def explode():
            raise AssertionError("supplier must not run")

        result = ReportBuilder().add(1, "x").build_result_with(explode)
        assert result.valid is False

    def test_empty_build_rejected(self):
        """Test building an empty report is a usage error."""
        builder = ReportBuilder()
        assert builder.is_empty
        with pytest.raises(UsageError):
            builder.build()
