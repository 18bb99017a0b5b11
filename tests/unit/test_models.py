"""Unit tests for refi_optimizer.domain.models Pydantic models."""

import pytest
from pydantic import ValidationError

from refi_optimizer.core.exceptions import ConfigurationError, InvalidParameterError
from refi_optimizer.domain.models import (
    Loan,
    LoanTerms,
    RefinanceResult,
    SolveLabel,
    loans_from_columns,
)


class TestLoan:
    """Tests for Loan Pydantic model."""

    def test_valid_loan(self):
        loan = Loan(remaining_principal=3500, monthly_annuity=350, is_in_bank=True)
        assert loan.remaining_principal == 3500.0
        assert loan.is_in_bank is True
        assert loan.name is None

    def test_defaults_to_external(self):
        loan = Loan(remaining_principal=100, monthly_annuity=10)
        assert loan.is_in_bank is False

    def test_negative_principal_rejected(self):
        with pytest.raises(ValidationError):
            Loan(remaining_principal=-1, monthly_annuity=10)

    def test_negative_annuity_rejected(self):
        with pytest.raises(ValidationError):
            Loan(remaining_principal=100, monthly_annuity=-10)

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_amounts_rejected(self, value):
        with pytest.raises(ValidationError):
            Loan(remaining_principal=100, monthly_annuity=value)
        with pytest.raises(ValidationError):
            Loan(remaining_principal=value, monthly_annuity=10)

    def test_frozen(self):
        loan = Loan(remaining_principal=100, monthly_annuity=10)
        with pytest.raises(ValidationError):
            loan.remaining_principal = 50


class TestLoansFromColumns:
    """Tests for loans_from_columns builder."""

    def test_builds_in_order(self):
        loans = loans_from_columns([1.0, 2.0], [3.0, 4.0], [0, 1], names=["a", "b"])
        assert [l.remaining_principal for l in loans] == [1.0, 2.0]
        assert [l.is_in_bank for l in loans] == [False, True]
        assert [l.name for l in loans] == ["a", "b"]

    def test_length_mismatch(self):
        with pytest.raises(ConfigurationError, match="differ in length"):
            loans_from_columns([1.0, 2.0], [3.0], [0, 1])

    def test_flag_length_mismatch(self):
        with pytest.raises(ConfigurationError):
            loans_from_columns([1.0], [3.0], [0, 1])

    def test_names_length_mismatch(self):
        with pytest.raises(ConfigurationError):
            loans_from_columns([1.0], [3.0], [0], names=["a", "b"])

    def test_invalid_value_becomes_configuration_error(self):
        with pytest.raises(InvalidParameterError) as exc:
            loans_from_columns([1.0, -5.0], [3.0, 4.0], [0, 0])
        assert exc.value.param_name == "loans[1]"

    def test_infinite_annuity_becomes_configuration_error(self):
        with pytest.raises(InvalidParameterError) as exc:
            loans_from_columns([100.0], [float("inf")], [0])
        assert exc.value.param_name == "loans[0]"

    def test_empty_columns(self):
        assert loans_from_columns([], [], []) == []


class TestLoanTerms:
    """Tests for LoanTerms Pydantic model."""

    def test_steps_default_to_unset(self):
        terms = LoanTerms(
            max_monthly_annuity=900, annual_rate=0.07, term_months=59,
            requested_cash=10000, exposure_cap=40000,
        )
        assert terms.delta_value is None
        assert terms.delta_exposure is None

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            LoanTerms(max_monthly_annuity=900, annual_rate=0.07, term_months=59)


class TestRefinanceResult:
    """Tests for RefinanceResult Pydantic model."""

    def test_selection_string(self):
        result = RefinanceResult(
            feasible=True, selection=[1, 1, 0, 0, 1, 1],
            label=SolveLabel.FEASIBLE_EXACT, achieved_cash=10000.0,
        )
        assert result.selection_string() == "1 1 0 0 1 1"
        assert result.closed_loan_count == 4

    def test_label_serializes_as_string(self):
        result = RefinanceResult(
            feasible=False, selection=[0, 0],
            label=SolveLabel.INFEASIBLE_MAX_CASH, achieved_cash=0.0,
        )
        dumped = result.model_dump(mode="json")
        assert dumped["label"] == "INFEASIBLE_MAX_CASH"
        assert dumped["closed_loan_count"] == 0
