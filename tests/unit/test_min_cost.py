"""Unit tests for refi_optimizer.services.min_cost module.

All cases use a zero rate over 10 months (k = 10) and 10 € buckets, so the
bucket arithmetic can be checked by hand.
"""

import pytest

from refi_optimizer.core.exceptions import TableSizeError
from refi_optimizer.domain.models.loan import LoanTerms, loans_from_columns
from refi_optimizer.services.deriver import derive_parameters
from refi_optimizer.services.min_cost import MinCostSelector


def _terms(requested_cash, exposure_cap, max_monthly_annuity=75.0, step=10.0):
    return LoanTerms(
        max_monthly_annuity=max_monthly_annuity,
        annual_rate=0.0,
        term_months=10,
        requested_cash=requested_cash,
        exposure_cap=exposure_cap,
        delta_value=step,
        delta_exposure=step,
    )


class TestTrivialCases:

    def test_target_already_covered(self, small_loans):
        """Baseline capacity covers the cash: nothing to close."""
        params = derive_parameters(small_loans, _terms(500.0, 10_000.0, max_monthly_annuity=200.0))
        assert params.target_value <= 0
        outcome = MinCostSelector().select(params)
        assert outcome.feasible
        assert outcome.selection == [0, 0, 0]
        assert outcome.total_cost == 0.0

    def test_no_external_headroom(self, small_loans):
        """Cash alone exceeds the spendable exposure room."""
        params = derive_parameters(small_loans, _terms(300.0, 300.0))
        assert params.external_headroom < 0
        outcome = MinCostSelector().select(params)
        assert not outcome.feasible
        assert outcome.selection == [0, 0, 0]


class TestSelection:
    """Net benefits 200 / 150 / 170 (last one in-bank), principals 100 / 50 / 80."""

    def test_cheapest_pair(self, small_loans, small_terms):
        """Cash 300: B+C (cost 130) beats A+B (150), A+C (180) and all (230)."""
        outcome = MinCostSelector().select(derive_parameters(small_loans, small_terms))
        assert outcome.feasible
        assert outcome.selection == [0, 1, 1]
        assert outcome.total_cost == pytest.approx(130.0)

    def test_single_loan_enough(self, small_loans):
        """Cash 160: C alone (170, cost 80) beats A alone (200, cost 100)."""
        outcome = MinCostSelector().select(derive_parameters(small_loans, _terms(160.0, 1000.0)))
        assert outcome.selection == [0, 0, 1]
        assert outcome.total_cost == pytest.approx(80.0)

    def test_exposure_budget_blocks_external(self, small_loans):
        """40 € external room (4 buckets) cannot hold B (5 buckets)."""
        params = derive_parameters(small_loans, _terms(300.0, 80.0 + 300.0 + 40.0))
        outcome = MinCostSelector().select(params)
        assert not outcome.feasible

    def test_exposure_budget_just_fits(self, small_loans):
        params = derive_parameters(small_loans, _terms(300.0, 80.0 + 300.0 + 50.0))
        outcome = MinCostSelector().select(params)
        assert outcome.feasible
        assert outcome.selection == [0, 1, 1]

    def test_in_bank_uses_no_exposure(self):
        """With zero external room only the in-bank loan can be closed."""
        loans = loans_from_columns([100.0, 100.0], [30.0, 30.0], [0, 1])
        params = derive_parameters(loans, _terms(150.0, 100.0 + 150.0, max_monthly_annuity=60.0))
        assert params.external_headroom == 0.0
        outcome = MinCostSelector().select(params)
        assert outcome.selection == [0, 1]

    def test_negative_benefit_never_selected(self):
        """A loan that frees less capacity than it costs is not a candidate."""
        loans = loans_from_columns([100.0, 500.0], [30.0, 10.0], [0, 0])
        params = derive_parameters(loans, _terms(150.0, 10_000.0, max_monthly_annuity=40.0))
        assert params.net_benefit[1] < 0
        outcome = MinCostSelector().select(params)
        assert outcome.selection == [1, 0]

    def test_unreachable_target(self, small_loans):
        outcome = MinCostSelector().select(derive_parameters(small_loans, _terms(600.0, 10_000.0)))
        assert not outcome.feasible


class TestTieBreaking:

    def test_identical_loans_pick_first(self):
        """Equal cost and buckets: the first loan keeps the cell."""
        loans = loans_from_columns([100.0, 100.0], [30.0, 30.0], [0, 0])
        params = derive_parameters(loans, _terms(150.0, 10_000.0, max_monthly_annuity=60.0))
        assert MinCostSelector().select(params).selection == [1, 0]

    def test_lowest_exposure_bucket_wins(self):
        """Same cost and value: the in-bank loan sits in exposure bucket 0."""
        loans = loans_from_columns([100.0, 100.0], [30.0, 30.0], [0, 1])
        params = derive_parameters(loans, _terms(150.0, 10_000.0, max_monthly_annuity=60.0))
        assert MinCostSelector().select(params).selection == [0, 1]

    def test_repeatable(self, sample_loans, sample_terms):
        params = derive_parameters(sample_loans, sample_terms)
        first = MinCostSelector().select(params)
        second = MinCostSelector().select(params)
        assert first == second


class TestValueSaturation:

    def test_top_bucket_absorbs_excess(self):
        """Benefits 201 / 151 / 171 take 21 + 16 + 18 = 55 buckets, above the
        53 bucket top. Only the full set reaches the 523 target; it lands in
        the saturated top bucket and still qualifies."""
        loans = loans_from_columns([99.0, 49.0, 79.0], [30.0, 20.0, 25.0], [0, 0, 1])
        params = derive_parameters(loans, _terms(523.0, 79.0 + 523.0 + 150.0))
        assert params.positive_net_benefit_total == 523.0
        outcome = MinCostSelector().select(params)
        assert outcome.feasible
        assert outcome.selection == [1, 1, 1]
        assert outcome.total_cost == pytest.approx(227.0)


class TestTableBound:

    def test_oversized_grid_rejected(self, sample_loans, sample_terms):
        params = derive_parameters(sample_loans, sample_terms)
        with pytest.raises(TableSizeError) as exc:
            MinCostSelector(max_table_cells=1000).select(params)
        assert exc.value.limit == 1000
        assert exc.value.cells > 1000
