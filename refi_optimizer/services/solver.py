"""Refinance solver.

Orchestrates one solve: derive parameters, run the pre-check, try the exact
minimum-cost selection and fall back to the maximum-cash selection.
"""

from __future__ import annotations

from typing import Sequence

from refi_optimizer.core.logging import get_logger
from refi_optimizer.core.settings import SolverSettings, get_settings
from refi_optimizer.domain.models.loan import Loan, LoanTerms
from refi_optimizer.domain.models.parameters import Parameters
from refi_optimizer.domain.models.result import RefinanceResult, SolveLabel
from refi_optimizer.services.deriver import derive_parameters
from refi_optimizer.services.max_cash import MaxCashSelector
from refi_optimizer.services.min_cost import MinCostSelector
from refi_optimizer.services.precheck import passes_precheck

log = get_logger(__name__)


class RefinanceSolver:
    """Chooses which loans to close for a requested cash amount.

    Stateless between calls; every solve allocates and discards its own tables.

    Attributes:
        settings: Solver settings (discretization defaults, table bound)
        include_in_bank_beneficial: Policy flag for the max-cash path
    """

    def __init__(
        self,
        settings: SolverSettings | None = None,
        include_in_bank_beneficial: bool | None = None,
    ):
        self.settings = settings or get_settings()
        if include_in_bank_beneficial is None:
            include_in_bank_beneficial = self.settings.include_in_bank_beneficial
        self.include_in_bank_beneficial = include_in_bank_beneficial

        self.min_cost = MinCostSelector(max_table_cells=self.settings.max_table_cells)
        self.max_cash = MaxCashSelector(
            include_in_bank_beneficial=include_in_bank_beneficial,
            max_table_cells=self.settings.max_table_cells,
        )

    def _with_default_steps(self, terms: LoanTerms) -> LoanTerms:
        updates = {}
        if terms.delta_value is None:
            updates["delta_value"] = self.settings.default_delta_value
        if terms.delta_exposure is None:
            updates["delta_exposure"] = self.settings.default_delta_exposure
        return terms.model_copy(update=updates) if updates else terms

    def solve(self, loans: Sequence[Loan], terms: LoanTerms) -> RefinanceResult:
        """Run a full solve.

        Args:
            loans: Existing loans; the selection follows their order
            terms: New loan terms and caps

        Returns:
            RefinanceResult labelled FEASIBLE_EXACT or INFEASIBLE_MAX_CASH

        Raises:
            ConfigurationError: On invalid terms or an oversized DP grid.
        """
        params = derive_parameters(loans, self._with_default_steps(terms))

        if passes_precheck(params):
            outcome = self.min_cost.select(params)
            if outcome.feasible:
                return self._finish(
                    params,
                    feasible=True,
                    selection=outcome.selection,
                    label=SolveLabel.FEASIBLE_EXACT,
                    achieved_cash=params.requested_cash,
                )
            log.info("exact_target_unreachable", requested_cash=params.requested_cash)

        fallback = self.max_cash.select(params)
        return self._finish(
            params,
            feasible=False,
            selection=fallback.selection,
            label=SolveLabel.INFEASIBLE_MAX_CASH,
            achieved_cash=fallback.max_cash,
        )

    def _finish(
        self,
        params: Parameters,
        feasible: bool,
        selection: list[int],
        label: SolveLabel,
        achieved_cash: float,
    ) -> RefinanceResult:
        total_payoff = sum(p for p, s in zip(params.remaining_principal, selection) if s)
        result = RefinanceResult(
            feasible=feasible,
            selection=selection,
            label=label,
            achieved_cash=achieved_cash,
            total_payoff=total_payoff,
            parameters=params,
        )
        log.info(
            "solve_finished",
            label=label.value,
            achieved_cash=round(achieved_cash, 2),
            closures=result.closed_loan_count,
            total_payoff=round(total_payoff, 2),
        )
        return result


def solve(
    loans: Sequence[Loan],
    terms: LoanTerms,
    settings: SolverSettings | None = None,
    include_in_bank_beneficial: bool | None = None,
) -> RefinanceResult:
    """Solve with a fresh RefinanceSolver."""
    return RefinanceSolver(settings, include_in_bank_beneficial).solve(loans, terms)
