"""Solve result data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, computed_field

from refi_optimizer.domain.models.parameters import Parameters


class SolveLabel(str, Enum):
    """Which path produced the selection."""

    FEASIBLE_EXACT = "FEASIBLE_EXACT"
    INFEASIBLE_MAX_CASH = "INFEASIBLE_MAX_CASH"


class MinCostOutcome(BaseModel):
    """Output of the minimum-cost selector."""

    feasible: bool
    selection: list[int]
    total_cost: float = 0.0


class MaxCashOutcome(BaseModel):
    """Output of the maximum-cash selector."""

    max_cash: float
    selection: list[int]
    exposure_bucket: int = 0


class RefinanceResult(BaseModel):
    """Structured result of a refinance solve.

    `selection[i] == 1` means loan i is closed out of the new principal.
    """

    feasible: bool
    selection: list[int] = Field(..., description="0/1 per input loan, same order")
    label: SolveLabel
    achieved_cash: float = Field(..., description="Requested cash if feasible, else max achievable")
    total_payoff: float = Field(default=0.0, ge=0, description="Sum of principals of closed loans in €")
    parameters: Parameters | None = Field(None, description="Derived quantities used by the solve")

    @computed_field
    @property
    def closed_loan_count(self) -> int:
        """Number of loans selected for closure."""
        return sum(self.selection)

    def selection_string(self) -> str:
        """Space separated 0/1 vector."""
        return " ".join(str(x) for x in self.selection)
