"""Derived solve parameters.

Every quantity the DP selectors need, computed once per solve from the
loans and terms. Immutable.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class Parameters(BaseModel):
    """Quantities derived from loans and terms for a single solve."""

    # Terms carried through
    requested_cash: float
    exposure_cap: float
    delta_value: float = Field(..., gt=0)
    delta_exposure: float = Field(..., gt=0)

    # Annuity capacity
    monthly_rate: float
    annuity_factor: float = Field(..., gt=0)
    total_existing_annuity: float
    baseline_capacity: float = Field(..., description="Principal obtainable with zero closures")

    # Per-loan data, positionally aligned with the input loans
    net_benefit: tuple[float, ...]
    remaining_principal: tuple[float, ...]
    is_in_bank: tuple[bool, ...]

    # Exposure
    existing_in_bank_exposure: float
    exposure_headroom: float

    # Targets
    target_value: float
    external_headroom: float

    model_config = {
        "frozen": True,
    }

    @computed_field
    @property
    def loan_count(self) -> int:
        """Number of input loans."""
        return len(self.net_benefit)

    @computed_field
    @property
    def positive_net_benefit_total(self) -> float:
        """Sum of net benefit over loans worth closing."""
        return sum(w for w in self.net_benefit if w > 0)

    @computed_field
    @property
    def in_bank_benefit_total(self) -> float:
        """WB: net benefit of beneficial in-bank loans (no exposure budget used)."""
        return sum(
            w for w, in_bank in zip(self.net_benefit, self.is_in_bank)
            if in_bank and w > 0
        )

    @computed_field
    @property
    def external_benefit_total(self) -> float:
        """Net benefit of beneficial external loans."""
        return sum(
            w for w, in_bank in zip(self.net_benefit, self.is_in_bank)
            if not in_bank and w > 0
        )
