"""Parameter derivation service.

Turns raw loans and global terms into the quantities the DP selectors use.
"""

from __future__ import annotations

import math
from typing import Sequence

from refi_optimizer.core.exceptions import InvalidParameterError
from refi_optimizer.core.financial import annuity_factor
from refi_optimizer.core.logging import get_logger
from refi_optimizer.domain.models.loan import Loan, LoanTerms
from refi_optimizer.domain.models.parameters import Parameters

log = get_logger(__name__)


def _validate_terms(terms: LoanTerms) -> None:
    """Reject terms the DP cannot work with."""
    for name in ("max_monthly_annuity", "annual_rate", "requested_cash", "exposure_cap"):
        value = getattr(terms, name)
        if not math.isfinite(value):
            raise InvalidParameterError(name, value, "must be finite")

    if terms.term_months <= 0:
        raise InvalidParameterError("term_months", terms.term_months, "must be positive")
    if terms.annual_rate < 0:
        raise InvalidParameterError("annual_rate", terms.annual_rate, "must not be negative")

    for name in ("delta_value", "delta_exposure"):
        value = getattr(terms, name)
        if value is None or not math.isfinite(value) or value <= 0:
            raise InvalidParameterError(name, value, "discretization step must be positive")


def derive_parameters(loans: Sequence[Loan], terms: LoanTerms) -> Parameters:
    """Compute the solve parameters for a loan portfolio.

    Args:
        loans: Existing loans, in output order
        terms: New loan terms, caps and discretization steps

    Returns:
        Immutable Parameters record

    Raises:
        InvalidParameterError: If the terms are degenerate.
    """
    _validate_terms(terms)

    k = annuity_factor(terms.annual_rate, terms.term_months)
    total_annuity = sum(loan.monthly_annuity for loan in loans)
    baseline_capacity = k * (terms.max_monthly_annuity - total_annuity)

    net_benefit = tuple(k * loan.monthly_annuity - loan.remaining_principal for loan in loans)
    in_bank_exposure = sum(loan.remaining_principal for loan in loans if loan.is_in_bank)
    exposure_headroom = terms.exposure_cap - in_bank_exposure

    params = Parameters(
        requested_cash=terms.requested_cash,
        exposure_cap=terms.exposure_cap,
        delta_value=terms.delta_value,
        delta_exposure=terms.delta_exposure,
        monthly_rate=terms.annual_rate / 12.0,
        annuity_factor=k,
        total_existing_annuity=total_annuity,
        baseline_capacity=baseline_capacity,
        net_benefit=net_benefit,
        remaining_principal=tuple(loan.remaining_principal for loan in loans),
        is_in_bank=tuple(loan.is_in_bank for loan in loans),
        existing_in_bank_exposure=in_bank_exposure,
        exposure_headroom=exposure_headroom,
        target_value=terms.requested_cash - baseline_capacity,
        external_headroom=exposure_headroom - terms.requested_cash,
    )

    log.debug(
        "parameters_derived",
        loans=len(loans),
        annuity_factor=round(k, 6),
        baseline_capacity=round(baseline_capacity, 2),
        target_value=round(params.target_value, 2),
        exposure_headroom=round(exposure_headroom, 2),
    )
    return params
