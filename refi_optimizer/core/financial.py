"""Financial calculation functions.

Annuity and discretization primitives shared by the deriver and DP selectors.
"""

from __future__ import annotations

import math

import numpy_financial as npf

from refi_optimizer.core.exceptions import InvalidParameterError


def annuity_factor(annual_rate: float, term_months: int) -> float:
    """Principal that one unit of monthly payment repays over the term.

    k = (1 - (1 + r)^-n) / r with r = annual_rate / 12.

    Args:
        annual_rate: Annual interest rate as a fraction (e.g., 0.07 for 7%)
        term_months: Loan term in months

    Returns:
        Annuity factor k (equals term_months when the rate is zero)
    """
    monthly_rate = annual_rate / 12.0

    if monthly_rate == 0:
        return float(term_months)

    return float(npf.pv(monthly_rate, term_months, -1.0))


def to_bucket(amount: float, delta: float) -> int:
    """Map an amount to its discretization bucket, rounding up.

    Negative amounts map to bucket 0.

    Raises:
        InvalidParameterError: If amount / delta is not a finite bucket count.
    """
    if amount <= 0:
        return 0
    ratio = amount / delta
    if not math.isfinite(ratio):
        raise InvalidParameterError("delta", delta, f"{amount} / {delta} is not a finite bucket count")
    return int(math.ceil(ratio))
