"""Feasibility pre-check.

Necessary conditions for the requested cash. Failing either one proves the
exact target unreachable, so the solver can skip the 2D DP.
"""

from __future__ import annotations

from refi_optimizer.core.logging import get_logger
from refi_optimizer.domain.models.parameters import Parameters

log = get_logger(__name__)


def passes_precheck(params: Parameters) -> bool:
    """Return False when the requested cash is provably unreachable."""
    capacity_bound = params.baseline_capacity + params.positive_net_benefit_total

    if capacity_bound < params.requested_cash:
        log.debug(
            "precheck_failed",
            reason="annuity_capacity",
            bound=round(capacity_bound, 2),
            requested=params.requested_cash,
        )
        return False

    if params.exposure_headroom < params.requested_cash:
        log.debug(
            "precheck_failed",
            reason="exposure_headroom",
            headroom=round(params.exposure_headroom, 2),
            requested=params.requested_cash,
        )
        return False

    return True
