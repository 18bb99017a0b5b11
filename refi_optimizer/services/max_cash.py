"""Maximum-cash selector.

Used when the requested cash cannot be reached. In-bank loans with positive
net benefit add value without using the exposure budget (WB); external loans
compete for it in a 1D knapsack:

    W[e] = max external net benefit using at most e exposure buckets

Cash at bucket e is bounded by two ceilings, annuity capacity and remaining
exposure (paid-out cash counts against exposure one for one):

    X(e) = min(baseline + WB + W[e], headroom - e * delta_exposure)

and the best bucket gives X_max.
"""

from __future__ import annotations

import numpy as np

from refi_optimizer.core.exceptions import TableSizeError
from refi_optimizer.core.financial import to_bucket
from refi_optimizer.core.logging import get_logger
from refi_optimizer.domain.models.parameters import Parameters
from refi_optimizer.domain.models.result import MaxCashOutcome
from refi_optimizer.services.reconstructor import PredecessorLink, backtrack, to_selection

log = get_logger(__name__)


class MaxCashSelector:
    """1D DP + envelope selector for the largest achievable cash.

    Attributes:
        include_in_bank_beneficial: Also mark in-bank loans with positive net
            benefit as closed. They are part of WB either way.
        max_table_cells: Upper bound on DP plus predecessor cells
    """

    def __init__(self, include_in_bank_beneficial: bool = False, max_table_cells: int = 50_000_000):
        self.include_in_bank_beneficial = include_in_bank_beneficial
        self.max_table_cells = max_table_cells

    def select(self, params: Parameters) -> MaxCashOutcome:
        """Largest achievable cash and the closures that reach it.

        Raises:
            TableSizeError: If the grid would exceed max_table_cells.
        """
        n = params.loan_count
        w = params.net_benefit

        externals = [i for i in range(n) if not params.is_in_bank[i] and w[i] > 0]
        e_cap = to_bucket(params.exposure_headroom, params.delta_exposure)

        cells = (e_cap + 1) * (len(externals) + 1)
        if cells > self.max_table_cells:
            raise TableSizeError("max-cash", cells, self.max_table_cells)

        best = np.zeros(e_cap + 1)
        taken = np.zeros((len(externals), e_cap + 1), dtype=bool)
        costs: list[int] = []

        for layer, i in enumerate(externals):
            cost = to_bucket(params.remaining_principal[i], params.delta_exposure)
            costs.append(cost)
            if cost > e_cap:
                continue
            # Computed from the pre-loan values, so each loan is used at most once
            candidate = best[: e_cap + 1 - cost] + w[i]
            improved = candidate > best[cost:]
            best[cost:][improved] = candidate[improved]
            taken[layer, cost:][improved] = True

        # Envelope of the two cash ceilings
        buckets = np.arange(e_cap + 1)
        capacity_ceiling = params.baseline_capacity + params.in_bank_benefit_total + best
        exposure_ceiling = params.exposure_headroom - buckets * params.delta_exposure
        achievable = np.minimum(capacity_ceiling, exposure_ceiling)

        # First bucket with the highest strictly positive cash; none -> nothing to pay out
        arg_e = int(np.argmax(achievable))
        x_max = float(achievable[arg_e])
        if x_max <= 0:
            x_max, arg_e = 0.0, 0

        def last_layer(state: tuple[int, int]) -> int | None:
            upper, e = state
            for layer in range(upper - 1, -1, -1):
                if taken[layer, e]:
                    return layer
            return None

        def parent_of(state: tuple[int, int]):
            layer = last_layer(state)
            if layer is None:
                return None
            link = PredecessorLink(state[1] - costs[layer], externals[layer])
            return link, (layer, link.from_exposure_bucket)

        indices = backtrack(
            (len(externals), arg_e),
            parent_of,
            lambda state: last_layer(state) is None,
            max_steps=len(externals),
        )
        selection = to_selection(indices, n)

        if self.include_in_bank_beneficial:
            for i in range(n):
                if params.is_in_bank[i] and w[i] > 0:
                    selection[i] = 1

        log.debug(
            "max_cash_solved",
            max_cash=round(x_max, 2),
            exposure_bucket=arg_e,
            external_closures=len(indices),
            in_bank_benefit=round(params.in_bank_benefit_total, 2),
        )
        return MaxCashOutcome(max_cash=x_max, selection=selection, exposure_bucket=arg_e)
