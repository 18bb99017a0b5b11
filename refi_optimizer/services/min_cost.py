"""Minimum-cost selector.

Finds the cheapest set of loans to close (by total payoff) whose combined net
benefit reaches the value target without exceeding the external exposure
budget. 0/1 knapsack over two discretized resources:

    DP[e, v] = minimal payoff reaching exposure bucket e and value bucket v

Discretization rounds every gain up to whole buckets, so resource use is
never undercounted. Value gains beyond the top bucket saturate into it.
"""

from __future__ import annotations

import math

import numpy as np

from refi_optimizer.core.exceptions import InvariantViolationError, TableSizeError
from refi_optimizer.core.financial import to_bucket
from refi_optimizer.core.logging import get_logger
from refi_optimizer.domain.models.parameters import Parameters
from refi_optimizer.domain.models.result import MinCostOutcome
from refi_optimizer.services.reconstructor import ParentLink, backtrack, to_selection

log = get_logger(__name__)

# One parent record per (loan layer, exposure bucket, value bucket); -1 = not reached via this loan
PARENT_DTYPE = np.dtype([("from_exposure", np.int32), ("from_value", np.int32)])


class MinCostSelector:
    """2D DP selector for the exact cash target.

    Attributes:
        max_table_cells: Upper bound on DP plus parent arena cells
    """

    def __init__(self, max_table_cells: int = 50_000_000):
        self.max_table_cells = max_table_cells

    def select(self, params: Parameters) -> MinCostOutcome:
        """Cheapest closure set reaching params.target_value.

        Args:
            params: Derived solve parameters

        Returns:
            MinCostOutcome; infeasible when no cell reaches the target.

        Raises:
            TableSizeError: If the grid would exceed max_table_cells.
        """
        n = params.loan_count

        if params.target_value <= 0:
            log.debug("min_cost_no_closures_needed", target_value=round(params.target_value, 2))
            return MinCostOutcome(feasible=True, selection=[0] * n)

        if params.external_headroom < 0:
            log.debug("min_cost_no_headroom", external_headroom=round(params.external_headroom, 2))
            return MinCostOutcome(feasible=False, selection=[0] * n)

        candidates = [i for i in range(n) if params.net_benefit[i] > 0]
        e_max = to_bucket(params.external_headroom, params.delta_exposure)
        v_max = to_bucket(params.positive_net_benefit_total, params.delta_value)
        t_idx = to_bucket(params.target_value, params.delta_value)

        if t_idx > v_max:
            return MinCostOutcome(feasible=False, selection=[0] * n)

        cells = (e_max + 1) * (v_max + 1) * (len(candidates) + 1)
        if cells > self.max_table_cells:
            raise TableSizeError("min-cost", cells, self.max_table_cells)

        dp = np.full((e_max + 1, v_max + 1), np.inf)
        dp[0, 0] = 0.0
        arena = np.empty((len(candidates), e_max + 1, v_max + 1), dtype=PARENT_DTYPE)
        arena["from_exposure"] = -1
        arena["from_value"] = -1

        e_gains: list[int] = []
        for layer, i in enumerate(candidates):
            v_gain = max(1, to_bucket(params.net_benefit[i], params.delta_value))
            e_gain = 0 if params.is_in_bank[i] else to_bucket(params.remaining_principal[i], params.delta_exposure)
            e_gains.append(e_gain)
            self._relax(dp, arena[layer], v_gain, e_gain, params.remaining_principal[i])

        # Lowest cost with v >= t_idx; argmin scans e outer, v inner and keeps the first minimum
        qualifying = dp[:, t_idx:]
        flat = int(np.argmin(qualifying))
        best_e, offset = divmod(flat, qualifying.shape[1])
        best_v = t_idx + offset
        best_cost = float(dp[best_e, best_v])

        if not math.isfinite(best_cost):
            log.debug("min_cost_infeasible", e_max=e_max, v_max=v_max, t_idx=t_idx)
            return MinCostOutcome(feasible=False, selection=[0] * n)

        def parent_of(state: tuple[int, int, int]):
            upper, e, v = state
            for layer in range(upper - 1, -1, -1):
                record = arena[layer, e, v]
                if record["from_value"] >= 0:
                    link = ParentLink(int(record["from_exposure"]), int(record["from_value"]), candidates[layer])
                    return link, (layer, link.from_exposure_bucket, link.from_value_bucket)
            return None

        indices = backtrack(
            (len(candidates), best_e, best_v),
            parent_of,
            lambda state: state[1] == 0 and state[2] == 0,
            max_steps=len(candidates),
        )

        total = sum(params.remaining_principal[i] for i in indices)
        if not math.isclose(total, best_cost, rel_tol=1e-9, abs_tol=1e-6):
            raise InvariantViolationError(
                f"Reconstructed payoff {total} does not match DP cost {best_cost}"
            )

        log.debug(
            "min_cost_solved",
            cost=round(best_cost, 2),
            exposure_bucket=best_e,
            value_bucket=best_v,
            closures=len(indices),
        )
        return MinCostOutcome(feasible=True, selection=to_selection(indices, n), total_cost=best_cost)

    @staticmethod
    def _relax(dp: np.ndarray, links: np.ndarray, v_gain: int, e_gain: int, cost: float) -> None:
        """Apply one loan to the table in place (each loan used at most once).

        Every new state is computed from the pre-loan snapshot, which is what
        a reverse-order scan over both dimensions achieves.
        """
        e_max, v_max = dp.shape[0] - 1, dp.shape[1] - 1
        if e_gain > e_max:
            return

        rows = e_max + 1 - e_gain
        source = dp[:rows] + cost
        target = dp[e_gain:]
        target_links = links[e_gain:]

        # Moves that stay below the top value bucket
        width = v_max - v_gain
        if width > 0:
            block = target[:, v_gain:v_max]
            improved = source[:, :width] < block
            src_e, src_v = np.nonzero(improved)
            block[src_e, src_v] = source[src_e, src_v]
            block_links = target_links[:, v_gain:v_max]
            block_links["from_exposure"][src_e, src_v] = src_e
            block_links["from_value"][src_e, src_v] = src_v

        # Saturating moves: v + v_gain >= v_max all land in the top bucket.
        # Among equal costs the highest source bucket wins.
        tail = source[:, v_max - v_gain:][:, ::-1]
        pick = np.argmin(tail, axis=1)
        best = tail[np.arange(rows), pick]
        src_e = np.nonzero(best < target[:, v_max])[0]
        target[src_e, v_max] = best[src_e]
        target_links["from_exposure"][src_e, v_max] = src_e
        target_links["from_value"][src_e, v_max] = v_max - pick[src_e]
