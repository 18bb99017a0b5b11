"""Business logic services."""

from .deriver import derive_parameters
from .max_cash import MaxCashSelector
from .min_cost import MinCostSelector
from .precheck import passes_precheck
from .reconstructor import ParentLink, PredecessorLink, backtrack, to_selection
from .solver import RefinanceSolver, solve

__all__ = [
    "derive_parameters",
    "passes_precheck",
    "MinCostSelector",
    "MaxCashSelector",
    "ParentLink",
    "PredecessorLink",
    "backtrack",
    "to_selection",
    "RefinanceSolver",
    "solve",
]
