"""Domain models for refi_optimizer."""

from .loan import Loan, LoanTerms, loans_from_columns
from .parameters import Parameters
from .result import MaxCashOutcome, MinCostOutcome, RefinanceResult, SolveLabel

__all__ = [
    "Loan",
    "LoanTerms",
    "loans_from_columns",
    "Parameters",
    "MinCostOutcome",
    "MaxCashOutcome",
    "RefinanceResult",
    "SolveLabel",
]
