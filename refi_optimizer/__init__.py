"""
refi_optimizer - Loan Refinancing Selection Engine

Chooses which existing loans a client should close so that a requested cash
amount fits under both the monthly payment cap and the bank exposure cap.

Modules:
    - core: Exceptions, logging, settings and financial primitives
    - domain: Pydantic data models for loans, derived parameters and results
    - services: Parameter derivation, pre-check, DP selectors and the solver
"""

__version__ = "1.2.0"

from refi_optimizer.core.exceptions import (
    ConfigurationError,
    InvalidParameterError,
    InvariantViolationError,
    RefiOptimizerError,
    TableSizeError,
)
from refi_optimizer.domain.models import (
    Loan,
    LoanTerms,
    Parameters,
    RefinanceResult,
    SolveLabel,
    loans_from_columns,
)
from refi_optimizer.services.solver import RefinanceSolver, solve

__all__ = [
    "Loan",
    "LoanTerms",
    "Parameters",
    "RefinanceResult",
    "SolveLabel",
    "loans_from_columns",
    "RefinanceSolver",
    "solve",
    # Exceptions
    "RefiOptimizerError",
    "ConfigurationError",
    "InvalidParameterError",
    "TableSizeError",
    "InvariantViolationError",
]
