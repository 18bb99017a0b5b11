"""Core primitives: exceptions, logging, settings and financial helpers."""

from .exceptions import (
    ConfigurationError,
    InvalidParameterError,
    InvariantViolationError,
    RefiOptimizerError,
    TableSizeError,
)
from .financial import annuity_factor, to_bucket

__all__ = [
    "annuity_factor",
    "to_bucket",
    # Exceptions
    "RefiOptimizerError",
    "ConfigurationError",
    "InvalidParameterError",
    "TableSizeError",
    "InvariantViolationError",
]
