"""Custom exceptions for refi_optimizer.

Domain-specific exception types for better error handling and debugging.
"""

from __future__ import annotations

from typing import Any


class RefiOptimizerError(Exception):
    """Base exception for all refi_optimizer errors."""
    pass


# --- Configuration Errors ---

class ConfigurationError(RefiOptimizerError):
    """Inputs or solver configuration rejected before any DP runs."""
    pass


class InvalidParameterError(ConfigurationError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class TableSizeError(ConfigurationError):
    """DP table would exceed the configured cell budget."""

    def __init__(self, table: str, cells: int, limit: int):
        self.table = table
        self.cells = cells
        self.limit = limit
        super().__init__(
            f"{table} table needs {cells} cells, limit is {limit}; "
            "increase delta_value/delta_exposure"
        )


# --- Internal Errors ---

class InvariantViolationError(RefiOptimizerError, AssertionError):
    """Internal defect: DP tables or parent links are in an impossible state."""
    pass
