"""Selection reconstruction from DP parent links."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Sequence, TypeVar

from refi_optimizer.core.exceptions import InvariantViolationError

State = TypeVar("State", bound=Hashable)


@dataclass(frozen=True)
class ParentLink:
    """Where a minimum-cost cell was reached from, and by closing which loan."""

    from_exposure_bucket: int
    from_value_bucket: int
    loan_index: int


@dataclass(frozen=True)
class PredecessorLink:
    """Where a maximum-cash cell was reached from, and by closing which loan."""

    from_exposure_bucket: int
    loan_index: int


Step = tuple[ParentLink | PredecessorLink, State] | None


def backtrack(
    terminal: State,
    parent_of: Callable[[State], Step],
    is_origin: Callable[[State], bool],
    max_steps: int,
) -> list[int]:
    """Walk parent links from a terminal DP state back to the origin.

    Args:
        terminal: State the chosen cell corresponds to
        parent_of: Returns (link, previous state), or None when no link exists
        is_origin: True for the unconsumed, zero-cost root
        max_steps: Upper bound on steps (number of loans)

    Returns:
        Loan indices touched along the path, in visit order

    Raises:
        InvariantViolationError: On a missing parent, a repeated loan, or a
            path longer than max_steps.
    """
    visited: list[int] = []
    state = terminal

    while not is_origin(state):
        if len(visited) >= max_steps:
            raise InvariantViolationError(
                f"Reconstruction exceeded {max_steps} steps at state {state}"
            )

        step = parent_of(state)
        if step is None:
            raise InvariantViolationError(f"Missing parent link at non-origin state {state}")

        link, state = step
        if link.loan_index in visited:
            raise InvariantViolationError(
                f"Loan {link.loan_index} reached twice during reconstruction"
            )
        visited.append(link.loan_index)

    return visited


def to_selection(indices: Sequence[int], n: int) -> list[int]:
    """0/1 vector of length n with ones at the given loan indices."""
    selection = [0] * n
    for i in indices:
        selection[i] = 1
    return selection
