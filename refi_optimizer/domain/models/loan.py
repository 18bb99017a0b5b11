"""Loan and financing terms data models.

A loan is one of the client's existing credits that may be closed
(refinanced) out of the new loan's principal.
"""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, Field, ValidationError

from refi_optimizer.core.exceptions import ConfigurationError, InvalidParameterError


class Loan(BaseModel):
    """Existing loan that is a candidate for closure."""

    remaining_principal: float = Field(..., ge=0, allow_inf_nan=False, description="Amount needed to close the loan in €")
    monthly_annuity: float = Field(..., ge=0, allow_inf_nan=False, description="Current monthly installment in €")
    is_in_bank: bool = Field(default=False, description="Held by our bank (already in exposure)")
    name: str | None = Field(None, description="Optional label for presentation")

    model_config = {
        "frozen": True,
    }


class LoanTerms(BaseModel):
    """Global terms of the new loan and the bank's caps."""

    max_monthly_annuity: float = Field(..., description="Client's monthly debt service cap in €")
    annual_rate: float = Field(..., description="New loan annual rate as a fraction (0.07 = 7%)")
    term_months: int = Field(..., description="New loan term in months")
    requested_cash: float = Field(..., description="Cash the client wants paid out in €")
    exposure_cap: float = Field(..., description="Max total exposure in our bank after payout in €")

    # Discretization grid (EUR per bucket)
    delta_value: float | None = Field(None, description="Value bucket size in € (settings default if unset)")
    delta_exposure: float | None = Field(None, description="Exposure bucket size in € (settings default if unset)")

    model_config = {
        "frozen": True,
    }


def loans_from_columns(
    principals: Sequence[float],
    annuities: Sequence[float],
    in_bank_flags: Sequence[bool | int],
    names: Sequence[str] | None = None,
) -> list[Loan]:
    """Build loans from parallel attribute columns.

    Raises:
        ConfigurationError: If the columns differ in length.
        InvalidParameterError: If a loan attribute is out of range.
    """
    n = len(principals)
    lengths = {
        "principals": n,
        "annuities": len(annuities),
        "in_bank_flags": len(in_bank_flags),
    }
    if names is not None:
        lengths["names"] = len(names)

    if len(set(lengths.values())) != 1:
        raise ConfigurationError(f"Loan attribute columns differ in length: {lengths}")

    loans = []
    for i in range(n):
        try:
            loans.append(
                Loan(
                    remaining_principal=principals[i],
                    monthly_annuity=annuities[i],
                    is_in_bank=bool(in_bank_flags[i]),
                    name=names[i] if names is not None else None,
                )
            )
        except ValidationError as e:
            raise InvalidParameterError(
                f"loans[{i}]", (principals[i], annuities[i]), str(e)
            ) from e
    return loans
