"""Command line entry point.

Prints the solve label and the 0/1 closure vector, one per line:

    $ python -m refi_optimizer
    FEASIBLE_EXACT
    1 1 0 0 1 1
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError

from refi_optimizer.core.exceptions import ConfigurationError
from refi_optimizer.core.logging import configure_logging
from refi_optimizer.core.settings import get_settings
from refi_optimizer.domain.models.loan import Loan, LoanTerms
from refi_optimizer.presets import SAMPLE_PORTFOLIO, SAMPLE_TERMS
from refi_optimizer.services.solver import RefinanceSolver


class PortfolioFile(BaseModel):
    """JSON input: {"loans": [...], "terms": {...}}."""

    loans: list[Loan]
    terms: LoanTerms


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refi_optimizer",
        description="Select which loans to close for a requested cash payout",
    )
    parser.add_argument("--portfolio", type=Path, help="JSON file with loans and terms (default: built-in sample)")
    parser.add_argument("--requested-cash", type=float, help="Override requested cash (€)")
    parser.add_argument("--exposure-cap", type=float, help="Override exposure cap (€)")
    parser.add_argument("--delta-value", type=float, help="Value bucket size (€)")
    parser.add_argument("--delta-exposure", type=float, help="Exposure bucket size (€)")
    parser.add_argument(
        "--include-in-bank",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="On the max-cash path, also close in-bank loans with positive net benefit (default: settings)",
    )
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(level=args.log_level or settings.log_level, json_output=settings.log_json, force=True)

    if args.portfolio:
        try:
            data = PortfolioFile.model_validate_json(args.portfolio.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            print(f"error: cannot load portfolio: {e}", file=sys.stderr)
            return 2
        loans, terms = data.loans, data.terms
    else:
        loans, terms = SAMPLE_PORTFOLIO, SAMPLE_TERMS

    overrides = {
        "requested_cash": args.requested_cash,
        "exposure_cap": args.exposure_cap,
        "delta_value": args.delta_value,
        "delta_exposure": args.delta_exposure,
    }
    terms = terms.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    try:
        result = RefinanceSolver(settings, include_in_bank_beneficial=args.include_in_bank).solve(loans, terms)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(result.model_dump_json(indent=2, exclude={"parameters"}))
    else:
        print(result.label.value)
        print(result.selection_string())
    return 0
