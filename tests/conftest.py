"""Pytest fixtures for refi_optimizer tests."""

import os
import sys

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from refi_optimizer.core.settings import SolverSettings  # noqa: E402
from refi_optimizer.domain.models.loan import LoanTerms, loans_from_columns  # noqa: E402
from refi_optimizer.presets import SAMPLE_PORTFOLIO, SAMPLE_TERMS  # noqa: E402


@pytest.fixture
def sample_loans():
    """Six-loan reference portfolio (loans 2 and 4 held in-bank)."""
    return list(SAMPLE_PORTFOLIO)


@pytest.fixture
def sample_terms():
    """900 €/month cap, 7% over 59 months, 10k cash, 40k exposure cap."""
    return SAMPLE_TERMS


@pytest.fixture
def settings():
    """Settings isolated from the environment."""
    return SolverSettings(_env_file=None)


@pytest.fixture
def small_loans():
    """Three loans with round numbers; at a zero rate over 10 months k = 10.

    Net benefits: 200 (external), 150 (external), 170 (in-bank).
    """
    return loans_from_columns(
        principals=[100.0, 50.0, 80.0],
        annuities=[30.0, 20.0, 25.0],
        in_bank_flags=[0, 0, 1],
    )


@pytest.fixture
def small_terms():
    """Zero-rate terms for small_loans; baseline capacity is exactly 0."""
    return LoanTerms(
        max_monthly_annuity=75.0,
        annual_rate=0.0,
        term_months=10,
        requested_cash=300.0,
        exposure_cap=1000.0,
        delta_value=10.0,
        delta_exposure=10.0,
    )
