"""Reference portfolio and terms.

Six existing loans, two of them held by our bank, with a 59 month new loan
at 7% and a 900 €/month debt service cap.
"""

from refi_optimizer.domain.models.loan import LoanTerms, loans_from_columns

SAMPLE_PRINCIPALS = [3500.0, 6700.0, 9800.0, 4200.0, 2500.0, 3100.0]
SAMPLE_ANNUITIES = [350.0, 335.0, 196.0, 180.0, 140.0, 120.0]
SAMPLE_IN_BANK = [0, 0, 1, 0, 1, 0]  # 1 = our bank, 0 = external

SAMPLE_PORTFOLIO = loans_from_columns(SAMPLE_PRINCIPALS, SAMPLE_ANNUITIES, SAMPLE_IN_BANK)

SAMPLE_TERMS = LoanTerms(
    max_monthly_annuity=900.0,
    annual_rate=0.07,
    term_months=59,
    requested_cash=10000.0,
    exposure_cap=40000.0,
    delta_value=50.0,
    delta_exposure=50.0,
)
