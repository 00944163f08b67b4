"""DTI and LTV calculations"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

from underwriting_gateway.domain.exceptions import ComputationError
from underwriting_gateway.domain.models import LoanApplication, Metrics

_HUNDRED = Decimal("100")
_CENT = Decimal("0.01")

# Largest validated ratio is 10^14 / 10^-4 * 100, i.e. 23 digits with cents
_RATIO_PRECISION = 50


def ratio_percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    """numerator / denominator as a percentage, rounded half-up to 2 places"""
    with localcontext() as ctx:
        ctx.prec = _RATIO_PRECISION
        return (numerator / denominator * _HUNDRED).quantize(_CENT, rounding=ROUND_HALF_UP)


def compute_metrics(app: LoanApplication) -> Metrics:
    """
    Derive debt-to-income and loan-to-value ratios.

    Denominators are guaranteed positive by validation, so no zero check here.

    Example:
        debts 1200 / income 6000  -> dti 20.00
        loan 200000 / value 250000 -> ltv 80.00
    """
    try:
        dti = ratio_percent(app.monthly_debts, app.monthly_income)
        ltv = ratio_percent(app.loan_amount, app.property_value)
    except (InvalidOperation, ZeroDivisionError) as e:
        raise ComputationError(f"Ratio calculation failed: {e!r}") from e

    for label, value in (("dti", dti), ("ltv", ltv)):
        if not value.is_finite() or value < 0:
            raise ComputationError(f"{label} evaluated to {value}")

    return Metrics(dti=dti, ltv=ltv)
