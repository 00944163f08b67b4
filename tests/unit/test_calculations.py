"""Unit tests for DTI / LTV derivation"""

import pytest
from decimal import Decimal
from underwriting_gateway.domain.calculations import compute_metrics, ratio_percent
from underwriting_gateway.domain.exceptions import ComputationError


def test_compute_metrics_scenario(make_application):
    """Test basic ratio derivation"""
    metrics = compute_metrics(make_application())

    assert metrics.dti == Decimal("20.00")
    assert metrics.ltv == Decimal("80.00")
    assert str(metrics.dti) == "20.00"


def test_ratio_percent_rounds_half_up():
    """Test half-up rounding at exactly half a cent"""
    assert ratio_percent(Decimal("12.345"), Decimal("100")) == Decimal("12.35")
    assert ratio_percent(Decimal("12.344"), Decimal("100")) == Decimal("12.34")
    assert ratio_percent(Decimal("2"), Decimal("3")) == Decimal("66.67")
    assert ratio_percent(Decimal("1"), Decimal("3")) == Decimal("33.33")


def test_compute_metrics_zero_debts(make_application):
    """Test no debts yields a zero DTI"""
    metrics = compute_metrics(make_application(monthly_debts=Decimal("0")))
    assert metrics.dti == Decimal("0.00")


def test_compute_metrics_identical_inputs_identical_output(make_application):
    """Test repeated evaluation gives byte-identical ratios"""
    app = make_application(monthly_debts=Decimal("1234.56"), loan_amount=Decimal("187654.32"))

    first = compute_metrics(app)
    second = compute_metrics(app)

    assert first == second
    assert (str(first.dti), str(first.ltv)) == (str(second.dti), str(second.ltv))


def test_compute_metrics_zero_denominator_is_internal_fault(make_application):
    """Test an unvalidated zero property value surfaces as ComputationError"""
    with pytest.raises(ComputationError):
        compute_metrics(make_application(property_value=Decimal("0")))


def test_compute_metrics_extreme_valid_amounts(make_application):
    """Test the widest accepted amounts still yield exact ratios"""
    metrics = compute_metrics(
        make_application(
            monthly_income=Decimal("0.0001"),
            monthly_debts=Decimal("99999999999999.9999"),
            loan_amount=Decimal("99999999999999.9999"),
            property_value=Decimal("0.0001"),
        )
    )

    assert metrics.dti == Decimal("99999999999999999900.00")
    assert metrics.ltv == metrics.dti


def test_compute_metrics_huge_ltv(make_application):
    """Test a loan far above property value gives a large but finite LTV"""
    metrics = compute_metrics(make_application(loan_amount=Decimal("10000000000000"), property_value=Decimal("1")))
    assert metrics.ltv == Decimal("1000000000000000.00")


def test_compute_metrics_beyond_working_precision_is_internal_fault(make_application):
    """Test unvalidated amounts too large to quantize surface as ComputationError"""
    with pytest.raises(ComputationError):
        compute_metrics(make_application(loan_amount=Decimal("1E+60"), property_value=Decimal("1")))
