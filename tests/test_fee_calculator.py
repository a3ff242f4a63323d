"""
Unit Tests for Fee, Discount and Tax Calculators

Tests verify calculations against known expected values.
"""

from decimal import Decimal

import pytest

from rental_engine.calculators.discount import DiscountCalculator
from rental_engine.calculators.fees import FeeCalculator, quantize_money
from rental_engine.calculators.misc_fees import MiscFeeAggregator
from rental_engine.calculators.tax import TaxCalculator
from rental_engine.models import (
    CalculationContext,
    DiscountApplication,
    DiscountTerms,
    FeeCalculation,
    MiscFee,
    ProductTotals,
    Proposal,
)


def _make_context(
    product_subtotal: str = "240",
    rental_total: str | None = None,
    discount: DiscountTerms | None = None,
    delivery_fee: str = "0",
    waive_product_care: bool = False,
    waive_service_fee: bool = False,
    tax_exempt: bool = False,
) -> CalculationContext:
    """Helper to create a minimal CalculationContext."""
    proposal = Proposal(
        discount=discount or DiscountTerms(),
        delivery_fee=Decimal(delivery_fee),
        waive_product_care=waive_product_care,
        waive_service_fee=waive_service_fee,
        tax_exempt=tax_exempt,
    )
    ctx = CalculationContext(proposal=proposal)
    ctx.products = ProductTotals(product_subtotal=Decimal(product_subtotal))
    ctx.discount = DiscountApplication(
        rental_total=Decimal(rental_total if rental_total is not None else product_subtotal)
    )
    return ctx


class TestQuantizeMoney:
    """Test the money rounding utility."""

    def test_rounds_down_below_half(self):
        assert quantize_money(Decimal("0.004")) == Decimal("0.00")

    def test_rounds_up_at_half(self):
        # 0.005 rounds to 0.01 (ROUND_HALF_UP)
        assert quantize_money(Decimal("0.005")) == Decimal("0.01")

    def test_preserves_exact_cents(self):
        assert quantize_money(Decimal("123.45")) == Decimal("123.45")

    def test_truncates_extra_precision(self):
        assert quantize_money(Decimal("32.14575")) == Decimal("32.15")


class TestDiscountCalculator:
    """Percentage and flat discounts."""

    @pytest.fixture
    def calculator(self):
        return DiscountCalculator()

    def test_percentage_discount(self, calculator):
        """10% of $240 = $24"""
        ctx = _make_context(discount=DiscountTerms(value=Decimal("10")))
        result = calculator.calculate(ctx)
        assert result.standard_rate_discount == Decimal("24")
        assert result.rental_total == Decimal("216")

    def test_dollar_discount(self, calculator):
        ctx = _make_context(discount=DiscountTerms(kind="dollar", value=Decimal("50")))
        result = calculator.calculate(ctx)
        assert result.standard_rate_discount == Decimal("50")
        assert result.rental_total == Decimal("190")

    def test_no_discount(self, calculator):
        result = calculator.calculate(_make_context())
        assert result.standard_rate_discount == Decimal("0")
        assert result.rental_total == Decimal("240")

    def test_over_discount_is_not_clamped(self, calculator):
        """A $300 discount on $240 of product leaves a negative rental total."""
        ctx = _make_context(discount=DiscountTerms(kind="dollar", value=Decimal("300")))
        result = calculator.calculate(ctx)
        assert result.rental_total == Decimal("-60")


class TestProductCare:
    """Product care (10% of extended product total)."""

    @pytest.fixture
    def calculator(self):
        return FeeCalculator()

    def test_rate_is_correct(self, calculator):
        assert calculator.PRODUCT_CARE_RATE == Decimal("0.10")

    def test_care_on_product_subtotal(self, calculator):
        result = calculator.calculate(_make_context())
        assert result.product_care == Decimal("24")

    def test_discount_does_not_reduce_care_basis(self, calculator):
        ctx = _make_context(product_subtotal="240", rental_total="190")
        assert calculator.calculate(ctx).product_care == Decimal("24")

    def test_waived_by_field(self, calculator):
        result = calculator.calculate(_make_context(waive_product_care=True))
        assert result.product_care == Decimal("0")
        assert result.waive_product_care is True

    def test_waived_by_token(self, calculator):
        ctx = _make_context(discount=DiscountTerms(waive_product_care=True))
        result = calculator.calculate(ctx)
        assert result.product_care == Decimal("0")
        assert result.waive_product_care is True


class TestServiceFee:
    """Service fee (5% of rental total + product care + delivery)."""

    @pytest.fixture
    def calculator(self):
        return FeeCalculator()

    def test_rate_is_correct(self, calculator):
        assert calculator.SERVICE_FEE_RATE == Decimal("0.05")

    def test_service_fee_basis(self, calculator):
        """(240 + 24 + 50) × 5% = 15.70"""
        result = calculator.calculate(_make_context(delivery_fee="50"))
        assert result.delivery == Decimal("50")
        assert result.service_fee == Decimal("15.7")

    def test_service_fee_without_care(self, calculator):
        """(240 + 0 + 50) × 5% = 14.50"""
        result = calculator.calculate(_make_context(delivery_fee="50", waive_product_care=True))
        assert result.service_fee == Decimal("14.5")

    def test_waived_by_field(self, calculator):
        result = calculator.calculate(_make_context(delivery_fee="50", waive_service_fee=True))
        assert result.service_fee == Decimal("0")
        assert result.waive_service_fee is True

    def test_waived_by_token(self, calculator):
        ctx = _make_context(delivery_fee="50", discount=DiscountTerms(waive_service_fee=True))
        result = calculator.calculate(ctx)
        assert result.service_fee == Decimal("0")
        assert result.waive_service_fee is True


class TestMiscFeeAggregator:
    """Sum of fees honoring optional checkboxes."""

    def test_checkbox_rules(self):
        ctx = _make_context()
        ctx.proposal.misc_fees = [
            MiscFee(amount=Decimal("10"), checked=False),
            MiscFee(amount=Decimal("5")),
            MiscFee(amount=Decimal("2.5"), checked=True),
        ]
        assert MiscFeeAggregator().calculate(ctx) == Decimal("7.5")

    def test_no_fees(self):
        assert MiscFeeAggregator().calculate(_make_context()) == Decimal("0")


class TestTaxCalculator:
    """Subtotal, tax (9.75%) and total."""

    @pytest.fixture
    def calculator(self):
        return TaxCalculator()

    def test_rate_is_correct(self, calculator):
        assert calculator.TAX_RATE == Decimal("0.0975")

    def _ctx_with_fees(self, tax_exempt=False):
        ctx = _make_context(tax_exempt=tax_exempt)
        ctx.fees = FeeCalculation(
            product_care=Decimal("24"),
            delivery=Decimal("50"),
            service_fee=Decimal("15.7"),
        )
        ctx.misc_fees = Decimal("10")
        return ctx

    def test_tax_on_subtotal(self, calculator):
        """Subtotal 240 + 24 + 15.7 + 50 + 10 = 339.70; tax = 33.12075"""
        result = calculator.calculate(self._ctx_with_fees())
        assert result.subtotal == Decimal("339.7")
        assert result.tax == Decimal("33.12075")
        assert result.total == Decimal("372.82075")
        assert result.tax_exempt is False

    def test_tax_exempt(self, calculator):
        result = calculator.calculate(self._ctx_with_fees(tax_exempt=True))
        assert result.tax == Decimal("0")
        assert result.total == Decimal("339.7")
        assert result.tax_exempt is True
