"""
Fee Calculators for the Rental Totals Engine

Product care, delivery and service fee. Waivers come from the proposal's
boolean fields or from the WAIVE:PC / WAIVE:SF tokens in its discount name.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

from ..models import CalculationContext, FeeCalculation


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places (half up)."""
    with localcontext() as ctx:
        # Keep every integer digit of totals wider than the default precision
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


class FeeCalculator:
    """Calculates the waivable percentage fees and delivery."""

    # Fee rates as class constants
    PRODUCT_CARE_RATE = Decimal('0.10')
    SERVICE_FEE_RATE = Decimal('0.05')

    def calculate(self, ctx: CalculationContext) -> FeeCalculation:
        """Calculate all fees and return FeeCalculation result."""
        proposal = ctx.proposal
        waive_product_care = proposal.waive_product_care or proposal.discount.waive_product_care
        waive_service_fee = proposal.waive_service_fee or proposal.discount.waive_service_fee

        # Care is charged on the undiscounted product total
        product_care = self._calculate_product_care(ctx.products.product_subtotal, waive_product_care)
        delivery = proposal.delivery_fee
        service_fee = self._calculate_service_fee(
            ctx.discount.rental_total + product_care + delivery,
            waive_service_fee,
        )

        return FeeCalculation(
            product_care=product_care,
            delivery=delivery,
            service_fee=service_fee,
            waive_product_care=waive_product_care,
            waive_service_fee=waive_service_fee,
        )

    def _calculate_product_care(self, product_subtotal: Decimal, waived: bool) -> Decimal:
        """Calculate product care (10% of extended product total)."""
        if waived:
            return Decimal('0')
        return product_subtotal * self.PRODUCT_CARE_RATE

    def _calculate_service_fee(self, basis: Decimal, waived: bool) -> Decimal:
        """Calculate service fee (5% of rental total + product care + delivery)."""
        if waived:
            return Decimal('0')
        return basis * self.SERVICE_FEE_RATE
