"""
Discount Calculator

Applies the standard-rate discount (percentage or flat dollar amount) to the
extended product total.
"""

from decimal import Decimal

from ..models import CalculationContext, DiscountApplication, DiscountTerms


class DiscountCalculator:
    """Calculates the standard-rate discount and the resulting rental total."""

    def calculate(self, ctx: CalculationContext) -> DiscountApplication:
        product_subtotal = ctx.products.product_subtotal
        discount = self._calculate_discount(product_subtotal, ctx.proposal.discount)

        # Not clamped: a discount larger than the products leaves a negative rental total
        return DiscountApplication(
            standard_rate_discount=discount,
            rental_total=product_subtotal - discount,
        )

    def _calculate_discount(self, product_subtotal: Decimal, terms: DiscountTerms) -> Decimal:
        if terms.is_flat:
            return terms.value
        return product_subtotal * (terms.value / Decimal('100'))
