"""
Tax Calculator

Builds the subtotal from every charge and applies sales tax.
"""

from decimal import Decimal

from ..models import CalculationContext, TaxCalculation


class TaxCalculator:
    """Calculates subtotal, sales tax and the grand total."""

    TAX_RATE = Decimal('0.0975')

    def calculate(self, ctx: CalculationContext) -> TaxCalculation:
        """
        Subtotal = Rental Total
                 + Product Care
                 + Service Fee
                 + Delivery
                 + Misc Fees

        Total = Subtotal + Tax (unless tax exempt)
        """
        fees = ctx.fees
        tax_exempt = ctx.proposal.tax_exempt

        subtotal = ctx.discount.rental_total
        subtotal += fees.product_care
        subtotal += fees.service_fee
        subtotal += fees.delivery
        subtotal += ctx.misc_fees

        tax = Decimal('0') if tax_exempt else subtotal * self.TAX_RATE

        return TaxCalculation(
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            tax_exempt=tax_exempt,
        )
