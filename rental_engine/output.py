"""
Output Builder

Constructs the TotalsBreakdown from the calculation context and renders it for
API responses and on-screen display.
"""

from decimal import Decimal

from .calculators.fees import quantize_money
from .calculators.tax import TaxCalculator
from .dates import format_date_range
from .models import CalculationContext, Proposal, TotalsBreakdown

WAIVED = 'Waived'
EXEMPT = 'Exempt'


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return float(quantize_money(value))


def _fmt(value) -> str:
    """Format a number as currency string, e.g. $1,234.50 or -$50.00."""
    amount = quantize_money(Decimal(str(value)))
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


class OutputBuilder:
    """Builds the final totals and their rendered forms."""

    def build(self, ctx: CalculationContext) -> TotalsBreakdown:
        """Construct the totals breakdown from the processing context."""
        products = ctx.products
        discount = ctx.discount
        fees = ctx.fees
        tax = ctx.tax

        return TotalsBreakdown(
            rental_multiplier=products.rental_multiplier,
            product_subtotal=products.product_subtotal,
            standard_rate_discount=discount.standard_rate_discount,
            rental_total=discount.rental_total,
            product_care=fees.product_care,
            service_fee=fees.service_fee,
            delivery=fees.delivery,
            misc_fees=ctx.misc_fees,
            subtotal=tax.subtotal,
            tax=tax.tax,
            total=tax.total,
            waive_product_care=fees.waive_product_care,
            waive_service_fee=fees.waive_service_fee,
            tax_exempt=tax.tax_exempt,
        )

    def to_dict(self, totals: TotalsBreakdown) -> dict:
        """Render totals with the upstream camelCase keys and money rounded to cents."""
        return {
            "rentalMultiplier": float(totals.rental_multiplier),
            "productSubtotal": to_money(totals.product_subtotal),
            "standardRateDiscount": to_money(totals.standard_rate_discount),
            "rentalTotal": to_money(totals.rental_total),
            "productCare": to_money(totals.product_care),
            "serviceFee": to_money(totals.service_fee),
            "delivery": to_money(totals.delivery),
            "miscFees": to_money(totals.misc_fees),
            "subtotal": to_money(totals.subtotal),
            "tax": to_money(totals.tax),
            "total": to_money(totals.total),
            "waiveProductCare": totals.waive_product_care,
            "waiveServiceFee": totals.waive_service_fee,
            "taxExempt": totals.tax_exempt,
        }

    def to_display(self, totals: TotalsBreakdown, proposal: Proposal | None = None) -> dict:
        """
        Render the lines of the totals table as shown to the client.

        Waived fees and exempt tax show a badge instead of an amount. The
        discount and misc fee lines are None when there is nothing to show.
        """
        tax_percent = TaxCalculator.TAX_RATE * 100
        return {
            "eventDates": format_date_range(proposal.start_date, proposal.end_date) if proposal else '',
            "productSubtotal": _fmt(totals.product_subtotal),
            "discount": f"-{_fmt(totals.standard_rate_discount)}" if totals.standard_rate_discount > 0 else None,
            "rentalTotal": _fmt(totals.rental_total),
            "productCare": WAIVED if totals.waive_product_care else _fmt(totals.product_care),
            "serviceFee": WAIVED if totals.waive_service_fee else _fmt(totals.service_fee),
            "delivery": _fmt(totals.delivery),
            "miscFees": _fmt(totals.misc_fees) if totals.misc_fees > 0 else None,
            "subtotal": _fmt(totals.subtotal),
            "taxLabel": 'Tax' if totals.tax_exempt else f"Tax ({tax_percent.normalize()}%)",
            "tax": EXEMPT if totals.tax_exempt else _fmt(totals.tax),
            "total": _fmt(totals.total),
        }
