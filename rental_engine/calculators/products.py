"""
Product Total Calculator

Sums line items across sections and applies the rental-duration multiplier.
"""

from decimal import Decimal

from ..coercion import parse_lenient_number
from ..dates import day_span
from ..models import CalculationContext, ProductTotals, Proposal
from .multiplier import RentalMultiplierTable


class ProductTotalCalculator:
    """Computes base product cost, the multiplier, and the extended product total."""

    DEFAULT_MULTIPLIER = Decimal('1.0')

    def __init__(self, multiplier_table: RentalMultiplierTable | None = None):
        self.multiplier_table = multiplier_table or RentalMultiplierTable()

    def calculate(self, ctx: CalculationContext) -> ProductTotals:
        proposal = ctx.proposal
        base_total = self._base_product_total(proposal)
        multiplier = self.resolve_multiplier(proposal)

        return ProductTotals(
            base_product_total=base_total,
            rental_multiplier=multiplier,
            product_subtotal=base_total * multiplier,
        )

    def _base_product_total(self, proposal: Proposal) -> Decimal:
        total = Decimal('0')
        for section in proposal.sections:
            for product in section.products:
                total += product.line_total
        return total

    def resolve_multiplier(self, proposal: Proposal) -> Decimal:
        """
        Determine the rental multiplier.

        Priority order:
        1. Custom override (any non-blank value; must be a positive number,
           otherwise the default applies)
        2. Inclusive day span between start and end dates
        3. Default of 1.0 when either date is missing
        """
        custom = proposal.custom_rental_multiplier
        if custom is not None and custom.strip() != '':
            parsed = parse_lenient_number(custom)
            if parsed > 0:
                return parsed
            return self.DEFAULT_MULTIPLIER

        duration = day_span(proposal.start_date, proposal.end_date)
        if duration is None:
            return self.DEFAULT_MULTIPLIER
        return self.multiplier_table.multiplier_for(duration)
