"""
Miscellaneous Fee Aggregator
"""

from decimal import Decimal

from ..models import CalculationContext


class MiscFeeAggregator:
    """Sums ad-hoc fees. Fees with a checkbox only count when it is ticked."""

    def calculate(self, ctx: CalculationContext) -> Decimal:
        return sum(
            (fee.amount for fee in ctx.proposal.misc_fees if fee.applies),
            Decimal('0'),
        )
