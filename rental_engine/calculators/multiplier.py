"""
Rental Multiplier Table

Maps an inclusive rental duration in days to the multiplier applied to base
(1-day) product pricing.
"""

from decimal import Decimal

from ..models import MultiplierTier


class RentalMultiplierTable:
    """Step function from rental duration to pricing multiplier."""

    TIERS = (
        MultiplierTier(min_days=None, max_days=1, multiplier=Decimal('1.0')),
        MultiplierTier(min_days=2, max_days=2, multiplier=Decimal('1.1')),
        MultiplierTier(min_days=3, max_days=3, multiplier=Decimal('1.2')),
        MultiplierTier(min_days=4, max_days=4, multiplier=Decimal('1.3')),
        MultiplierTier(min_days=5, max_days=5, multiplier=Decimal('1.4')),
        MultiplierTier(min_days=6, max_days=6, multiplier=Decimal('1.5')),
        MultiplierTier(min_days=7, max_days=14, multiplier=Decimal('2.0')),
        MultiplierTier(min_days=15, max_days=21, multiplier=Decimal('3.0')),
        MultiplierTier(min_days=22, max_days=28, multiplier=Decimal('4.0')),
        MultiplierTier(min_days=29, max_days=None, multiplier=Decimal('4.0')),
    )

    def multiplier_for(self, duration_days: int) -> Decimal:
        """Look up the multiplier for a duration. Defined for every integer."""
        for tier in self.TIERS:
            if tier.contains(duration_days):
                return tier.multiplier
        # Unreachable while the tiers cover every integer
        return self.TIERS[-1].multiplier


_table = RentalMultiplierTable()


def multiplier_for(duration_days: int) -> Decimal:
    return _table.multiplier_for(duration_days)
