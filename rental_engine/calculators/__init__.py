"""
Calculators Package

Provides all calculation components for proposal totals.
"""

from .discount import DiscountCalculator
from .fees import FeeCalculator
from .misc_fees import MiscFeeAggregator
from .multiplier import RentalMultiplierTable
from .products import ProductTotalCalculator
from .tax import TaxCalculator

__all__ = [
    "RentalMultiplierTable",
    "ProductTotalCalculator",
    "DiscountCalculator",
    "FeeCalculator",
    "MiscFeeAggregator",
    "TaxCalculator",
]
