"""
Totals Processor - Main Orchestrator

Coordinates the proposal totals pipeline through discrete, testable steps.
"""

import json
from decimal import Decimal
from typing import Any, Dict

from .calculators import (
    DiscountCalculator,
    FeeCalculator,
    MiscFeeAggregator,
    ProductTotalCalculator,
    RentalMultiplierTable,
    TaxCalculator,
)
from .classification import normalize_sections
from .models import CalculationContext, Proposal, TotalsBreakdown
from .output import OutputBuilder


class TotalsProcessor:
    """
    Main orchestrator for proposal totals.

    Implements a clear pipeline pattern:
    1. Parse Proposal
    2. Build Context
    3. Product Total & Rental Multiplier
    4. Apply Discount
    5. Calculate Fees (Product Care, Delivery, Service Fee)
    6. Sum Miscellaneous Fees
    7. Calculate Tax & Total
    8. Build Output

    Holds no per-call state; one instance can serve any number of callers.
    """

    def __init__(self, multiplier_table: RentalMultiplierTable | None = None):
        # Initialize all calculators
        self.product_calculator = ProductTotalCalculator(multiplier_table)
        self.discount_calculator = DiscountCalculator()
        self.fee_calculator = FeeCalculator()
        self.misc_fee_aggregator = MiscFeeAggregator()
        self.tax_calculator = TaxCalculator()
        self.output_builder = OutputBuilder()

    def process(self, proposal: Proposal | Dict[str, Any]) -> TotalsBreakdown:
        """
        Total a proposal through the complete pipeline.

        Args:
            proposal: Parsed Proposal, or the raw upstream record

        Returns:
            TotalsBreakdown with every intermediate value and effective flag
        """
        # Step 1: Parse
        if not isinstance(proposal, Proposal):
            proposal = Proposal.from_dict(proposal)

        # Step 2: Build initial context
        ctx = CalculationContext(proposal=proposal)

        # Step 3: Base product total and multiplier
        ctx.products = self.product_calculator.calculate(ctx)

        # Step 4: Standard-rate discount
        ctx.discount = self.discount_calculator.calculate(ctx)

        # Step 5: Product care, delivery, service fee
        ctx.fees = self.fee_calculator.calculate(ctx)

        # Step 6: Miscellaneous fees
        ctx.misc_fees = self.misc_fee_aggregator.calculate(ctx)

        # Step 7: Subtotal, tax, total
        ctx.tax = self.tax_calculator.calculate(ctx)

        # Step 8: Build output
        return self.output_builder.build(ctx)

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Total a proposal from a raw record, alongside its sections for display.

        Convenience method for API usage.
        """
        proposal = Proposal.from_dict(data)
        totals = self.process(proposal)
        return {
            "totals": self.output_builder.to_dict(totals),
            "display": self.output_builder.to_display(totals, proposal),
            "sections": normalize_sections(data),
        }


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_processor = TotalsProcessor()


def compute_totals(proposal: Proposal | Dict[str, Any]) -> TotalsBreakdown:
    """Itemized totals for one proposal."""
    return _processor.process(proposal)


def calculate_total(proposal: Proposal | Dict[str, Any]) -> Decimal:
    """Grand total for one proposal."""
    return _processor.process(proposal).total


def process_proposal_from_json(json_input: str) -> str:
    """
    Total a proposal from JSON string input and return JSON string output.
    """
    try:
        input_data = json.loads(json_input)
        if not isinstance(input_data, dict):
            raise ValueError("Proposal must be a JSON object")
        result = _processor.process_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
