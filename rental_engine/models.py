"""
Domain Models for the Rental Totals Engine

These dataclasses provide type-safe representations of a proposal and its
totals. Raw records are parsed once at the boundary (`from_dict`); all
monetary values use Decimal for precision.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal

from .coercion import decode_json_list, parse_flag, parse_lenient_number

DISCOUNT_PERCENTAGE = 'percentage'
DISCOUNT_DOLLAR = 'dollar'

_DISCOUNT_TYPE = re.compile(r"^TYPE:(\w+)", re.ASCII)

# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class MultiplierTier:
    """A row of the rental multiplier table. None bounds are open-ended."""

    min_days: int | None
    max_days: int | None
    multiplier: Decimal

    def contains(self, duration_days: int) -> bool:
        if self.min_days is not None and duration_days < self.min_days:
            return False
        if self.max_days is not None and duration_days > self.max_days:
            return False
        return True


@dataclass
class Product:
    """A priced line item."""

    name: str
    quantity: Decimal
    price: Decimal
    dimensions: str | None = None
    note: str = ''

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.price

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            name=data.get("name") or '',
            quantity=parse_lenient_number(data.get("quantity")),
            price=parse_lenient_number(data.get("price")),
            dimensions=data.get("dimensions"),
            note=data.get("note") or '',
        )


@dataclass
class Section:
    """A named group of products (e.g. "Lounge", "Bar")."""

    name: str
    products: list[Product] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Section":
        raw_products = data.get("products")
        if not isinstance(raw_products, list):
            raw_products = []
        return cls(
            name=data.get("name") or '',
            products=[Product.from_dict(p) for p in raw_products if isinstance(p, dict)],
        )


@dataclass
class MiscFee:
    """An ad-hoc fee. checked=None means the fee has no checkbox and always applies."""

    amount: Decimal
    checked: bool | None = None
    name: str = ''

    @property
    def applies(self) -> bool:
        return self.checked is None or self.checked

    @classmethod
    def from_dict(cls, data: dict) -> "MiscFee":
        # Presence of the key matters, not its value
        checked = bool(data["checked"]) if "checked" in data else None
        return cls(
            amount=parse_lenient_number(data.get("amount")),
            checked=checked,
            name=data.get("name") or '',
        )


@dataclass(frozen=True)
class DiscountTerms:
    """
    Discount and waiver signals carried in the legacy `discountName` string.

    `TYPE:<word>` at the start selects the discount kind; `WAIVE:PC` and
    `WAIVE:SF` anywhere in the string waive product care / service fee.
    """

    kind: str = DISCOUNT_PERCENTAGE
    value: Decimal = Decimal('0')
    waive_product_care: bool = False
    waive_service_fee: bool = False

    @property
    def is_flat(self) -> bool:
        return self.kind == DISCOUNT_DOLLAR

    @classmethod
    def parse(cls, discount_name, value) -> "DiscountTerms":
        name = discount_name if isinstance(discount_name, str) else ''
        match = _DISCOUNT_TYPE.match(name)
        kind = match.group(1) if match else DISCOUNT_PERCENTAGE
        return cls(
            kind=kind,
            value=parse_lenient_number(value),
            waive_product_care='WAIVE:PC' in name,
            waive_service_fee='WAIVE:SF' in name,
        )


@dataclass
class Proposal:
    """A proposal record, parsed once from the upstream row."""

    start_date: object = None
    end_date: object = None
    custom_rental_multiplier: str | None = None
    discount: DiscountTerms = field(default_factory=DiscountTerms)
    delivery_fee: Decimal = Decimal('0')
    waive_product_care: bool = False
    waive_service_fee: bool = False
    tax_exempt: bool = False
    sections: list[Section] = field(default_factory=list)
    misc_fees: list[MiscFee] = field(default_factory=list)
    status: str | None = None
    discount_name: str = ''  # Legacy encoded string, kept verbatim

    @classmethod
    def from_dict(cls, data: dict) -> "Proposal":
        raw_sections = decode_json_list(data.get("sectionsJSON"), "sectionsJSON")
        raw_fees = decode_json_list(data.get("miscFees"), "miscFees")

        custom = data.get("customRentalMultiplier")
        if custom is not None and not isinstance(custom, str):
            custom = str(custom)

        discount_name = data.get("discountName")
        return cls(
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            custom_rental_multiplier=custom,
            # Support both 'discountValue' and legacy 'discount'
            discount=DiscountTerms.parse(
                discount_name, data.get("discountValue") or data.get("discount") or 0
            ),
            delivery_fee=parse_lenient_number(data.get("deliveryFee")),
            waive_product_care=parse_flag(data.get("waiveProductCare")),
            waive_service_fee=parse_flag(data.get("waiveServiceFee")),
            tax_exempt=parse_flag(data.get("taxExempt")),
            sections=[Section.from_dict(s) for s in raw_sections if isinstance(s, dict)],
            misc_fees=[MiscFee.from_dict(f) for f in raw_fees if isinstance(f, dict)],
            status=data.get("status"),
            discount_name=discount_name if isinstance(discount_name, str) else '',
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass
class ProductTotals:
    """Base cost and the duration multiplier applied to it."""

    base_product_total: Decimal = Decimal('0')
    rental_multiplier: Decimal = Decimal('1.0')
    product_subtotal: Decimal = Decimal('0')


@dataclass
class DiscountApplication:
    """Results of applying the standard-rate discount."""

    standard_rate_discount: Decimal = Decimal('0')
    rental_total: Decimal = Decimal('0')


@dataclass
class FeeCalculation:
    """Product care, delivery and service fee, with the waivers actually applied."""

    product_care: Decimal = Decimal('0')
    delivery: Decimal = Decimal('0')
    service_fee: Decimal = Decimal('0')
    waive_product_care: bool = False
    waive_service_fee: bool = False


@dataclass
class TaxCalculation:
    """Subtotal, tax and grand total."""

    subtotal: Decimal = Decimal('0')
    tax: Decimal = Decimal('0')
    total: Decimal = Decimal('0')
    tax_exempt: bool = False


@dataclass
class CalculationContext:
    """
    Holds all intermediate state while totaling a proposal.
    This is the "bag" that flows through the pipeline.
    """

    # Input (read-only during processing)
    proposal: Proposal

    # Step results (populated as we go)
    products: ProductTotals = field(default_factory=ProductTotals)
    discount: DiscountApplication = field(default_factory=DiscountApplication)
    fees: FeeCalculation = field(default_factory=FeeCalculation)
    misc_fees: Decimal = Decimal('0')
    tax: TaxCalculation = field(default_factory=TaxCalculation)


@dataclass(frozen=True)
class TotalsBreakdown:
    """Itemized totals for one proposal. Values are unrounded."""

    rental_multiplier: Decimal
    product_subtotal: Decimal
    standard_rate_discount: Decimal
    rental_total: Decimal
    product_care: Decimal
    service_fee: Decimal
    delivery: Decimal
    misc_fees: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    waive_product_care: bool
    waive_service_fee: bool
    tax_exempt: bool
