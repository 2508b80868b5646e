"""
Core math modules для Tranche Auction

Точная decimal-арифметика количеств и цен.
"""

from tranche_auction.core.math.decimal_arithmetic import (
    # Context
    AUCTION_DECIMAL_TRAPS,
    DECIMAL_ZERO,
    DEFAULT_DECIMAL_PRECISION,
    auction_decimal_context,
    # Conversion
    to_decimal,
    # Exact operations
    exact_difference,
    exact_product,
    exact_sum,
    is_exact_equal,
    is_integral,
    # Validation
    validate_non_negative_decimal,
    validate_positive_decimal,
)

__all__ = [
    # Context
    "AUCTION_DECIMAL_TRAPS",
    "DECIMAL_ZERO",
    "DEFAULT_DECIMAL_PRECISION",
    "auction_decimal_context",
    # Conversion
    "to_decimal",
    # Exact operations
    "exact_difference",
    "exact_product",
    "exact_sum",
    "is_exact_equal",
    "is_integral",
    # Validation
    "validate_non_negative_decimal",
    "validate_positive_decimal",
]
