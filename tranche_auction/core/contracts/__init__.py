"""
Contract Validation Module

Модуль для валидации JSON контрактов входных данных аукциона.
"""

from .validators import (
    AuctionParametersValidator,
    BidValidator,
    ContractValidator,
    FungibleSupplyValidator,
    SchemaLoader,
    parse_auction_parameters,
    parse_bid,
    parse_bids,
    parse_fungible_supply,
    validate_auction_parameters,
    validate_bid,
    validate_fungible_supply,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BidValidator",
    "AuctionParametersValidator",
    "FungibleSupplyValidator",
    # Functions
    "validate_bid",
    "validate_auction_parameters",
    "validate_fungible_supply",
    "parse_bid",
    "parse_bids",
    "parse_auction_parameters",
    "parse_fungible_supply",
]
