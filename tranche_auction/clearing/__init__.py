"""Clearing: ранжирование заявок, валидация входа и клиринг uniform-price аукциона."""

from .engine import ClearingEngine, clear
from .ingestion import validate_auction_inputs, validate_bid_set, validate_supply
from .ordering import BidOrderer, bid_sort_key, order_bids, rank_bids

__all__ = [
    "BidOrderer",
    "bid_sort_key",
    "order_bids",
    "rank_bids",
    "ClearingEngine",
    "clear",
    "validate_auction_inputs",
    "validate_bid_set",
    "validate_supply",
]
