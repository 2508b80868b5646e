"""
Domain models and value objects.

Contains fundamental auction entities: Bid, AuctionParameters, ClearingOutcome,
FungibleSupply, Allocation.
"""

from tranche_auction.core.domain.allocation import Allocation
from tranche_auction.core.domain.bid import AuctionParameters, Bid, RankedBid
from tranche_auction.core.domain.outcome import (
    AwardedBid,
    ClearingOutcome,
    RejectedBid,
    RejectReason,
)
from tranche_auction.core.domain.supply import DEFAULT_SUPPLY_HANDLE_ID, FungibleSupply

__all__ = [
    # Bid model
    "Bid",
    "AuctionParameters",
    "RankedBid",
    # Outcome model
    "AwardedBid",
    "RejectedBid",
    "RejectReason",
    "ClearingOutcome",
    # Supply model
    "FungibleSupply",
    "DEFAULT_SUPPLY_HANDLE_ID",
    # Allocation model
    "Allocation",
]
