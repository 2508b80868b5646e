"""
Ingestion validation: проверка входа на границе ядра

Нарушения контракта вызывающей стороны отклоняются до клиринга,
а не исправляются молча:
- quantity <= 0
- дублирующийся origin_ref
- total_size <= 0 при непустом наборе заявок
- fungible-баланс уже поглощён или не равен объёму аукциона
"""

from collections import Counter
from typing import Sequence

from tranche_auction.core.domain.bid import AuctionParameters, Bid
from tranche_auction.core.domain.supply import FungibleSupply
from tranche_auction.core.errors import BidValidationError, SupplyValidationError
from tranche_auction.core.math.decimal_arithmetic import is_exact_equal


def validate_bid_set(params: AuctionParameters, bids: Sequence[Bid]) -> None:
    """
    Валидация набора заявок перед клирингом.

    Args:
        params: Параметры аукциона
        bids: Набор заявок

    Raises:
        BidValidationError: При любом нарушении контракта
    """
    if bids and params.total_size <= 0:
        raise BidValidationError(
            f"total_size must be positive when bids exist, got {params.total_size} "
            f"with {len(bids)} bids"
        )

    for bid in bids:
        # Bid.model_construct() не проходит валидацию модели
        if bid.quantity <= 0:
            raise BidValidationError(
                f"Bid {bid.origin_ref!r} has non-positive quantity {bid.quantity}"
            )

    duplicates = sorted(ref for ref, count in Counter(b.origin_ref for b in bids).items() if count > 1)
    if duplicates:
        raise BidValidationError(f"Duplicate bid origin_ref: {', '.join(duplicates)}")


def validate_supply(params: AuctionParameters, supply: FungibleSupply) -> None:
    """
    Валидация fungible-баланса перед аллокацией.

    Баланс должен быть живым handle и ровно равен объёму аукциона.

    Raises:
        SupplyValidationError: Если баланс поглощён или не совпадает с total_size
    """
    if supply.is_consumed:
        raise SupplyValidationError(f"Supply handle {supply.handle_id!r} has already been consumed")

    if not is_exact_equal(supply.quantity, params.total_size):
        raise SupplyValidationError(
            f"Supply quantity {supply.quantity} does not match auction total_size {params.total_size}"
        )


def validate_auction_inputs(
    params: AuctionParameters, bids: Sequence[Bid], supply: FungibleSupply
) -> None:
    """Полная валидация входа одного прогона аукциона."""
    validate_bid_set(params, bids)
    validate_supply(params, supply)
