"""
Auction run: полный прогон клиринга и аллокации

Порядок:
1. Валидация входа (ingestion)
2. Ранжирование заявок (BidOrderer)
3. Клиринг (ClearingEngine)
4. Аллокация баланса (AssetAllocator)
5. Аудит закона сохранения
6. Входы settlement (DvP + уведомления об отказе)

Прогон чистый и синхронный, единственный побочный эффект: логирование.
Одинаковые входы дают одинаковый результат, включая идентификаторы handle.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from tranche_auction.allocation.allocator import AllocationResult, AssetAllocator, verify_conservation
from tranche_auction.clearing.engine import ClearingEngine
from tranche_auction.clearing.ingestion import validate_auction_inputs
from tranche_auction.clearing.ordering import BidOrderer
from tranche_auction.config import AuctionSettings, get_settings
from tranche_auction.core.domain.bid import AuctionParameters, Bid, RankedBid
from tranche_auction.core.domain.outcome import ClearingOutcome
from tranche_auction.core.domain.supply import FungibleSupply
from tranche_auction.core.errors import ConservationViolation
from tranche_auction.core.math.decimal_arithmetic import to_decimal
from tranche_auction.settlement.inputs import SettlementInputs, build_settlement_inputs


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuctionRunResult:
    """Результат одного прогона аукциона."""

    ranked_bids: tuple[RankedBid, ...]
    outcome: ClearingOutcome
    allocation: AllocationResult
    settlement: SettlementInputs


def run_auction(
    params: AuctionParameters,
    bids: Sequence[Bid],
    supply: FungibleSupply,
    settings: AuctionSettings | None = None,
) -> AuctionRunResult:
    """
    Полный прогон аукциона.

    Args:
        params: Параметры аукциона
        bids: Набор заявок (в любом порядке)
        supply: Живой handle полного предложенного баланса (поглощается прогоном,
            если есть хотя бы один победитель)
        settings: Настройки (default: get_settings())

    Returns:
        AuctionRunResult

    Raises:
        BidValidationError / SupplyValidationError: Нарушение контракта входа
        AuctionInvariantViolation: Нарушение инварианта (нехватка баланса,
            закон сохранения, повторное использование handle)
    """
    settings = settings or get_settings()

    if settings.validate_contracts:
        validate_auction_inputs(params, bids, supply)

    logger.info(
        "Auction run: %d bids, total_size=%d, floor_price=%s, supply=%s (%s)",
        len(bids),
        params.total_size,
        params.floor_price,
        supply.handle_id,
        supply.quantity,
    )

    ranked = BidOrderer().rank(bids)
    outcome = ClearingEngine().clear(params, ranked)
    allocation = AssetAllocator(settings.decimal_precision).allocate(supply, outcome.awarded)

    if settings.verify_conservation:
        verify_conservation(allocation, settings.decimal_precision)
        if allocation.allocated_total != to_decimal(outcome.allocated_quantity):
            raise ConservationViolation(
                f"Allocated balance {allocation.allocated_total} does not match "
                f"cleared quantity {outcome.allocated_quantity}"
            )

    settlement = build_settlement_inputs(outcome, allocation.allocations, settings.decimal_precision)

    return AuctionRunResult(
        ranked_bids=tuple(ranked),
        outcome=outcome,
        allocation=allocation,
        settlement=settlement,
    )
