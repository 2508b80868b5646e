"""
ClearingEngine: Клиринг uniform-price аукциона

Один проход слева направо по упорядоченным заявкам с аккумулятором allocated:
1. allocated == total_size → отказ SizeExhausted
2. price < floor_price → отказ BelowFloor
3. иначе award = min(total_size - allocated, quantity), allocated += award

Clearing price = цена последней заявки с ненулевым award (самая низкая
выигравшая цена; она же единственная возможная частично исполненная заявка).

Классифицированная заявка больше не пересматривается. Перестановок после
исчерпания объёма нет: проход строго однопроходный.
Чистая функция: для корректного входа исключений не бросает.
"""

import logging
from typing import List, Sequence, Union

from tranche_auction.core.domain.bid import AuctionParameters, Bid, RankedBid
from tranche_auction.core.domain.outcome import (
    AwardedBid,
    ClearingOutcome,
    RejectedBid,
    RejectReason,
)


logger = logging.getLogger(__name__)


class ClearingEngine:
    """
    Движок клиринга.

    Принимает заявки уже в порядке BidOrderer. Порядок входа критичен:
    при равной цене на границе объёма полное исполнение получает
    заявка, стоящая раньше.
    """

    def clear(
        self,
        params: AuctionParameters,
        ordered_bids: Sequence[Union[Bid, RankedBid]],
    ) -> ClearingOutcome:
        """
        Клиринг упорядоченного набора заявок.

        Args:
            params: Параметры аукциона (total_size, floor_price)
            ordered_bids: Заявки в порядке ранжирования (Bid или RankedBid)

        Returns:
            ClearingOutcome: awarded в порядке ранга, rejected в порядке,
            обратном обработке
        """
        allocated = 0
        awarded: List[AwardedBid] = []
        rejected: List[RejectedBid] = []

        for position, entry in enumerate(ordered_bids):
            if isinstance(entry, RankedBid):
                rank, bid = entry.rank, entry.bid
            else:
                rank, bid = position, entry

            if allocated == params.total_size:
                rejected.append(RejectedBid(bid=bid, reason=RejectReason.SIZE_EXHAUSTED, rank=rank))
                logger.debug("Bid %s rejected: size exhausted", bid.origin_ref)
                continue

            if not params.is_price_eligible(bid.price):
                rejected.append(RejectedBid(bid=bid, reason=RejectReason.BELOW_FLOOR, rank=rank))
                logger.debug(
                    "Bid %s rejected: price %s below floor %s",
                    bid.origin_ref,
                    bid.price,
                    params.floor_price,
                )
                continue

            award = min(params.total_size - allocated, bid.quantity)
            awarded.append(AwardedBid(bid=bid, awarded_quantity=award, rank=rank))
            allocated += award
            logger.debug(
                "Bid %s awarded %d of %d at bid price %s",
                bid.origin_ref,
                award,
                bid.quantity,
                bid.price,
            )

        # Отклонённые накапливаются в порядке, обратном обработке
        rejected.reverse()

        clearing_price = awarded[-1].bid.price if awarded else None

        outcome = ClearingOutcome(
            clearing_price=clearing_price,
            allocated_quantity=allocated,
            total_size=params.total_size,
            awarded=tuple(awarded),
            rejected=tuple(rejected),
        )

        logger.info(
            "Clearing complete: clearing_price=%s allocated=%d/%d awarded=%d rejected=%d",
            clearing_price,
            allocated,
            params.total_size,
            len(awarded),
            len(rejected),
        )
        return outcome


def clear(params: AuctionParameters, ordered_bids: Sequence[Union[Bid, RankedBid]]) -> ClearingOutcome:
    """Клиринг (функциональная обёртка над ClearingEngine)."""
    return ClearingEngine().clear(params, ordered_bids)
