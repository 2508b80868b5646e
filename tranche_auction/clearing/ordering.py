"""
BidOrderer: Детерминированное ранжирование заявок

Полный порядок заявок:
1. Более высокая цена первой
2. При равной цене раньше поданная заявка первой
3. При равных цене и времени сохраняется входной порядок (stable sort)

Побочных эффектов нет. Некорректные заявки (quantity <= 0) отсекаются
моделью Bid ещё до ранжирования.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Tuple

from tranche_auction.core.domain.bid import Bid, RankedBid


logger = logging.getLogger(__name__)


def bid_sort_key(bid: Bid) -> Tuple[Decimal, int]:
    """
    Ключ сортировки заявки.

    copy_negate() не зависит от decimal-контекста, поэтому цена с любым
    числом значащих цифр инвертируется без округления.
    """
    return (bid.price.copy_negate(), bid.submitted_ts_utc_ms)


class BidOrderer:
    """Ранжирование заявок: цена по убыванию, затем время подачи по возрастанию."""

    def order(self, bids: Iterable[Bid]) -> List[Bid]:
        """
        Упорядочивание заявок.

        Args:
            bids: Набор заявок (любой итерируемый)

        Returns:
            Новый список в порядке приоритета
        """
        ordered = sorted(bids, key=bid_sort_key)
        logger.debug("Ordered %d bids", len(ordered))
        return ordered

    def rank(self, bids: Iterable[Bid]) -> List[RankedBid]:
        """
        Упорядочивание с аннотацией позиции (0 = лучшая заявка).

        Returns:
            Список RankedBid в порядке приоритета
        """
        return [RankedBid(rank=i, bid=bid) for i, bid in enumerate(self.order(bids))]


def order_bids(bids: Iterable[Bid]) -> List[Bid]:
    """Упорядочивание заявок (функциональная обёртка над BidOrderer)."""
    return BidOrderer().order(bids)


def rank_bids(bids: Iterable[Bid]) -> List[RankedBid]:
    """Ранжирование заявок (функциональная обёртка над BidOrderer)."""
    return BidOrderer().rank(bids)
