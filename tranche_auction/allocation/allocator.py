"""
AssetAllocator: Точное разбиение fungible-баланса под победителей

Последовательное поглощение баланса в порядке awarded:
1. awarded пуст → баланс возвращается целиком как remainder
2. текущий объём точно равен award → handle целиком становится аллокацией,
   remainder отсутствует
3. иначе split(award) → fragment становится аллокацией, remainder становится
   текущим балансом

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. sum(allocation.quantity) + remainder.quantity == original supply.quantity (точно)
2. Сравнение "точное совпадение / split" только через Decimal, без float
3. Нехватка баланса → InsufficientSupplyError (никакого усечения)
4. Каждый handle используется ровно один раз
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple, Union

from tranche_auction.core.domain.allocation import Allocation
from tranche_auction.core.domain.bid import Bid
from tranche_auction.core.domain.outcome import AwardedBid
from tranche_auction.core.domain.supply import FungibleSupply
from tranche_auction.core.errors import (
    BidValidationError,
    ConservationViolation,
    InsufficientSupplyError,
)
from tranche_auction.core.math.decimal_arithmetic import (
    DECIMAL_ZERO,
    DEFAULT_DECIMAL_PRECISION,
    exact_sum,
    is_exact_equal,
    to_decimal,
)


logger = logging.getLogger(__name__)


AwardEntry = Union[AwardedBid, Tuple[Bid, int]]


@dataclass(frozen=True)
class AllocationResult:
    """Результат аллокации."""

    allocations: Tuple[Allocation, ...]
    remainder: Optional[FungibleSupply]

    # Аудит
    original_quantity: Decimal
    original_handle_id: str

    precision: int = DEFAULT_DECIMAL_PRECISION

    @property
    def allocated_total(self) -> Decimal:
        return exact_sum((a.quantity for a in self.allocations), self.precision)

    @property
    def remainder_quantity(self) -> Decimal:
        return self.remainder.quantity if self.remainder is not None else DECIMAL_ZERO

    def allocation_for(self, bid_ref: str) -> Optional[Allocation]:
        for allocation in self.allocations:
            if allocation.bid_ref == bid_ref:
                return allocation
        return None


def _unpack_award(entry: AwardEntry) -> Tuple[str, Decimal]:
    if isinstance(entry, AwardedBid):
        ref, qty = entry.bid.origin_ref, entry.awarded_quantity
    else:
        bid, qty = entry
        ref = bid.origin_ref

    amount = to_decimal(qty)
    if amount <= 0:
        raise BidValidationError(f"Awarded quantity for {ref!r} must be positive, got {amount}")
    return ref, amount


class AssetAllocator:
    """
    Аллокатор актива.

    Баланс является линейным ресурсом: каждый split поглощает входной handle,
    поэтому повторная аллокация из того же handle невозможна.
    """

    def __init__(self, precision: int = DEFAULT_DECIMAL_PRECISION):
        """
        Args:
            precision: Точность decimal-контекста для вычисления остатков
        """
        self.precision = precision

    def allocate(self, supply: FungibleSupply, awarded: Sequence[AwardEntry]) -> AllocationResult:
        """
        Разбиение баланса под awarded заявки.

        Args:
            supply: Живой handle полного предложенного баланса
            awarded: Победители в порядке ранга (AwardedBid или пары (Bid, award))

        Returns:
            AllocationResult: аллокации в порядке awarded и remainder (или None)

        Raises:
            SupplyHandleConsumedError: Если supply уже поглощён
            InsufficientSupplyError: Если awarded требует больше, чем есть в балансе
            ConservationViolation: Если нарушен закон сохранения
        """
        supply.ensure_live()

        original_quantity = supply.quantity
        original_handle_id = supply.handle_id

        if not awarded:
            logger.info("No awarded bids: supply %s returned intact", original_handle_id)
            return AllocationResult(
                allocations=(),
                remainder=supply,
                original_quantity=original_quantity,
                original_handle_id=original_handle_id,
                precision=self.precision,
            )

        allocations: List[Allocation] = []
        current: Optional[FungibleSupply] = supply

        for entry in awarded:
            ref, amount = _unpack_award(entry)

            if current is None:
                raise InsufficientSupplyError(
                    f"Supply {original_handle_id!r} exhausted before allocating {amount} to {ref!r}"
                )

            if is_exact_equal(current.quantity, amount):
                handle_id = current.consume()
                current = None
                logger.debug("Allocated whole handle %s (%s) to %s", handle_id, amount, ref)
            else:
                fragment, current = current.split(amount, self.precision)
                handle_id = fragment.consume()
                logger.debug(
                    "Split %s to %s, remainder %s (%s)",
                    amount,
                    ref,
                    current.handle_id,
                    current.quantity,
                )

            allocations.append(Allocation(bid_ref=ref, quantity=amount, balance_handle=handle_id))

        result = AllocationResult(
            allocations=tuple(allocations),
            remainder=current,
            original_quantity=original_quantity,
            original_handle_id=original_handle_id,
            precision=self.precision,
        )
        verify_conservation(result, self.precision)

        logger.info(
            "Allocation complete: %d allocations, allocated=%s remainder=%s of %s",
            len(allocations),
            result.allocated_total,
            result.remainder_quantity,
            original_quantity,
        )
        return result


def verify_conservation(result: AllocationResult, precision: Optional[int] = None) -> None:
    """
    Проверка закона сохранения.

    Args:
        result: Результат аллокации
        precision: Точность decimal-контекста (default: result.precision)

    Raises:
        ConservationViolation: sum(allocations) + remainder != original_quantity
    """
    if precision is None:
        precision = result.precision

    total = exact_sum(
        [*(a.quantity for a in result.allocations), result.remainder_quantity], precision
    )
    if total != result.original_quantity:
        raise ConservationViolation(
            f"Conservation violated for supply {result.original_handle_id!r}: "
            f"allocated {result.allocated_total} + remainder {result.remainder_quantity} "
            f"= {total} != {result.original_quantity}"
        )


def allocate(supply: FungibleSupply, awarded: Sequence[AwardEntry]) -> AllocationResult:
    """Аллокация (функциональная обёртка над AssetAllocator)."""
    return AssetAllocator().allocate(supply, awarded)
