"""
ClearingOutcome: Результат одного прогона клиринга

Immutable Pydantic модели:
- RejectReason: причина отказа (BelowFloor / SizeExhausted)
- AwardedBid: выигравшая заявка с присуждённым (возможно частичным) объёмом
- RejectedBid: отклонённая заявка с причиной
- ClearingOutcome: единая цена отсечения, суммарный объём, awarded, rejected

Инварианты ClearingOutcome проверяются при создании модели.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from tranche_auction.core.domain.bid import Bid
from tranche_auction.core.math.decimal_arithmetic import DEFAULT_DECIMAL_PRECISION, exact_product


# =============================================================================
# ENUMS
# =============================================================================


class RejectReason(str, Enum):
    """Причина отклонения заявки (бизнес-отказ, не ошибка)"""

    BELOW_FLOOR = "BelowFloor"  # price < floor_price
    SIZE_EXHAUSTED = "SizeExhausted"  # Объём аукциона исчерпан


# =============================================================================
# AWARDED / REJECTED
# =============================================================================


class AwardedBid(BaseModel):
    """
    Выигравшая заявка.

    Исходная цена заявки сохраняется (нужна для определения clearing price),
    но оплата идёт по единой ClearingOutcome.clearing_price.
    """

    bid: Bid = Field(..., description="Исходная заявка")
    awarded_quantity: int = Field(..., gt=0, description="Присуждённый объём")
    rank: int = Field(..., ge=0, description="Позиция заявки в ранжировании")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="after")
    def validate_award_within_bid(self) -> "AwardedBid":
        """awarded_quantity не может превышать запрошенный объём."""
        if self.awarded_quantity > self.bid.quantity:
            raise ValueError(
                f"awarded_quantity {self.awarded_quantity} exceeds bid quantity "
                f"{self.bid.quantity} (origin_ref={self.bid.origin_ref})"
            )
        return self

    @property
    def origin_ref(self) -> str:
        return self.bid.origin_ref

    @property
    def is_partial_fill(self) -> bool:
        """True если заявка исполнена не полностью."""
        return self.awarded_quantity < self.bid.quantity


class RejectedBid(BaseModel):
    """Отклонённая заявка с причиной отказа."""

    bid: Bid = Field(..., description="Исходная заявка")
    reason: RejectReason = Field(..., description="Причина отказа")
    rank: int = Field(..., ge=0, description="Позиция заявки в ранжировании")

    model_config = {"frozen": True}  # Immutable

    @property
    def origin_ref(self) -> str:
        return self.bid.origin_ref


# =============================================================================
# CLEARING OUTCOME
# =============================================================================


class ClearingOutcome(BaseModel):
    """
    Результат клиринга.

    Инварианты:
    - allocated_quantity == sum(awarded_quantity) <= total_size
    - awarded сохраняет порядок ранжирования
    - clearing_price == цена последней awarded заявки (None если awarded пуст)
    - rejected в порядке, обратном обработке (последняя классифицированная первой)
    """

    clearing_price: Optional[Decimal] = Field(
        None, description="Единая цена отсечения (None если нет победителей)"
    )
    allocated_quantity: int = Field(..., ge=0, description="Суммарный присуждённый объём")
    total_size: int = Field(..., ge=0, description="Объём аукциона для этого прогона")
    awarded: tuple[AwardedBid, ...] = Field(default=(), description="Победители в порядке ранга")
    rejected: tuple[RejectedBid, ...] = Field(default=(), description="Отклонённые заявки")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="after")
    def validate_outcome_invariants(self) -> "ClearingOutcome":
        """Проверка инвариантов объёма, порядка и единой цены."""
        awarded_total = sum(a.awarded_quantity for a in self.awarded)
        if awarded_total != self.allocated_quantity:
            raise ValueError(
                f"allocated_quantity {self.allocated_quantity} != sum of awards {awarded_total}"
            )

        if self.allocated_quantity > self.total_size:
            raise ValueError(
                f"allocated_quantity {self.allocated_quantity} exceeds total_size {self.total_size}"
            )

        ranks = [a.rank for a in self.awarded]
        if ranks != sorted(ranks):
            raise ValueError(f"awarded must preserve rank order, got ranks {ranks}")

        if self.awarded:
            last_price = self.awarded[-1].bid.price
            if self.clearing_price != last_price:
                raise ValueError(
                    f"clearing_price {self.clearing_price} must equal lowest awarded price {last_price}"
                )
        elif self.clearing_price is not None:
            raise ValueError("clearing_price must be None when nothing is awarded")

        return self

    @property
    def has_winners(self) -> bool:
        return bool(self.awarded)

    @property
    def unallocated_quantity(self) -> int:
        """Объём, оставшийся без покупателя (total_size - allocated_quantity)."""
        return self.total_size - self.allocated_quantity

    def payment_for(self, quantity: Decimal, precision: int = DEFAULT_DECIMAL_PRECISION) -> Decimal:
        """
        Платёж победителя по единой цене: clearing_price * quantity.

        Args:
            quantity: Поставляемый объём
            precision: Точность decimal-контекста (значащие цифры)

        Raises:
            ValueError: Если победителей нет (clearing price не определена)
        """
        if self.clearing_price is None:
            raise ValueError("clearing price is undefined: no bids were awarded")
        return exact_product(self.clearing_price, quantity, precision)
