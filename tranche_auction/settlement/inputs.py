"""
Settlement inputs: контракт на входе внешнего построителя settlement-инструкций

Для каждого победителя: пара (awarded заявка, аллокация), сопоставленная 1:1
по origin_ref, плюс единая clearing price:
    payment = clearing_price * allocation.quantity

Для каждой отклонённой заявки: уведомление с причиной отказа.
Построение DvP-инструкций и их исполнение остаются внешними.
"""

from decimal import Decimal
from typing import List, Sequence

from pydantic import BaseModel, Field

from tranche_auction.core.domain.allocation import Allocation
from tranche_auction.core.domain.outcome import ClearingOutcome, RejectReason
from tranche_auction.core.errors import SettlementPairingError
from tranche_auction.core.math.decimal_arithmetic import DEFAULT_DECIMAL_PRECISION, exact_sum


class DeliveryVersusPaymentInput(BaseModel):
    """Вход DvP-инструкции для одного победителя."""

    bid_ref: str = Field(..., min_length=1, description="origin_ref выигравшей заявки")
    quantity: Decimal = Field(..., gt=0, description="Поставляемый объём")
    clearing_price: Decimal = Field(..., description="Единая цена отсечения")
    payment: Decimal = Field(..., description="clearing_price * quantity")
    balance_handle: str = Field(..., min_length=1, description="Handle поставляемого под-баланса")
    partial_fill: bool = Field(False, description="Заявка исполнена частично")

    model_config = {"frozen": True}  # Immutable


class RejectionNotice(BaseModel):
    """Уведомление об отказе для отклонённой заявки."""

    bid_ref: str = Field(..., min_length=1, description="origin_ref отклонённой заявки")
    reason: RejectReason = Field(..., description="Причина отказа")

    model_config = {"frozen": True}  # Immutable


class SettlementInputs(BaseModel):
    """Полный набор входов settlement для одного прогона."""

    deliveries: tuple[DeliveryVersusPaymentInput, ...] = Field(default=())
    rejections: tuple[RejectionNotice, ...] = Field(default=())
    decimal_precision: int = Field(
        default=DEFAULT_DECIMAL_PRECISION, ge=1, description="Точность расчёта платежей"
    )

    model_config = {"frozen": True}  # Immutable

    @property
    def total_payment(self) -> Decimal:
        return exact_sum((d.payment for d in self.deliveries), self.decimal_precision)


def build_settlement_inputs(
    outcome: ClearingOutcome,
    allocations: Sequence[Allocation],
    precision: int = DEFAULT_DECIMAL_PRECISION,
) -> SettlementInputs:
    """
    Сопоставление awarded заявок и аллокаций.

    Args:
        outcome: Результат клиринга
        allocations: Аллокации в порядке awarded
        precision: Точность decimal-контекста для payment

    Returns:
        SettlementInputs: DvP-входы в порядке awarded и уведомления в порядке rejected

    Raises:
        SettlementPairingError: Если awarded и аллокации не сопоставляются 1:1
    """
    if len(outcome.awarded) != len(allocations):
        raise SettlementPairingError(
            f"{len(outcome.awarded)} awarded bids but {len(allocations)} allocations"
        )

    deliveries: List[DeliveryVersusPaymentInput] = []
    for awarded, allocation in zip(outcome.awarded, allocations):
        if awarded.origin_ref != allocation.bid_ref:
            raise SettlementPairingError(
                f"Awarded bid {awarded.origin_ref!r} paired with allocation for {allocation.bid_ref!r}"
            )
        if allocation.quantity != awarded.awarded_quantity:
            raise SettlementPairingError(
                f"Allocation {allocation.quantity} for {allocation.bid_ref!r} does not match "
                f"awarded quantity {awarded.awarded_quantity}"
            )

        deliveries.append(
            DeliveryVersusPaymentInput(
                bid_ref=allocation.bid_ref,
                quantity=allocation.quantity,
                clearing_price=outcome.clearing_price,
                payment=outcome.payment_for(allocation.quantity, precision),
                balance_handle=allocation.balance_handle,
                partial_fill=awarded.is_partial_fill,
            )
        )

    rejections = tuple(RejectionNotice(bid_ref=r.origin_ref, reason=r.reason) for r in outcome.rejected)

    return SettlementInputs(
        deliveries=tuple(deliveries), rejections=rejections, decimal_precision=precision
    )
