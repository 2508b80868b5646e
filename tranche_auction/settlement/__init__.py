"""Settlement: входной контракт внешнего построителя DvP-инструкций."""

from .inputs import (
    DeliveryVersusPaymentInput,
    RejectionNotice,
    SettlementInputs,
    build_settlement_inputs,
)

__all__ = [
    "DeliveryVersusPaymentInput",
    "RejectionNotice",
    "SettlementInputs",
    "build_settlement_inputs",
]
