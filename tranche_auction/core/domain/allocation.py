"""
Allocation: Модель аллокации актива победителю

Одна аллокация на каждую awarded заявку. Создаётся AssetAllocator и сразу
передаётся внешнему построителю settlement-инструкций.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tranche_auction.core.math.decimal_arithmetic import to_decimal


class Allocation(BaseModel):
    """
    Аллокация: под-баланс, соответствующий присуждённому объёму заявки.

    Immutable модель (frozen=True).
    """

    bid_ref: str = Field(..., min_length=1, description="origin_ref выигравшей заявки")
    quantity: Decimal = Field(..., gt=0, description="Объём под-баланса")
    balance_handle: str = Field(..., min_length=1, description="Идентификатор handle под-баланса")

    model_config = {"frozen": True}  # Immutable

    @field_validator("quantity", mode="before")
    @classmethod
    def validate_quantity_exact(cls, v) -> Decimal:
        return to_decimal(v)
