"""
Bid: Модель заявки sealed-bid аукциона

Immutable Pydantic модели:
- Bid: одна заявка (цена, количество, время подачи, ссылка на источник)
- AuctionParameters: параметры одного прогона клиринга (объём, floor price)
- RankedBid: заявка с позицией в полном порядке BidOrderer

Заявки не изменяются после создания, только переклассифицируются
(awarded / rejected) в ходе клиринга.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tranche_auction.core.math.decimal_arithmetic import to_decimal


# =============================================================================
# BID MODEL
# =============================================================================


class Bid(BaseModel):
    """
    Модель заявки участника.

    price может быть любым конечным Decimal, но выиграть может только
    заявка с price >= floor_price. origin_ref: непрозрачный идентификатор
    источника (контракт, участник), используется для аудита и сопоставления
    с аллокациями.

    Immutable модель (frozen=True).
    """

    price: Decimal = Field(..., description="Цена заявки (за единицу)")
    quantity: int = Field(..., gt=0, description="Запрошенное количество (целое, > 0)")
    submitted_ts_utc_ms: int = Field(
        ..., ge=0, description="Время подачи заявки (UTC, миллисекунды)"
    )
    origin_ref: str = Field(..., min_length=1, description="Непрозрачная ссылка на источник заявки")

    model_config = {"frozen": True}  # Immutable

    @field_validator("price", mode="before")
    @classmethod
    def validate_price_exact(cls, v) -> Decimal:
        """Цена приводится к Decimal через str (без бинарного шума float), NaN/Inf запрещены."""
        return to_decimal(v)


# =============================================================================
# AUCTION PARAMETERS
# =============================================================================


class AuctionParameters(BaseModel):
    """
    Параметры аукциона.

    Задаются один раз при старте аукциона и неизменны в течение прогона клиринга.
    total_size == 0 допустим на уровне модели: движок клиринга отклоняет
    все заявки с SizeExhausted. Запрет total_size <= 0 при непустом наборе
    заявок проверяется при ingestion.
    """

    total_size: int = Field(..., ge=0, description="Общий объём аукциона (целые единицы)")
    floor_price: Decimal = Field(..., description="Минимальная цена (включительно)")

    model_config = {"frozen": True}  # Immutable

    @field_validator("floor_price", mode="before")
    @classmethod
    def validate_floor_price_exact(cls, v) -> Decimal:
        """Floor price приводится к Decimal, NaN/Inf запрещены."""
        return to_decimal(v)

    def is_price_eligible(self, price: Decimal) -> bool:
        """Проверка, что цена не ниже floor price (граница включительно)."""
        return price >= self.floor_price


# =============================================================================
# RANKED BID
# =============================================================================


class RankedBid(BaseModel):
    """Заявка, аннотированная позицией (0 = лучшая) в полном порядке BidOrderer."""

    rank: int = Field(..., ge=0, description="Позиция в ранжировании (0-based)")
    bid: Bid = Field(..., description="Исходная заявка")

    model_config = {"frozen": True}  # Immutable

    @property
    def price(self) -> Decimal:
        return self.bid.price

    @property
    def quantity(self) -> int:
        return self.bid.quantity

    @property
    def origin_ref(self) -> str:
        return self.bid.origin_ref
