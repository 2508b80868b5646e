"""
Errors: таксономия ошибок аукционного ядра

Три класса ситуаций:
1. Ошибки валидации (нарушение контракта вызывающей стороной) → AuctionInputError
2. Бизнес-отказы (BelowFloor, SizeExhausted) → НЕ исключения, это данные в ClearingOutcome
3. Нарушения инвариантов (баг выше по цепочке) → AuctionInvariantViolation

Ядро не делает retry: вычисление чистое, повтор с теми же входами даст ту же ошибку.
"""


# =============================================================================
# ОШИБКИ ВАЛИДАЦИИ
# =============================================================================


class AuctionInputError(ValueError):
    """Нарушение контракта входных данных (отклоняется до или на границе ядра)."""


class BidValidationError(AuctionInputError):
    """
    Некорректный набор заявок или параметров аукциона.

    Примеры: дублирующийся origin_ref, quantity <= 0,
    total_size <= 0 при непустом наборе заявок.
    """


class SupplyValidationError(AuctionInputError):
    """Некорректный fungible-баланс (пустой или неположительный объём)."""


# =============================================================================
# НАРУШЕНИЯ ИНВАРИАНТОВ
# =============================================================================


class AuctionInvariantViolation(Exception):
    """
    Критическое нарушение инварианта ядра.

    Указывает на ошибку вызывающей стороны или порядка заявок, а не на
    восстанавливаемое runtime-состояние. Никогда не перехватывается внутри ядра.
    """


class InsufficientSupplyError(AuctionInvariantViolation):
    """Awarded-объём превышает доступный fungible-баланс."""


class ConservationViolation(AuctionInvariantViolation):
    """
    Нарушен закон сохранения:
    sum(allocation.quantity) + remainder.quantity != original supply.quantity
    """


class SupplyHandleConsumedError(AuctionInvariantViolation):
    """Повторное использование уже поглощённого handle (double spend)."""


class SettlementPairingError(AuctionInvariantViolation):
    """Awarded-заявки и аллокации не сопоставляются 1:1 по origin_ref."""
