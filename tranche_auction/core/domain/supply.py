"""
FungibleSupply: Линейный handle делимого баланса

Баланс актива, предложенный продавцом. Ровно один логический владелец:
- split() поглощает текущий handle и создаёт ровно два новых (fragment + remainder)
- consume() поглощает handle целиком (точное совпадение объёма)
- любое обращение к поглощённому handle → SupplyHandleConsumedError

Идентификаторы handle детерминированы: корневой handle сохраняет свой id,
шаг разбиения n порождает "{root}/fragment-{n}" и "{root}/remainder-{n}".
"""

from decimal import Decimal
from typing import Tuple

from tranche_auction.core.errors import (
    InsufficientSupplyError,
    SupplyHandleConsumedError,
    SupplyValidationError,
)
from tranche_auction.core.math.decimal_arithmetic import (
    DEFAULT_DECIMAL_PRECISION,
    exact_difference,
    to_decimal,
)


DEFAULT_SUPPLY_HANDLE_ID = "supply"


class FungibleSupply:
    """
    Делимый баланс с move-семантикой.

    Attributes:
        quantity: Объём баланса (Decimal, > 0)
        handle_id: Детерминированный идентификатор handle
        root_id: Идентификатор исходного (корневого) handle
        generation: Номер шага разбиения, породившего handle (0 для корня)
    """

    def __init__(self, quantity, handle_id: str = DEFAULT_SUPPLY_HANDLE_ID):
        """
        Args:
            quantity: Объём баланса (int/str/Decimal, строго положительный)
            handle_id: Идентификатор корневого handle

        Raises:
            SupplyValidationError: Если объём не положительный или handle_id пуст
        """
        try:
            amount = to_decimal(quantity)
        except ValueError as e:
            raise SupplyValidationError(f"Invalid supply quantity: {e}")

        if amount <= 0:
            raise SupplyValidationError(f"Supply quantity must be positive, got {amount}")
        if not handle_id:
            raise SupplyValidationError("Supply handle_id must be non-empty")

        self._quantity = amount
        self._handle_id = handle_id
        self._root_id = handle_id
        self._generation = 0
        self._consumed = False

    @classmethod
    def _derive(cls, quantity: Decimal, handle_id: str, root_id: str, generation: int) -> "FungibleSupply":
        handle = cls(quantity, handle_id)
        handle._root_id = root_id
        handle._generation = generation
        return handle

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def quantity(self) -> Decimal:
        return self._quantity

    @property
    def handle_id(self) -> str:
        return self._handle_id

    @property
    def root_id(self) -> str:
        return self._root_id

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_consumed(self) -> bool:
        return self._consumed

    # -------------------------------------------------------------------------
    # Операции (поглощают handle)
    # -------------------------------------------------------------------------

    def ensure_live(self) -> None:
        """
        Raises:
            SupplyHandleConsumedError: Если handle уже поглощён
        """
        if self._consumed:
            raise SupplyHandleConsumedError(
                f"Supply handle {self._handle_id!r} has already been consumed"
            )

    def consume(self) -> str:
        """
        Поглощение handle целиком (передача баланса без разбиения).

        Returns:
            handle_id поглощённого баланса
        """
        self.ensure_live()
        self._consumed = True
        return self._handle_id

    def split(
        self, quantity, precision: int = DEFAULT_DECIMAL_PRECISION
    ) -> Tuple["FungibleSupply", "FungibleSupply"]:
        """
        Разбиение баланса на fragment (quantity) и remainder (self.quantity - quantity).

        Текущий handle поглощается. Объём fragment должен быть строго меньше
        текущего: точное совпадение обрабатывается через consume().

        Args:
            quantity: Объём fragment (> 0, < self.quantity)
            precision: Точность decimal-контекста

        Returns:
            (fragment, remainder)

        Raises:
            SupplyHandleConsumedError: Если handle уже поглощён
            SupplyValidationError: Если quantity <= 0 или равен текущему объёму
            InsufficientSupplyError: Если quantity > self.quantity
        """
        self.ensure_live()

        amount = to_decimal(quantity)
        if amount <= 0:
            raise SupplyValidationError(f"Split quantity must be positive, got {amount}")
        if amount > self._quantity:
            raise InsufficientSupplyError(
                f"Cannot split {amount} from supply handle {self._handle_id!r} "
                f"holding only {self._quantity}"
            )
        if amount == self._quantity:
            raise SupplyValidationError(
                f"Split quantity {amount} equals the whole handle {self._handle_id!r}; "
                f"use consume() for an exact match"
            )

        rest = exact_difference(self._quantity, amount, precision)
        step = self._generation + 1

        self._consumed = True

        fragment = FungibleSupply._derive(amount, f"{self._root_id}/fragment-{step}", self._root_id, step)
        remainder = FungibleSupply._derive(rest, f"{self._root_id}/remainder-{step}", self._root_id, step)
        return fragment, remainder

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "live"
        return f"FungibleSupply(handle_id={self._handle_id!r}, quantity={self._quantity}, {state})"
