"""
Decimal Arithmetic: точная арифметика количеств и цен

Модуль обеспечивает точность всех операций с количествами и ценами аукциона:
- Безопасная конверсия в Decimal (через str, без бинарного шума float)
- Локальный decimal-контекст, в котором любое округление является ошибкой
- Точное суммирование и точное сравнение (без epsilon)
- Валидация знака и конечности значений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Количества никогда не сравниваются через float
2. NaN/Inf никогда не попадают в вычисления
3. Сложение и вычитание количеств не округляются молча (Inexact/Rounded → исключение)
4. Все операции детерминированы и воспроизводимы
"""

from contextlib import contextmanager
from decimal import (
    Clamped,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    ROUND_HALF_EVEN,
    Rounded,
    localcontext,
)
from typing import Final, Iterable, Iterator


# =============================================================================
# ПАРАМЕТРЫ КОНТЕКСТА
# =============================================================================

# Точность по умолчанию (значащих цифр), достаточная для финансовых расчётов
DEFAULT_DECIMAL_PRECISION: Final[int] = 50

# Сигналы, которые внутри аукционного контекста превращаются в исключения
AUCTION_DECIMAL_TRAPS: Final[tuple] = (
    InvalidOperation,
    DivisionByZero,
    Overflow,
    Inexact,
    Rounded,
    Clamped,
)

DECIMAL_ZERO: Final[Decimal] = Decimal(0)


@contextmanager
def auction_decimal_context(precision: int = DEFAULT_DECIMAL_PRECISION) -> Iterator[Context]:
    """
    Локальный decimal-контекст для вычислений над количествами и ценами.

    Внутри контекста любая операция, требующая округления, выбрасывает
    decimal.Inexact / decimal.Rounded. Глобальный контекст не меняется.

    Args:
        precision: Количество значащих цифр (default: 50)

    Yields:
        Активный decimal.Context

    Raises:
        ValueError: Если precision < 1
    """
    if precision < 1:
        raise ValueError(f"precision must be positive, got {precision}")

    with localcontext() as ctx:
        ctx.prec = precision
        ctx.rounding = ROUND_HALF_EVEN
        ctx.clear_flags()
        for signal in list(ctx.traps):
            ctx.traps[signal] = signal in AUCTION_DECIMAL_TRAPS
        yield ctx


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_decimal(value) -> Decimal:
    """
    Безопасное преобразование значения в Decimal.

    float преобразуется через str(), чтобы 0.1 стало Decimal('0.1'),
    а не Decimal('0.1000000000000000055511151231257827...').

    Args:
        value: int, str, float или Decimal

    Returns:
        Конечное Decimal-значение

    Raises:
        ValueError: Если значение не число, bool, NaN или Inf

    Examples:
        >>> to_decimal("10.50")
        Decimal('10.50')
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal(7)
        Decimal('7')
    """
    if isinstance(value, bool):
        raise ValueError(f"bool is not a numeric value: {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Invalid numeric value: {value!r}")
    else:
        raise ValueError(f"Unsupported numeric type {type(value).__name__}: {value!r}")

    if not result.is_finite():
        raise ValueError(f"Numeric value must be finite (not NaN/Inf), got {value!r}")

    return result


# =============================================================================
# ТОЧНЫЕ ОПЕРАЦИИ
# =============================================================================


def exact_sum(values: Iterable[Decimal], precision: int = DEFAULT_DECIMAL_PRECISION) -> Decimal:
    """
    Точная сумма Decimal-значений.

    Args:
        values: Последовательность значений (int/str/Decimal допускаются)
        precision: Точность контекста

    Returns:
        Сумма без округления

    Raises:
        decimal.Inexact: Если сумма не представима с заданной точностью
    """
    with auction_decimal_context(precision):
        total = DECIMAL_ZERO
        for value in values:
            total += to_decimal(value)
        return total


def exact_difference(
    minuend: Decimal, subtrahend: Decimal, precision: int = DEFAULT_DECIMAL_PRECISION
) -> Decimal:
    """Точная разность minuend - subtrahend (без округления)."""
    with auction_decimal_context(precision):
        return to_decimal(minuend) - to_decimal(subtrahend)


def exact_product(
    left: Decimal, right: Decimal, precision: int = DEFAULT_DECIMAL_PRECISION
) -> Decimal:
    """Точное произведение (например, payment = clearing_price * quantity)."""
    with auction_decimal_context(precision):
        return to_decimal(left) * to_decimal(right)


def is_exact_equal(left, right) -> bool:
    """
    Точное сравнение двух количеств.

    Decimal('1.0') == Decimal('1') → True: сравнивается значение, а не запись.

    Examples:
        >>> is_exact_equal("100", Decimal("100.00"))
        True
        >>> is_exact_equal("0.3", 0.1 + 0.2)
        False
    """
    return to_decimal(left) == to_decimal(right)


def is_integral(value) -> bool:
    """Проверка, что Decimal-значение целое (100, 100.00, но не 100.5)."""
    d = to_decimal(value)
    return d == d.to_integral_value()


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive_decimal(value, name: str) -> Decimal:
    """
    Валидация, что значение конечное и строго положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Значение в виде Decimal

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    d = to_decimal(value)
    if d <= DECIMAL_ZERO:
        raise ValueError(f"{name} must be positive, got {d}")
    return d


def validate_non_negative_decimal(value, name: str) -> Decimal:
    """
    Валидация, что значение конечное и неотрицательное.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    d = to_decimal(value)
    if d < DECIMAL_ZERO:
        raise ValueError(f"{name} must be non-negative, got {d}")
    return d
