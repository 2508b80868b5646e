"""
Config: настройки прогона аукциона и логирования

Настройки читаются из переменных окружения с префиксом TRANCHE_AUCTION_
(и из .env, если он есть). Параметры самого аукциона (total_size, floor_price)
здесь не живут: они задаются на каждый прогон через AuctionParameters.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tranche_auction.core.math.decimal_arithmetic import DEFAULT_DECIMAL_PRECISION


DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class AuctionSettings(BaseSettings):
    """
    Настройки прогона аукциона.

    Переменные окружения: TRANCHE_AUCTION_DECIMAL_PRECISION,
    TRANCHE_AUCTION_LOG_LEVEL, TRANCHE_AUCTION_VALIDATE_CONTRACTS и т.д.
    decimal_precision применяется ко всей арифметике прогона: остатки при
    split, аудит сохранения, платежи settlement.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRANCHE_AUCTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    decimal_precision: int = Field(
        default=DEFAULT_DECIMAL_PRECISION,
        ge=1,
        description="Значащие цифры для точной арифметики объёмов и платежей",
    )
    log_level: str = Field(default="INFO", description="Уровень логирования пакета")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT, description="Формат строки logging")
    validate_contracts: bool = Field(
        default=True,
        description="Валидация входа (дубликаты, объёмы, баланс) до клиринга",
    )
    verify_conservation: bool = Field(
        default=True,
        description="Повторный аудит закона сохранения в конце прогона",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> AuctionSettings:
    """Кэшированные настройки из окружения (сброс: get_settings.cache_clear())."""
    return AuctionSettings()


def configure_logging(settings: AuctionSettings | None = None) -> None:
    """Настройка логгера пакета tranche_auction по settings."""
    settings = settings or get_settings()

    package_logger = logging.getLogger("tranche_auction")
    package_logger.setLevel(settings.log_level)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.log_format))
        package_logger.addHandler(handler)
