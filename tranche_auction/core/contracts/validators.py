"""
JSON Schema Contract Validators

Модуль для валидации входных payload'ов аукциона согласно формальным JSON Schema
контрактам. Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (tranche_auction/core/contracts/schema/):
- bid.json
- auction_parameters.json
- fungible_supply.json

Decimal-значения передаются строками, чтобы исключить float на входе.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from tranche_auction.core.domain.bid import AuctionParameters, Bid
from tranche_auction.core.domain.supply import DEFAULT_SUPPLY_HANDLE_ID, FungibleSupply


# =============================================================================
# SCHEMA REGISTRY
# =============================================================================

SCHEMA_DIR = Path(__file__).parent / "schema"


class SchemaLoader:
    """
    Реестр контрактов аукциона.

    Каждая схема читается с диска один раз, проходит meta-validation
    и компилируется в Draft202012Validator; повторные обращения берут кэш.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._compiled: Dict[str, Draft202012Validator] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема контракта как dict.

        Raises:
            FileNotFoundError: Нет файла {schema_name}.json
            ValueError: Файл не является корректной JSON Schema
        """
        return self.validator_for(schema_name).schema

    def validator_for(self, schema_name: str) -> Draft202012Validator:
        """Скомпилированный валидатор контракта (кэшируется по имени)."""
        compiled = self._compiled.get(schema_name)
        if compiled is None:
            compiled = Draft202012Validator(self._read(schema_name))
            self._compiled[schema_name] = compiled
        return compiled

    def _read(self, schema_name: str) -> Dict[str, Any]:
        path = self._schema_dir / f"{schema_name}.json"
        try:
            schema = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise FileNotFoundError(f"No contract schema {schema_name!r} in {self._schema_dir}")

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Contract schema {schema_name!r} is not a valid JSON Schema: {e.message}")
        return schema


_REGISTRY = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта.

    Подклассы задают только SCHEMA_NAME; скомпилированный валидатор
    берётся из общего реестра.
    """

    SCHEMA_NAME: str = ""

    def __init__(self, registry: SchemaLoader | None = None):
        self._compiled = (registry or _REGISTRY).validator_for(self.SCHEMA_NAME)

    @property
    def schema(self) -> Dict[str, Any]:
        return self._compiled.schema

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Первая найденная ошибка контракта
        """
        self._compiled.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self._compiled.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self._compiled.iter_errors(data)

    def error_messages(self, data: Dict[str, Any]) -> List[str]:
        """Все нарушения контракта в виде 'path: message', отсортированные по пути."""
        messages = []
        for error in self.iter_errors(data):
            location = "/".join(str(p) for p in error.absolute_path) or "<root>"
            messages.append(f"{location}: {error.message}")
        return sorted(messages)


class BidValidator(ContractValidator):
    SCHEMA_NAME = "bid"


class AuctionParametersValidator(ContractValidator):
    SCHEMA_NAME = "auction_parameters"


class FungibleSupplyValidator(ContractValidator):
    SCHEMA_NAME = "fungible_supply"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_bid(data: Dict[str, Any]) -> None:
    """
    Валидация bid payload.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    BidValidator().validate(data)


def validate_auction_parameters(data: Dict[str, Any]) -> None:
    """
    Валидация auction_parameters payload.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    AuctionParametersValidator().validate(data)


def validate_fungible_supply(data: Dict[str, Any]) -> None:
    """
    Валидация fungible_supply payload.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    FungibleSupplyValidator().validate(data)


# =============================================================================
# PARSING (схема → доменная модель)
# =============================================================================


def parse_bid(data: Dict[str, Any]) -> Bid:
    """
    Валидация payload по схеме и построение Bid.

    Raises:
        ValidationError: Если payload не соответствует схеме
    """
    validate_bid(data)
    return Bid.model_validate(data)


def parse_bids(payloads: Iterable[Dict[str, Any]]) -> List[Bid]:
    """Построение списка Bid; порядок payload'ов сохраняется."""
    return [parse_bid(p) for p in payloads]


def parse_auction_parameters(data: Dict[str, Any]) -> AuctionParameters:
    """
    Валидация payload по схеме и построение AuctionParameters.

    Raises:
        ValidationError: Если payload не соответствует схеме
    """
    validate_auction_parameters(data)
    return AuctionParameters.model_validate(data)


def parse_fungible_supply(data: Dict[str, Any]) -> FungibleSupply:
    """
    Валидация payload по схеме и создание корневого handle FungibleSupply.

    Raises:
        ValidationError: Если payload не соответствует схеме
        SupplyValidationError: Если объём не положительный
    """
    validate_fungible_supply(data)
    return FungibleSupply(data["quantity"], data.get("handle_id", DEFAULT_SUPPLY_HANDLE_ID))

