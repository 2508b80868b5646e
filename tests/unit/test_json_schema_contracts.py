"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов (float вместо decimal-строки)
- Детекция нарушений constraints (minimum/pattern/additionalProperties)
- Интеграция с Pydantic моделями (parse_*)
"""

from decimal import Decimal
from pathlib import Path

import pytest
from jsonschema import Draft202012Validator, ValidationError

from tranche_auction.core.contracts import (
    AuctionParametersValidator,
    BidValidator,
    FungibleSupplyValidator,
    SchemaLoader,
    parse_auction_parameters,
    parse_bid,
    parse_bids,
    parse_fungible_supply,
    validate_auction_parameters,
    validate_bid,
    validate_fungible_supply,
)
from tranche_auction.core.domain import AuctionParameters, Bid, FungibleSupply
from tranche_auction.core.errors import SupplyValidationError


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_bid():
    """Валидный bid для тестирования."""
    return {
        "price": "11.25",
        "quantity": 50,
        "submitted_ts_utc_ms": 1700000000000,
        "origin_ref": "investor-b",
    }


@pytest.fixture
def valid_auction_parameters():
    """Валидные auction_parameters для тестирования."""
    return {"total_size": 100, "floor_price": "10"}


@pytest.fixture
def valid_fungible_supply():
    """Валидный fungible_supply для тестирования."""
    return {"quantity": "100", "handle_id": "tranche-2029-A"}


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    @pytest.mark.parametrize("name", ["bid", "auction_parameters", "fungible_supply"])
    def test_schemas_are_valid_json_schema(self, name: str) -> None:
        schema = SchemaLoader().load_schema(name)
        Draft202012Validator.check_schema(schema)
        assert schema["title"] == name

    def test_schema_cache(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("bid") is loader.load_schema("bid")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_schema_dir(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "broken.json").write_text('{"type": 42}', encoding="utf-8")
        with pytest.raises(ValueError):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_compiled_validator_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.validator_for("bid") is loader.validator_for("bid")

    def test_validator_uses_given_registry(self, tmp_path: Path) -> None:
        (tmp_path / "bid.json").write_text(
            '{"type": "object", "required": ["price"]}', encoding="utf-8"
        )
        validator = BidValidator(SchemaLoader(tmp_path))
        assert validator.is_valid({"price": 1})
        assert not validator.is_valid({})


# =============================================================================
# BID CONTRACT
# =============================================================================


class TestBidContract:
    """Тесты bid контракта"""

    def test_valid_bid(self, valid_bid) -> None:
        validate_bid(valid_bid)
        assert BidValidator().is_valid(valid_bid)

    @pytest.mark.parametrize("field", ["price", "quantity", "submitted_ts_utc_ms", "origin_ref"])
    def test_missing_required_field(self, valid_bid, field: str) -> None:
        del valid_bid[field]
        with pytest.raises(ValidationError):
            validate_bid(valid_bid)

    def test_float_price_rejected(self, valid_bid) -> None:
        """Цена передаётся строкой: float на входе запрещён"""
        valid_bid["price"] = 11.25
        with pytest.raises(ValidationError):
            validate_bid(valid_bid)

    @pytest.mark.parametrize("price", ["11,25", "1e3", "abc", "", "011"])
    def test_malformed_price_string_rejected(self, valid_bid, price: str) -> None:
        valid_bid["price"] = price
        assert not BidValidator().is_valid(valid_bid)

    def test_negative_price_string_allowed(self, valid_bid) -> None:
        valid_bid["price"] = "-0.5"
        assert BidValidator().is_valid(valid_bid)

    @pytest.mark.parametrize("quantity", [0, -1, "10"])
    def test_invalid_quantity_rejected(self, valid_bid, quantity) -> None:
        valid_bid["quantity"] = quantity
        with pytest.raises(ValidationError):
            validate_bid(valid_bid)

    def test_additional_properties_rejected(self, valid_bid) -> None:
        valid_bid["party"] = "Alice"
        with pytest.raises(ValidationError):
            validate_bid(valid_bid)

    def test_error_messages_sorted_by_path(self, valid_bid) -> None:
        valid_bid["quantity"] = 0
        valid_bid["origin_ref"] = ""
        messages = BidValidator().error_messages(valid_bid)
        assert len(messages) == 2
        assert messages[0].startswith("origin_ref: ")
        assert messages[1].startswith("quantity: ")

    def test_error_messages_empty_for_valid(self, valid_bid) -> None:
        assert BidValidator().error_messages(valid_bid) == []

    def test_iter_errors_reports_all(self, valid_bid) -> None:
        valid_bid["quantity"] = 0
        valid_bid["origin_ref"] = ""
        errors = list(BidValidator().iter_errors(valid_bid))
        assert len(errors) == 2

    def test_parse_bid(self, valid_bid) -> None:
        bid = parse_bid(valid_bid)
        assert isinstance(bid, Bid)
        assert bid.price == Decimal("11.25")
        assert bid.quantity == 50

    def test_parse_bids_preserves_order(self, valid_bid) -> None:
        second = dict(valid_bid, origin_ref="investor-c")
        assert [b.origin_ref for b in parse_bids([valid_bid, second])] == ["investor-b", "investor-c"]

    def test_parse_bid_validates_schema_first(self, valid_bid) -> None:
        valid_bid["price"] = 11.25
        with pytest.raises(ValidationError):
            parse_bid(valid_bid)

    def test_model_dump_matches_contract(self, valid_bid) -> None:
        """JSON-дамп модели снова проходит схему"""
        bid = parse_bid(valid_bid)
        validate_bid(bid.model_dump(mode="json"))


# =============================================================================
# AUCTION PARAMETERS CONTRACT
# =============================================================================


class TestAuctionParametersContract:
    """Тесты auction_parameters контракта"""

    def test_valid_parameters(self, valid_auction_parameters) -> None:
        validate_auction_parameters(valid_auction_parameters)
        assert AuctionParametersValidator().is_valid(valid_auction_parameters)

    def test_negative_total_size_rejected(self, valid_auction_parameters) -> None:
        valid_auction_parameters["total_size"] = -1
        with pytest.raises(ValidationError):
            validate_auction_parameters(valid_auction_parameters)

    def test_float_floor_price_rejected(self, valid_auction_parameters) -> None:
        valid_auction_parameters["floor_price"] = 10.0
        with pytest.raises(ValidationError):
            validate_auction_parameters(valid_auction_parameters)

    def test_parse_parameters(self, valid_auction_parameters) -> None:
        params = parse_auction_parameters(valid_auction_parameters)
        assert params == AuctionParameters(total_size=100, floor_price=Decimal(10))


# =============================================================================
# FUNGIBLE SUPPLY CONTRACT
# =============================================================================


class TestFungibleSupplyContract:
    """Тесты fungible_supply контракта"""

    def test_valid_supply(self, valid_fungible_supply) -> None:
        validate_fungible_supply(valid_fungible_supply)
        assert FungibleSupplyValidator().is_valid(valid_fungible_supply)

    def test_integer_quantity_allowed(self) -> None:
        assert FungibleSupplyValidator().is_valid({"quantity": 100})

    def test_zero_integer_quantity_rejected(self) -> None:
        assert not FungibleSupplyValidator().is_valid({"quantity": 0})

    def test_negative_string_quantity_rejected(self) -> None:
        assert not FungibleSupplyValidator().is_valid({"quantity": "-5"})

    def test_parse_supply(self, valid_fungible_supply) -> None:
        supply = parse_fungible_supply(valid_fungible_supply)
        assert isinstance(supply, FungibleSupply)
        assert supply.quantity == Decimal(100)
        assert supply.handle_id == "tranche-2029-A"

    def test_parse_supply_default_handle(self) -> None:
        assert parse_fungible_supply({"quantity": 10}).handle_id == "supply"

    def test_parse_zero_string_quantity_rejected_by_model(self) -> None:
        with pytest.raises(SupplyValidationError):
            parse_fungible_supply({"quantity": "0.00"})
