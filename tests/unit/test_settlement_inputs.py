"""
Тесты для входов settlement

Проверяет:
1. payment = clearing_price * allocation.quantity для каждого победителя
2. Сопоставление awarded и аллокаций 1:1 по origin_ref
3. Уведомления об отказе в порядке rejected
4. Ошибки сопоставления (fatal)
"""

from decimal import Decimal

import pytest

from tranche_auction.allocation.allocator import allocate
from tranche_auction.clearing.engine import clear
from tranche_auction.clearing.ordering import rank_bids
from tranche_auction.core.domain import Allocation, AuctionParameters, Bid, FungibleSupply, RejectReason
from tranche_auction.core.errors import SettlementPairingError
from tranche_auction.settlement import build_settlement_inputs


def _bid(price, quantity, ts, ref) -> Bid:
    return Bid(price=price, quantity=quantity, submitted_ts_utc_ms=ts, origin_ref=ref)


@pytest.fixture
def cleared():
    params = AuctionParameters(total_size=100, floor_price="10")
    bids = [_bid("12", 60, 1, "bid1"), _bid("11", 50, 2, "bid2"), _bid("10", 30, 3, "bid3")]
    outcome = clear(params, rank_bids(bids))
    allocation = allocate(FungibleSupply(100), outcome.awarded)
    return outcome, allocation


class TestBuildSettlementInputs:
    """Тесты построения входов settlement"""

    def test_deliveries_use_uniform_price(self, cleared) -> None:
        outcome, allocation = cleared

        inputs = build_settlement_inputs(outcome, allocation.allocations)

        assert [(d.bid_ref, d.quantity, d.payment) for d in inputs.deliveries] == [
            ("bid1", Decimal(60), Decimal(660)),
            ("bid2", Decimal(40), Decimal(440)),
        ]
        assert all(d.clearing_price == Decimal(11) for d in inputs.deliveries)
        assert [d.partial_fill for d in inputs.deliveries] == [False, True]
        assert inputs.total_payment == Decimal(1100)

    def test_deliveries_carry_balance_handles(self, cleared) -> None:
        outcome, allocation = cleared
        inputs = build_settlement_inputs(outcome, allocation.allocations)
        assert [d.balance_handle for d in inputs.deliveries] == [a.balance_handle for a in allocation.allocations]

    def test_rejection_notices(self, cleared) -> None:
        outcome, allocation = cleared
        inputs = build_settlement_inputs(outcome, allocation.allocations)
        assert [(r.bid_ref, r.reason) for r in inputs.rejections] == [("bid3", RejectReason.SIZE_EXHAUSTED)]

    def test_no_winners(self) -> None:
        params = AuctionParameters(total_size=100, floor_price="10")
        outcome = clear(params, rank_bids([_bid("5", 10, 1, "low")]))

        inputs = build_settlement_inputs(outcome, [])

        assert inputs.deliveries == ()
        assert [(r.bid_ref, r.reason) for r in inputs.rejections] == [("low", RejectReason.BELOW_FLOOR)]
        assert inputs.total_payment == Decimal(0)

    def test_count_mismatch(self, cleared) -> None:
        outcome, allocation = cleared
        with pytest.raises(SettlementPairingError):
            build_settlement_inputs(outcome, allocation.allocations[:1])

    def test_ref_mismatch(self, cleared) -> None:
        outcome, allocation = cleared
        with pytest.raises(SettlementPairingError):
            build_settlement_inputs(outcome, tuple(reversed(allocation.allocations)))

    def test_quantity_mismatch(self, cleared) -> None:
        outcome, _ = cleared
        wrong = (
            Allocation(bid_ref="bid1", quantity=60, balance_handle="h1"),
            Allocation(bid_ref="bid2", quantity=39, balance_handle="h2"),
        )
        with pytest.raises(SettlementPairingError):
            build_settlement_inputs(outcome, wrong)

    def test_fractional_price_payment_exact(self) -> None:
        params = AuctionParameters(total_size=3, floor_price="0.01")
        outcome = clear(params, rank_bids([_bid("99.375", 3, 1, "a")]))
        allocation = allocate(FungibleSupply(3), outcome.awarded)

        inputs = build_settlement_inputs(outcome, allocation.allocations)

        assert inputs.deliveries[0].payment == Decimal("298.125")

    def test_precision_reaches_payment(self) -> None:
        price = "2." + "5" * 49
        params = AuctionParameters(total_size=10, floor_price="1")
        outcome = clear(params, rank_bids([_bid(price, 10, 1, "a")]))
        allocation = allocate(FungibleSupply(10), outcome.awarded)

        inputs = build_settlement_inputs(outcome, allocation.allocations, precision=120)

        assert inputs.decimal_precision == 120
        assert inputs.deliveries[0].payment == Decimal("25." + "5" * 48)
        assert inputs.total_payment == Decimal("25." + "5" * 48)
