"""
Tranche Auction: движок клиринга и аллокации sealed-bid аукциона

Uniform-price аукцион фиксированного объёма делимого актива (транш облигаций):
- ранжирование заявок (цена по убыванию, затем время подачи)
- клиринг с частичным исполнением и единой ценой отсечения
- точное разбиение fungible-баланса под победителей с сохранением остатка

Все вычисления чистые, синхронные и детерминированные.
"""

from tranche_auction.auction import AuctionRunResult, run_auction

__all__ = [
    "AuctionRunResult",
    "run_auction",
]
