"""
어댑터 테스트 픽스처

BTC Markets 응답 샘플 제공.
"""

import pytest


@pytest.fixture
def tick_response() -> dict:
    """GET /market/BTC/AUD/tick 응답"""
    return {
        "bestBid": 14790,
        "bestAsk": 14920.87,
        "lastPrice": 14914.23,
        "currency": "AUD",
        "instrument": "BTC",
        "timestamp": 1516155536,
        "volume24h": 2314.2655,
    }


@pytest.fixture
def order_book_response() -> dict:
    """GET /market/BTC/AUD/orderbook 응답"""
    return {
        "currency": "AUD",
        "instrument": "BTC",
        "timestamp": 1516155985,
        "asks": [[14797.79, 0.93], [14800, 1.5]],
        "bids": [[14720, 0.956]],
    }


@pytest.fixture
def trades_response() -> list:
    """GET /market/BTC/AUD/trades 응답"""
    return [
        {"tid": 1132585626, "amount": 0.00625039, "price": 14720, "date": 1516156278},
        {"tid": 1132585625, "amount": 0.1, "price": 14721.5, "date": 1516156270},
    ]


@pytest.fixture
def balance_response() -> list:
    """GET /account/balance 응답"""
    return [
        {"balance": 1000, "pendingFunds": 200, "currency": "AUD"},
        {"balance": 0, "pendingFunds": 0, "currency": "BTC"},
    ]
