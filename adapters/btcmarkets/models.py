"""
BTC Markets API 응답 -> 모델 변환

시세/호가/체결/잔고 응답을 데이터클래스로 변환.
모든 금액/수량은 Decimal 사용 (float 문자열화 후 변환).
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


def _to_decimal(value: Any) -> Decimal:
    return Decimal(str(value))


@dataclass(frozen=True)
class Tick:
    """현재가 정보

    Attributes:
        instrument: 거래 상품 (예: BTC)
        currency: 결제 통화 (예: AUD)
        best_bid: 최우선 매수 호가
        best_ask: 최우선 매도 호가
        last_price: 최근 체결가
        volume_24h: 24시간 거래량
        timestamp: 거래소 타임스탬프 (초)
    """

    instrument: str
    currency: str
    best_bid: Decimal
    best_ask: Decimal
    last_price: Decimal
    volume_24h: Decimal
    timestamp: int

    @property
    def spread(self) -> Decimal:
        """호가 스프레드"""
        return self.best_ask - self.best_bid


@dataclass(frozen=True)
class OrderBook:
    """호가창 ([가격, 수량] 목록)"""

    instrument: str
    currency: str
    timestamp: int
    asks: list[tuple[Decimal, Decimal]]
    bids: list[tuple[Decimal, Decimal]]


@dataclass(frozen=True)
class MarketTrade:
    """시장 체결"""

    tid: int
    amount: Decimal
    price: Decimal
    date: int


@dataclass(frozen=True)
class AccountBalance:
    """계좌 잔고

    Attributes:
        currency: 자산 코드
        balance: 잔고
        pending_funds: 처리 대기 중인 금액
    """

    currency: str
    balance: Decimal
    pending_funds: Decimal

    @property
    def available(self) -> Decimal:
        """사용 가능 잔고"""
        return self.balance - self.pending_funds


def parse_tick(data: dict[str, Any]) -> Tick:
    """GET /market/{instrument}/{currency}/tick 응답 -> Tick

    응답 예시:
    {
        "bestBid": 14790,
        "bestAsk": 14920.87,
        "lastPrice": 14914.23,
        "currency": "AUD",
        "instrument": "BTC",
        "timestamp": 1516155536,
        "volume24h": 2314.2655
    }
    """
    return Tick(
        instrument=data["instrument"],
        currency=data["currency"],
        best_bid=_to_decimal(data["bestBid"]),
        best_ask=_to_decimal(data["bestAsk"]),
        last_price=_to_decimal(data["lastPrice"]),
        volume_24h=_to_decimal(data.get("volume24h", 0)),
        timestamp=int(data["timestamp"]),
    )


def parse_order_book(data: dict[str, Any]) -> OrderBook:
    """GET /market/{instrument}/{currency}/orderbook 응답 -> OrderBook"""
    return OrderBook(
        instrument=data["instrument"],
        currency=data["currency"],
        timestamp=int(data["timestamp"]),
        asks=[(_to_decimal(p), _to_decimal(q)) for p, q, *_ in data.get("asks", [])],
        bids=[(_to_decimal(p), _to_decimal(q)) for p, q, *_ in data.get("bids", [])],
    )


def parse_market_trade(data: dict[str, Any]) -> MarketTrade:
    """GET /market/{instrument}/{currency}/trades 항목 -> MarketTrade

    응답 항목 예시:
    {"tid": 1132585626, "amount": 0.00625039, "price": 14720, "date": 1516156278}
    """
    return MarketTrade(
        tid=int(data["tid"]),
        amount=_to_decimal(data["amount"]),
        price=_to_decimal(data["price"]),
        date=int(data["date"]),
    )


def parse_account_balance(data: dict[str, Any]) -> AccountBalance:
    """GET /account/balance 항목 -> AccountBalance

    응답 항목 예시:
    {"balance": 0, "pendingFunds": 0, "currency": "AUD"}
    """
    return AccountBalance(
        currency=data["currency"],
        balance=_to_decimal(data["balance"]),
        pending_funds=_to_decimal(data.get("pendingFunds", 0)),
    )
