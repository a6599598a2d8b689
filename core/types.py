"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class OrderSide(str, Enum):
    """주문 방향"""

    BID = "Bid"
    ASK = "Ask"


class OrderType(str, Enum):
    """주문 유형"""

    LIMIT = "Limit"
    MARKET = "Market"


class RateLimitTier(str, Enum):
    """Rate Limit 등급"""

    STANDARD = "STANDARD"
    STRICT = "STRICT"  # 주문 생성/내역, 출금 등 민감한 엔드포인트


class EndpointClass(str, Enum):
    """독립적으로 Rate Limit이 적용되는 엔드포인트 분류

    값은 Bucket Registry의 키로 사용된다.
    """

    MARKET_DATA = "MARKET_DATA"

    ORDER_CREATE = "ORDER_CREATE"
    ORDER_CANCEL = "ORDER_CANCEL"
    ORDER_DETAIL = "ORDER_DETAIL"
    ORDER_OPEN = "ORDER_OPEN"
    ORDER_HISTORY = "ORDER_HISTORY"
    TRADE_HISTORY = "TRADE_HISTORY"

    ACCOUNT_BALANCE = "ACCOUNT_BALANCE"
    TRADING_FEE = "TRADING_FEE"

    WITHDRAW_CRYPTO = "WITHDRAW_CRYPTO"
    WITHDRAW_EFT = "WITHDRAW_EFT"
    WITHDRAW_HISTORY = "WITHDRAW_HISTORY"
