"""
BTC Markets 어댑터

BTC Markets REST API 연동을 담당.
엔드포인트 분류별 Rate Limit, HMAC-SHA512 서명 지원.
"""

from adapters.btcmarkets.rest_client import BtcMarketsRestClient, classify_response
from adapters.btcmarkets.rate_limiter import (
    BucketRegistry,
    RateLimit,
    ThrottleBucket,
)
from adapters.btcmarkets.signer import sign_request
from adapters.btcmarkets.errors import (
    BtcMarketsError,
    ConfigurationError,
    DomainError,
    OrderError,
    ThrottleTimeoutError,
    TransportError,
)

__all__ = [
    "BtcMarketsRestClient",
    "classify_response",
    "BucketRegistry",
    "RateLimit",
    "ThrottleBucket",
    "sign_request",
    "BtcMarketsError",
    "ConfigurationError",
    "DomainError",
    "OrderError",
    "ThrottleTimeoutError",
    "TransportError",
]
