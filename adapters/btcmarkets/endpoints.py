"""
엔드포인트 경로 -> Rate Limit 분류 매핑

서명 요청 경로를 bucket 키와 등급으로 변환.
거래소가 분류별로 공지한 한도에 맞춰 독립적으로 제한하기 위함.
"""

from core.constants import BtcMarketsEndpoints
from core.types import EndpointClass, RateLimitTier


# 고정 경로 -> (분류, 등급)
PATH_CLASSES: dict[str, tuple[EndpointClass, RateLimitTier]] = {
    "/order/create": (EndpointClass.ORDER_CREATE, RateLimitTier.STRICT),
    "/order/cancel": (EndpointClass.ORDER_CANCEL, RateLimitTier.STRICT),
    "/order/detail": (EndpointClass.ORDER_DETAIL, RateLimitTier.STANDARD),
    "/order/open": (EndpointClass.ORDER_OPEN, RateLimitTier.STRICT),
    "/order/history": (EndpointClass.ORDER_HISTORY, RateLimitTier.STRICT),
    "/order/trade/history": (EndpointClass.TRADE_HISTORY, RateLimitTier.STRICT),
    "/account/balance": (EndpointClass.ACCOUNT_BALANCE, RateLimitTier.STANDARD),
    "/fundtransfer/withdrawCrypto": (EndpointClass.WITHDRAW_CRYPTO, RateLimitTier.STRICT),
    "/fundtransfer/withdrawEFT": (EndpointClass.WITHDRAW_EFT, RateLimitTier.STRICT),
    "/fundtransfer/history": (EndpointClass.WITHDRAW_HISTORY, RateLimitTier.STRICT),
}


def path_segments(path: str) -> list[str]:
    """쿼리 제거 후 경로 세그먼트 목록 ("/account/balance" -> ["account", "balance"])"""
    return [s for s in path.split("?", 1)[0].split("/") if s]


def is_account_path(path: str) -> bool:
    """GET으로 호출하는 account 네임스페이스 경로인지 여부"""
    segments = path_segments(path)
    return bool(segments) and segments[0] == BtcMarketsEndpoints.ACCOUNT_NAMESPACE


def resolve_endpoint_class(path: str) -> tuple[str, RateLimitTier]:
    """서명 요청 경로의 bucket 키와 등급 반환

    /account/{instrument}/{currency}/tradingfee 처럼 경로 변수가 있는
    엔드포인트는 같은 분류로 묶는다. 알 수 없는 경로는 정규화된 경로 자체를
    키로 사용하고 일반 등급을 적용.

    Args:
        path: API 경로 (예: /order/create)

    Returns:
        (bucket 키, 등급)
    """
    segments = path_segments(path)
    normalized = "/" + "/".join(segments)

    known = PATH_CLASSES.get(normalized)
    if known is not None:
        endpoint_class, tier = known
        return endpoint_class.value, tier

    if (
        len(segments) == 4
        and segments[0] == BtcMarketsEndpoints.ACCOUNT_NAMESPACE
        and segments[3] == "tradingfee"
    ):
        return EndpointClass.TRADING_FEE.value, RateLimitTier.STANDARD

    return normalized, RateLimitTier.STANDARD
