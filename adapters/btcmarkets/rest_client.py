"""
BTC Markets REST API 클라이언트

HMAC-SHA512 서명, 엔드포인트 분류별 Rate Limit, 응답 분류.
모든 요청은 BucketRegistry를 거친 뒤 전송되며 자동 재시도는 하지 않음.
"""

import json
import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from adapters.btcmarkets.endpoints import is_account_path, resolve_endpoint_class
from adapters.btcmarkets.errors import (
    ConfigurationError,
    DomainError,
    OrderError,
    TransportError,
)
from adapters.btcmarkets.models import (
    AccountBalance,
    MarketTrade,
    OrderBook,
    Tick,
    parse_account_balance,
    parse_market_trade,
    parse_order_book,
    parse_tick,
)
from adapters.btcmarkets.rate_limiter import (
    BucketRegistry,
    RateLimit,
    STANDARD_LIMIT,
    limit_for_tier,
)
from adapters.btcmarkets.signer import decode_secret, sign_request
from core.config.loader import ClientConfig
from core.constants import BtcMarketsEndpoints, Defaults
from core.types import EndpointClass, OrderSide, OrderType

logger = logging.getLogger(__name__)


def classify_response(text: str, status_code: int | None = None) -> Any:
    """응답 본문 분류

    - JSON 파싱 실패 -> TransportError (원문 보존)
    - errorCode가 null이 아닌 객체 -> DomainError
    - 그 외 -> 파싱된 payload 반환

    Args:
        text: 응답 본문
        status_code: HTTP 상태 코드 (에러에 기록)

    Returns:
        파싱된 JSON payload

    Raises:
        TransportError: 본문이 JSON이 아닌 경우
        DomainError: 거래소 에러 응답인 경우
    """
    try:
        payload = json.loads(text)
    except ValueError:
        raise TransportError(
            "Response body is not valid JSON",
            raw_text=text,
            status_code=status_code,
        ) from None

    if isinstance(payload, dict) and payload.get("errorCode") is not None:
        raise DomainError(code=payload["errorCode"], message=payload.get("errorMessage"))

    return payload


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    """값이 None인 항목 제거"""
    return {k: v for k, v in params.items() if v is not None}


class BtcMarketsRestClient:
    """BTC Markets REST API 클라이언트

    공개 시세 요청과 인증 요청을 모두 처리.
    Rate Limit 상태는 인스턴스마다 독립된 BucketRegistry가 보관.

    Args:
        api_key: API 키 (공개 요청만 쓸 경우 생략 가능)
        api_secret: base64 인코딩된 API 시크릿
        base_url: REST API 베이스 URL
        timeout: 요청 타임아웃 (초)
        user_agent: User-Agent 헤더
        rate_limit_disabled: True면 Rate Limit 미적용
        rate_limit_overrides: 엔드포인트 분류별 Rate Limit 재정의
        registry: 외부에서 주입할 BucketRegistry (테스트용)

    사용 예시:
    ```python
    async with BtcMarketsRestClient(api_key="xxx", api_secret="yyy") as client:
        tick = await client.get_tick("BTC", "AUD")
        balances = await client.get_account_balances()
    ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        base_url: str = BtcMarketsEndpoints.PROD_REST_URL,
        timeout: float = Defaults.TIMEOUT_SEC,
        user_agent: str = Defaults.USER_AGENT,
        rate_limit_disabled: bool = False,
        rate_limit_overrides: Mapping[str, RateLimit | Mapping[str, Any]] | None = None,
        registry: BucketRegistry | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.user_agent = user_agent

        if registry is None:
            registry = BucketRegistry(
                overrides=rate_limit_overrides,
                disabled=rate_limit_disabled,
            )
        self.registry = registry
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> "BtcMarketsRestClient":
        """ClientConfig에서 클라이언트 생성"""
        return cls(
            api_key=config.api_key,
            api_secret=config.api_secret,
            base_url=config.server,
            timeout=config.timeout,
            user_agent=config.user_agent,
            rate_limit_disabled=config.rate_limit_disabled,
            rate_limit_overrides=config.rate_limit_overrides,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    def _get_timestamp(self) -> int:
        """현재 시각 (밀리초)"""
        return int(time.time() * 1000)

    def _generate_signature(self, path: str, timestamp: int, body: str | None = "") -> str:
        """HMAC-SHA512 서명 생성

        Raises:
            ConfigurationError: 시크릿 미설정
        """
        return sign_request(self.api_secret, path, timestamp, body)

    def _ensure_credentials(self) -> None:
        """인증 정보 확인 (I/O, 대기열 진입 전)"""
        if not self.api_key or not self.api_secret:
            raise ConfigurationError(
                "API key and secret are required for authenticated requests"
            )
        decode_secret(self.api_secret)

    async def _send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        content: str | None = None,
    ) -> Any:
        """HTTP 요청 전송 및 응답 분류

        Raises:
            TransportError: 네트워크 실패, 타임아웃, JSON 파싱 실패
            DomainError: 거래소 에러 응답
        """
        url = f"{self.base_url}{path}"
        client = await self._get_client()

        try:
            response = await client.request(
                method,
                url,
                params=params,
                content=content,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.warning("Request timeout", extra={"path": path, "method": method})
            raise TransportError(f"Request to {path} timed out", cause=e) from e
        except httpx.RequestError as e:
            logger.error(
                "Request error",
                extra={"path": path, "method": method, "error": str(e)},
            )
            raise TransportError(f"Request to {path} failed: {e}", cause=e) from e

        try:
            return classify_response(response.text, status_code=response.status_code)
        except DomainError as e:
            logger.warning(
                "BTC Markets API error",
                extra={"path": path, "error_code": e.code, "error_message": e.message},
            )
            raise
        except TransportError:
            logger.error(
                "Malformed response body",
                extra={"path": path, "status_code": response.status_code},
            )
            raise

    async def public_request(
        self,
        instrument: str,
        currency: str,
        action: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """공개 시세 요청 (서명 없음)

        Args:
            instrument: 거래 상품 (예: BTC)
            currency: 결제 통화 (예: AUD)
            action: 시세 종류 (tick, orderbook, trades)
            params: 쿼리 파라미터 (None 값은 제외)

        Returns:
            JSON 응답
        """
        await self.registry.acquire(EndpointClass.MARKET_DATA, STANDARD_LIMIT)

        path = f"{BtcMarketsEndpoints.MARKET_PREFIX}/{instrument}/{currency}/{action}"
        headers = {
            "Accept": "application/json",
            "Accept-Charset": "UTF-8",
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
        query = _compact(params or {}) or None

        return await self._send("GET", path, headers, params=query)

    async def signed_request(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """인증 요청

        /account/ 이하 경로는 본문 없는 GET, 나머지는 JSON 본문 POST.

        Args:
            path: API 경로 (예: /order/create, /account/balance)
            params: 요청 본문으로 직렬화할 파라미터

        Returns:
            JSON 응답

        Raises:
            ConfigurationError: 키/시크릿 미설정 (네트워크/Rate Limit 사용 전)
            TransportError: 네트워크 실패, 타임아웃, JSON 파싱 실패
            DomainError: 거래소 에러 응답
        """
        self._ensure_credentials()

        bucket_key, tier = resolve_endpoint_class(path)
        await self.registry.acquire(bucket_key, limit_for_tier(tier))

        method = "POST"
        if is_account_path(path):
            method = "GET"
            params = None

        body = None
        if params is not None:
            body = json.dumps(params, separators=(",", ":"))

        timestamp = self._get_timestamp()
        signature = self._generate_signature(path, timestamp, body or "")

        headers = {
            "Accept": "application/json",
            "Accept-Charset": "UTF-8",
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
            "apikey": self.api_key,
            "timestamp": str(timestamp),
            "signature": signature,
        }

        return await self._send(method, path, headers, content=body)

    # -------------------------------------------------------------------------
    # 시장 데이터
    # -------------------------------------------------------------------------

    async def get_tick(self, instrument: str, currency: str) -> Tick:
        """현재가 조회"""
        data = await self.public_request(instrument, currency, "tick")
        return parse_tick(data)

    async def get_order_book(self, instrument: str, currency: str) -> OrderBook:
        """호가창 조회"""
        data = await self.public_request(instrument, currency, "orderbook")
        return parse_order_book(data)

    async def get_trades(
        self,
        instrument: str,
        currency: str,
        since: int | None = None,
    ) -> list[MarketTrade]:
        """시장 체결 내역 조회

        Args:
            instrument: 거래 상품
            currency: 결제 통화
            since: 이 tid 이후 체결만 조회
        """
        data = await self.public_request(instrument, currency, "trades", {"since": since})
        return [parse_market_trade(item) for item in data]

    # -------------------------------------------------------------------------
    # 주문
    # -------------------------------------------------------------------------

    async def create_order(
        self,
        instrument: str,
        currency: str,
        price: int | None,
        volume: int,
        order_side: OrderSide | str,
        order_type: OrderType | str,
        client_request_id: str | None = None,
    ) -> dict[str, Any]:
        """주문 생성

        가격/수량은 거래소 단위 그대로 전달.

        Raises:
            OrderError: 주문 실패 시
        """
        params = _compact({
            "currency": currency,
            "instrument": instrument,
            "price": price,
            "volume": volume,
            "orderSide": OrderSide(order_side).value,
            "ordertype": OrderType(order_type).value,
            "clientRequestId": client_request_id,
        })

        try:
            data = await self.signed_request("/order/create", params)
        except DomainError as e:
            logger.error(
                "주문 생성 실패",
                extra={
                    "error_code": e.code,
                    "error_message": e.message,
                    "request": params,
                },
            )
            raise OrderError(code=e.code, message=e.message) from e

        logger.info(
            "주문 생성 완료",
            extra={
                "order_id": data.get("id"),
                "client_request_id": client_request_id,
                "instrument": instrument,
                "currency": currency,
                "side": params["orderSide"],
            },
        )
        return data

    async def cancel_orders(self, order_ids: list[int]) -> dict[str, Any]:
        """주문 취소

        Raises:
            OrderError: 취소 요청 실패 시
        """
        try:
            data = await self.signed_request("/order/cancel", {"orderIds": list(order_ids)})
        except DomainError as e:
            logger.error(
                "주문 취소 실패",
                extra={
                    "error_code": e.code,
                    "error_message": e.message,
                    "order_ids": list(order_ids),
                },
            )
            raise OrderError(code=e.code, message=e.message) from e

        logger.info("주문 취소 완료", extra={"order_ids": list(order_ids)})
        return data

    async def get_order_detail(self, order_ids: list[int]) -> dict[str, Any]:
        """주문 상세 조회"""
        return await self.signed_request("/order/detail", {"orderIds": list(order_ids)})

    async def get_open_orders(
        self,
        instrument: str,
        currency: str,
        limit: int | None = None,
        since: int | None = None,
    ) -> dict[str, Any]:
        """미체결 주문 조회"""
        return await self.signed_request("/order/open", _compact({
            "currency": currency,
            "instrument": instrument,
            "limit": limit,
            "since": since,
        }))

    async def get_order_history(
        self,
        instrument: str,
        currency: str,
        limit: int | None = None,
        since: int | None = None,
    ) -> dict[str, Any]:
        """주문 내역 조회"""
        return await self.signed_request("/order/history", _compact({
            "currency": currency,
            "instrument": instrument,
            "limit": limit,
            "since": since,
        }))

    async def get_trade_history(
        self,
        instrument: str,
        currency: str,
        limit: int | None = None,
        since: int | None = None,
    ) -> dict[str, Any]:
        """체결 내역 조회"""
        return await self.signed_request("/order/trade/history", _compact({
            "currency": currency,
            "instrument": instrument,
            "limit": limit,
            "since": since,
        }))

    # -------------------------------------------------------------------------
    # 계좌
    # -------------------------------------------------------------------------

    async def get_account_balances(self) -> list[AccountBalance]:
        """계좌 잔고 목록 조회"""
        data = await self.signed_request("/account/balance")
        return [parse_account_balance(item) for item in data]

    async def get_trading_fee(self, instrument: str, currency: str) -> dict[str, Any]:
        """거래 수수료율 조회"""
        return await self.signed_request(f"/account/{instrument}/{currency}/tradingfee")

    # -------------------------------------------------------------------------
    # 출금
    # -------------------------------------------------------------------------

    async def withdraw_crypto(
        self,
        amount: int,
        address: str,
        currency: str,
    ) -> dict[str, Any]:
        """암호화폐 출금"""
        data = await self.signed_request("/fundtransfer/withdrawCrypto", {
            "amount": amount,
            "address": address,
            "currency": currency,
        })
        logger.info(
            "출금 요청 완료",
            extra={"currency": currency, "fund_transfer_id": data.get("fundTransferId")},
        )
        return data

    async def withdraw_eft(
        self,
        account_name: str,
        account_number: str,
        bank_name: str,
        bsb_number: str,
        amount: int,
        currency: str = "AUD",
    ) -> dict[str, Any]:
        """은행 계좌(EFT) 출금"""
        data = await self.signed_request("/fundtransfer/withdrawEFT", {
            "accountName": account_name,
            "accountNumber": account_number,
            "bankName": bank_name,
            "bsbNumber": bsb_number,
            "amount": amount,
            "currency": currency,
        })
        logger.info("EFT 출금 요청 완료", extra={"currency": currency})
        return data

    async def get_withdraw_history(
        self,
        limit: int | None = None,
        since: int | None = None,
        index_forward: bool | None = None,
    ) -> dict[str, Any]:
        """출금 내역 조회"""
        return await self.signed_request("/fundtransfer/history", _compact({
            "limit": limit,
            "since": since,
            "indexForward": index_forward,
        }))

    async def __aenter__(self) -> "BtcMarketsRestClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
