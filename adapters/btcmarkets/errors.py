"""
BTC Markets 클라이언트 에러

- ConfigurationError: 키/시크릿 누락, 잘못된 Rate Limit 설정 (I/O 전에 발생)
- TransportError: 네트워크 실패, 타임아웃, JSON 파싱 실패
- DomainError: 거래소가 정상 응답 안에서 보고한 에러 (errorCode)
"""

import httpx


class BtcMarketsError(Exception):
    """BTC Markets 클라이언트 에러 기반 클래스"""
    pass


class ConfigurationError(BtcMarketsError):
    """설정 에러

    인증 요청에 키/시크릿이 없거나 Rate Limit 값이 양수가 아닐 때 발생.
    네트워크 요청이나 큐 대기 전에 즉시 발생.
    """
    pass


class TransportError(BtcMarketsError):
    """전송 에러

    응답을 받지 못했거나(네트워크 실패, 타임아웃) 응답 본문이 JSON이 아닐 때 발생.

    Attributes:
        raw_text: 파싱에 실패한 응답 본문 (응답을 받은 경우)
        cause: 원인이 된 httpx 예외 (응답을 받지 못한 경우)
        status_code: HTTP 상태 코드 (응답을 받은 경우)
    """

    def __init__(
        self,
        message: str,
        raw_text: str | None = None,
        cause: Exception | None = None,
        status_code: int | None = None,
    ):
        self.message = message
        self.raw_text = raw_text
        self.cause = cause
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_timeout(self) -> bool:
        """타임아웃으로 응답을 받지 못한 경우"""
        return isinstance(self.cause, httpx.TimeoutException)

    @property
    def is_malformed_body(self) -> bool:
        """응답은 받았지만 본문 파싱에 실패한 경우"""
        return self.cause is None and self.raw_text is not None


class DomainError(BtcMarketsError):
    """거래소 API 에러

    JSON 응답에 errorCode가 포함되어 있을 때 발생.
    코드와 메시지는 거래소 응답 그대로 보존.
    """

    def __init__(self, code: int, message: str | None):
        self.code = code
        self.message = message
        super().__init__(f"BTC Markets API Error [{code}]: {message}")


class OrderError(DomainError):
    """주문 관련 에러

    주문 생성/취소 실패 시 발생.
    """
    pass


class ThrottleTimeoutError(BtcMarketsError):
    """Rate Limit 대기 시간 초과

    acquire()에 지정한 timeout 안에 차례가 오지 않았을 때 발생.
    대기열에서 제거된 상태로 발생하므로 credit은 소비되지 않음.
    """

    def __init__(self, key: str, timeout: float):
        self.key = key
        self.timeout = timeout
        super().__init__(f"Throttle wait on '{key}' exceeded {timeout} seconds")
