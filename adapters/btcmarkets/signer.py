"""
BTC Markets 요청 서명

canonical string = path + "\\n" + timestamp + "\\n" + body
HMAC-SHA512 (키: base64 디코딩된 시크릿) -> base64 인코딩
"""

import base64
import binascii
import hashlib
import hmac

from adapters.btcmarkets.errors import ConfigurationError


def build_canonical_string(path: str, timestamp_ms: int, body: str | None = "") -> str:
    """서명 대상 문자열 생성"""
    return f"{path}\n{timestamp_ms}\n{body or ''}"


def decode_secret(secret: str | None) -> bytes:
    """base64 시크릿 디코딩

    Raises:
        ConfigurationError: 시크릿이 없거나 base64가 아닌 경우
    """
    if not secret:
        raise ConfigurationError("API secret is not configured")
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError("API secret is not valid base64") from e


def sign_request(
    secret: str | None,
    path: str,
    timestamp_ms: int,
    body: str | None = "",
) -> str:
    """HMAC-SHA512 서명 생성

    같은 입력에는 항상 같은 서명을 반환 (부수 효과 없음).

    Args:
        secret: base64 인코딩된 API 시크릿
        path: API 경로 (예: /order/create)
        timestamp_ms: 밀리초 타임스탬프 (timestamp 헤더와 동일한 값)
        body: 요청 본문 (GET이면 빈 문자열)

    Returns:
        base64 인코딩된 서명 문자열

    Raises:
        ConfigurationError: 시크릿이 없거나 잘못된 경우
    """
    key = decode_secret(secret)
    message = build_canonical_string(path, timestamp_ms, body)
    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha512).digest()
    return base64.b64encode(digest).decode("ascii")
