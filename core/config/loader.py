"""
설정 로더

client.yaml 로드 및 클라이언트 설정 생성
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import BtcMarketsEndpoints, Defaults, Paths
from core.types import EndpointClass


@dataclass(frozen=True)
class ClientConfig:
    """클라이언트 설정 (client.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지.
    키/시크릿이 없으면 공개 요청만 사용 가능.

    Attributes:
        api_key: API 키
        api_secret: base64 인코딩된 API 시크릿
        server: REST API 베이스 URL
        timeout: 요청 타임아웃 (초)
        user_agent: User-Agent 헤더
        rate_limit_disabled: Rate Limit 비활성화 여부
        rate_limit_overrides: 분류별 {"calls_per_period", "period_ms"}
    """

    api_key: str | None = None
    api_secret: str | None = None
    server: str = BtcMarketsEndpoints.PROD_REST_URL
    timeout: float = Defaults.TIMEOUT_SEC
    user_agent: str = Defaults.USER_AGENT
    rate_limit_disabled: bool = False
    rate_limit_overrides: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def has_credentials(self) -> bool:
        """인증 요청 가능 여부"""
        return bool(self.api_key and self.api_secret)


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _parse_overrides(raw: Any) -> dict[str, dict[str, Any]]:
    """rate_limit.overrides 검증

    키는 EndpointClass 이름 또는 임의의 경로 키를 허용.
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigLoadError("rate_limit.overrides는 매핑이어야 합니다")

    known = {c.value for c in EndpointClass}
    overrides: dict[str, dict[str, Any]] = {}

    for key, value in raw.items():
        key = str(key)
        if key.upper() in known:
            key = key.upper()

        if not isinstance(value, dict):
            raise ConfigLoadError(f"rate_limit.overrides.{key}는 매핑이어야 합니다")

        calls = value.get("calls_per_period")
        period = value.get("period_ms")

        if not isinstance(calls, int) or isinstance(calls, bool) or calls <= 0:
            raise ConfigLoadError(
                f"rate_limit.overrides.{key}.calls_per_period는 양의 정수여야 합니다: {calls!r}"
            )
        if not _is_positive_number(period):
            raise ConfigLoadError(
                f"rate_limit.overrides.{key}.period_ms는 양수여야 합니다: {period!r}"
            )

        overrides[key] = {"calls_per_period": calls, "period_ms": period}

    return overrides


def load_config(path: Path | None = None) -> ClientConfig:
    """client.yaml 파일 로드

    Args:
        path: client.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        ClientConfig 인스턴스

    Raises:
        ConfigLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.CONFIG_FILE

    if not path.exists():
        raise ConfigLoadError(f"설정 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"설정 파일 파싱 실패: {e}") from e

    if data is None:
        raise ConfigLoadError("설정 파일이 비어 있습니다")
    if not isinstance(data, dict):
        raise ConfigLoadError("설정 파일 최상위는 매핑이어야 합니다")

    exchange = data.get("btcmarkets") or {}
    if not isinstance(exchange, dict):
        raise ConfigLoadError("'btcmarkets' 섹션은 매핑이어야 합니다")

    timeout = exchange.get("timeout", Defaults.TIMEOUT_SEC)
    if not _is_positive_number(timeout):
        raise ConfigLoadError(f"btcmarkets.timeout은 양수여야 합니다: {timeout!r}")

    rate_limit = data.get("rate_limit") or {}
    if not isinstance(rate_limit, dict):
        raise ConfigLoadError("'rate_limit' 섹션은 매핑이어야 합니다")

    disabled = rate_limit.get("disabled", False)
    if not isinstance(disabled, bool):
        raise ConfigLoadError(f"rate_limit.disabled는 true/false여야 합니다: {disabled!r}")

    return ClientConfig(
        api_key=exchange.get("api_key") or None,
        api_secret=exchange.get("api_secret") or None,
        server=exchange.get("server") or BtcMarketsEndpoints.PROD_REST_URL,
        timeout=float(timeout),
        user_agent=exchange.get("user_agent") or Defaults.USER_AGENT,
        rate_limit_disabled=disabled,
        rate_limit_overrides=_parse_overrides(rate_limit.get("overrides")),
    )
