"""
BTC Markets Rate Limit 관리

엔드포인트 분류별 leaky bucket으로 요청 속도를 제한.
호출자는 대기열에 들어간 순서(FIFO)대로 풀려남.

Burst 정책:
    credit은 period_ms에서 상한이 걸린다. 오래 쉬었던 bucket도
    즉시 통과시킬 수 있는 호출은 최대 calls_per_period개.
    새로 만든 bucket은 credit 0에서 시작한다.
"""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from adapters.btcmarkets.errors import ConfigurationError, ThrottleTimeoutError
from core.constants import RateLimitDefaults
from core.types import RateLimitTier

logger = logging.getLogger(__name__)

# 부동소수 누적 오차 허용치 (ms)
CREDIT_EPSILON_MS = 1e-6


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class RateLimit:
    """Rate Limit 설정

    Attributes:
        calls_per_period: 주기당 허용 호출 수 (양의 정수)
        period_ms: 주기 길이 (밀리초, 양수)
    """

    calls_per_period: int
    period_ms: float

    def __post_init__(self) -> None:
        if (
            not isinstance(self.calls_per_period, int)
            or isinstance(self.calls_per_period, bool)
            or self.calls_per_period <= 0
        ):
            raise ConfigurationError(
                f"calls_per_period must be a positive integer: {self.calls_per_period!r}"
            )
        if not _is_number(self.period_ms) or self.period_ms <= 0:
            raise ConfigurationError(
                f"period_ms must be a positive number: {self.period_ms!r}"
            )

    @property
    def min_interval_ms(self) -> float:
        """호출 간 최소 간격 (밀리초)"""
        return self.period_ms / self.calls_per_period

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RateLimit":
        """설정 딕셔너리에서 생성

        Args:
            data: {"calls_per_period": int, "period_ms": number}

        Raises:
            ConfigurationError: 필드 누락 또는 값 오류
        """
        missing = [k for k in ("calls_per_period", "period_ms") if k not in data]
        if missing:
            raise ConfigurationError(f"Rate limit is missing fields: {missing}")
        return cls(
            calls_per_period=data["calls_per_period"],
            period_ms=data["period_ms"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "calls_per_period": self.calls_per_period,
            "period_ms": self.period_ms,
        }


STANDARD_LIMIT = RateLimit(
    calls_per_period=RateLimitDefaults.STANDARD_CALLS,
    period_ms=RateLimitDefaults.STANDARD_PERIOD_MS,
)

STRICT_LIMIT = RateLimit(
    calls_per_period=RateLimitDefaults.STRICT_CALLS,
    period_ms=RateLimitDefaults.STRICT_PERIOD_MS,
)


def limit_for_tier(tier: RateLimitTier) -> RateLimit:
    """등급별 기본 Rate Limit 반환"""
    if tier == RateLimitTier.STRICT:
        return STRICT_LIMIT
    return STANDARD_LIMIT


def _normalize_key(key: str | Enum) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


class ThrottleBucket:
    """단일 엔드포인트 분류의 leaky bucket

    credit(밀리초)이 min_interval_ms 이상 쌓일 때마다 대기열 맨 앞의
    호출자를 하나씩 풀어준다. credit과 last_tick은 dispatcher의 tick
    안에서만 바뀌고, 대기열은 acquire()가 뒤에 넣고 dispatcher가 앞에서 뺀다.

    dispatcher는 다음 해제 시점까지 정확히 대기한 뒤 깨어나며
    대기열이 비면 종료된다 (유휴 상태에서는 타이머 없음).

    단일 이벤트 루프에서만 사용해야 함 (락 없음).

    Args:
        key: bucket 키 (엔드포인트 분류)
        limit: Rate Limit 설정
        clock: 초 단위 단조 시계 (테스트에서 교체 가능)
    """

    def __init__(
        self,
        key: str,
        limit: RateLimit,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.key = key
        self.limit = limit
        self.min_interval_ms = limit.min_interval_ms

        self._clock = clock
        self._credit: float = 0.0
        self._last_tick: float = self._now_ms()
        self._queue: deque[asyncio.Future[None]] = deque()
        self._dispatcher: asyncio.Task[None] | None = None

    def _now_ms(self) -> float:
        return self._clock() * 1000

    @property
    def credit(self) -> float:
        """누적 credit (밀리초)"""
        return self._credit

    @property
    def queue_size(self) -> int:
        """대기 중인 호출자 수"""
        return len(self._queue)

    @property
    def is_dispatching(self) -> bool:
        """dispatcher 실행 여부"""
        return self._dispatcher is not None and not self._dispatcher.done()

    async def acquire(self, timeout: float | None = None) -> None:
        """차례가 올 때까지 대기

        Args:
            timeout: 최대 대기 시간 (초, None이면 무제한)

        timeout과 해제가 동시에 일어나면 해제된 것으로 처리한다.

        Raises:
            ThrottleTimeoutError: timeout 안에 풀려나지 못한 경우
        """
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()
        self._queue.append(waiter)

        if not self.is_dispatching:
            self._dispatcher = loop.create_task(self._dispatch())
        elif len(self._queue) > 1:
            logger.debug(
                "Throttle queued",
                extra={"bucket": self.key, "queue_size": len(self._queue)},
            )

        try:
            if timeout is None:
                await waiter
            else:
                await asyncio.wait_for(waiter, timeout)
        except asyncio.TimeoutError:
            # 타임아웃과 같은 루프 회차에 이미 풀려났다면 credit이 소비된 상태
            if waiter.done() and not waiter.cancelled():
                return
            self._discard(waiter)
            logger.warning(
                "Throttle wait timed out",
                extra={"bucket": self.key, "timeout": timeout},
            )
            raise ThrottleTimeoutError(self.key, timeout) from None
        except asyncio.CancelledError:
            self._discard(waiter)
            raise

    def _discard(self, waiter: asyncio.Future[None]) -> None:
        """대기열에서 waiter 제거 (타임아웃/취소 시)"""
        if waiter in self._queue:
            self._queue.remove(waiter)

        # 남은 대기자가 없으면 dispatcher 타이머도 정리
        if not self._queue and self._dispatcher is not None:
            self._dispatcher.cancel()
            self._dispatcher = None

    async def _dispatch(self) -> None:
        """대기열이 빌 때까지 tick 반복"""
        try:
            while self._queue:
                self._tick()
                if not self._queue:
                    break
                delay_ms = max(self.min_interval_ms - self._credit, 0.0)
                await asyncio.sleep(delay_ms / 1000)
        finally:
            if self._dispatcher is asyncio.current_task():
                self._dispatcher = None

    def _tick(self) -> None:
        """credit 정산 후 가능한 만큼 대기자 해제"""
        now = self._now_ms()
        self._credit = min(self._credit + (now - self._last_tick), self.limit.period_ms)
        self._last_tick = now

        while self._queue:
            head = self._queue[0]
            if head.done():
                # 취소된 대기자는 credit 소비 없이 제거
                self._queue.popleft()
                continue
            if self._credit + CREDIT_EPSILON_MS < self.min_interval_ms:
                break
            self._queue.popleft()
            head.set_result(None)
            self._credit = max(self._credit - self.min_interval_ms, 0.0)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (로깅용)"""
        return {
            "key": self.key,
            "calls_per_period": self.limit.calls_per_period,
            "period_ms": self.limit.period_ms,
            "min_interval_ms": self.min_interval_ms,
            "credit_ms": round(self._credit, 3),
            "queue_size": len(self._queue),
            "dispatching": self.is_dispatching,
        }


class BucketRegistry:
    """엔드포인트 분류별 ThrottleBucket 관리

    bucket은 처음 acquire()될 때 생성되며 이후 전달된 limit은 무시된다.
    클라이언트 인스턴스마다 하나씩 생성 (인스턴스 간 상태 공유 없음).

    Args:
        overrides: 키별 Rate Limit 재정의 (RateLimit 또는 설정 딕셔너리)
        disabled: True면 모든 acquire()가 즉시 통과
        default_limit: limit 미지정 시 사용할 기본값
        clock: 초 단위 단조 시계
    """

    def __init__(
        self,
        overrides: Mapping[str, RateLimit | Mapping[str, Any]] | None = None,
        disabled: bool = False,
        default_limit: RateLimit = STANDARD_LIMIT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._overrides: dict[str, RateLimit] = {}
        for key, value in (overrides or {}).items():
            if not isinstance(value, RateLimit):
                value = RateLimit.from_dict(value)
            self._overrides[_normalize_key(key)] = value

        self._disabled = disabled
        self._default_limit = default_limit
        self._clock = clock
        self._buckets: dict[str, ThrottleBucket] = {}

    @property
    def disabled(self) -> bool:
        return self._disabled

    @property
    def buckets(self) -> dict[str, ThrottleBucket]:
        """생성된 bucket 목록 (복사본)"""
        return dict(self._buckets)

    def get(self, key: str | Enum) -> ThrottleBucket | None:
        return self._buckets.get(_normalize_key(key))

    def _get_or_create(self, key: str, limit: RateLimit | None) -> ThrottleBucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            resolved = self._overrides.get(key) or limit or self._default_limit
            bucket = ThrottleBucket(key, resolved, clock=self._clock)
            self._buckets[key] = bucket
            logger.debug("Throttle bucket created", extra=bucket.to_dict())
        return bucket

    async def acquire(
        self,
        key: str | Enum,
        limit: RateLimit | None = None,
        timeout: float | None = None,
    ) -> None:
        """bucket 차례가 올 때까지 대기

        Args:
            key: bucket 키 (EndpointClass 또는 문자열)
            limit: bucket 생성 시에만 사용되는 Rate Limit
            timeout: 최대 대기 시간 (초)

        Raises:
            ThrottleTimeoutError: timeout 초과 시
        """
        if self._disabled:
            await asyncio.sleep(0)
            return

        bucket = self._get_or_create(_normalize_key(key), limit)
        await bucket.acquire(timeout=timeout)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (로깅용)"""
        return {
            "disabled": self._disabled,
            "buckets": {key: b.to_dict() for key, b in self._buckets.items()},
        }
