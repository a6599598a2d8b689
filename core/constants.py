"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class BtcMarketsEndpoints:
    """BTC Markets API 엔드포인트 (고정값)"""

    PROD_REST_URL: str = "https://api.btcmarkets.net"

    # 경로 네임스페이스
    MARKET_PREFIX: str = "/market"
    ACCOUNT_NAMESPACE: str = "account"  # GET 요청을 쓰는 유일한 네임스페이스


class Defaults:
    """기본값 상수"""

    TIMEOUT_SEC: float = 20.0  # 20000ms
    USER_AGENT: str = "BTC Markets API Client"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    CONFIG_FILE: Path = CONFIG_DIR / "client.yaml"


class RateLimitDefaults:
    """엔드포인트 등급별 기본 Rate Limit

    거래소 공지 기준:
    - 일반: 10초에 25회
    - 민감(주문 생성/취소/내역, 출금): 10초에 10회
    """

    STANDARD_CALLS: int = 25
    STANDARD_PERIOD_MS: float = 10_000

    STRICT_CALLS: int = 10
    STRICT_PERIOD_MS: float = 10_000
