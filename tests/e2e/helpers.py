"""
E2E 테스트 헬퍼

환경 변수 기반 실행 조건과 공통 상수.
"""

import os

import pytest


DEFAULT_INSTRUMENT = "BTC"
DEFAULT_CURRENCY = "AUD"


requires_live = pytest.mark.skipif(
    os.environ.get("BTCMKT_LIVE") != "1",
    reason="BTCMKT_LIVE=1 이 설정되지 않아 공개 API 테스트를 건너뜀",
)

requires_credentials = pytest.mark.skipif(
    not (os.environ.get("BTCMKT_KEY") and os.environ.get("BTCMKT_SECRET")),
    reason="BTCMKT_KEY/BTCMKT_SECRET 이 없어 인증 API 테스트를 건너뜀",
)
