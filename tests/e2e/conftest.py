"""
E2E 테스트 공통 fixture

실제 BTC Markets API 호출용 클라이언트 제공.
- 공개 시세: BTCMKT_LIVE=1 일 때만 실행
- 인증 요청: BTCMKT_KEY, BTCMKT_SECRET 이 있을 때만 실행
"""

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest_asyncio

from adapters.btcmarkets.rest_client import BtcMarketsRestClient


def pytest_configure(config: Any) -> None:
    """pytest 마커 등록"""
    config.addinivalue_line("markers", "e2e: E2E 테스트 (실제 API 호출)")
    config.addinivalue_line("markers", "readonly: 읽기 전용 테스트 (주문 없음)")


@pytest_asyncio.fixture
async def public_client() -> AsyncGenerator[BtcMarketsRestClient, None]:
    """공개 시세용 클라이언트"""
    async with BtcMarketsRestClient() as client:
        yield client


@pytest_asyncio.fixture
async def private_client() -> AsyncGenerator[BtcMarketsRestClient, None]:
    """인증 클라이언트"""
    async with BtcMarketsRestClient(
        api_key=os.environ.get("BTCMKT_KEY"),
        api_secret=os.environ.get("BTCMKT_SECRET"),
    ) as client:
        yield client
