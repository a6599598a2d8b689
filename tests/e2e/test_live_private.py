"""
인증 요청 E2E 테스트 (읽기 전용)
"""

import pytest

from adapters.btcmarkets.rest_client import BtcMarketsRestClient
from tests.e2e.helpers import DEFAULT_CURRENCY, DEFAULT_INSTRUMENT, requires_credentials


pytestmark = [pytest.mark.e2e, pytest.mark.readonly, requires_credentials]


@pytest.mark.asyncio
async def test_get_account_balances(private_client: BtcMarketsRestClient) -> None:
    """잔고 조회"""
    balances = await private_client.get_account_balances()

    assert isinstance(balances, list)


@pytest.mark.asyncio
async def test_get_trading_fee(private_client: BtcMarketsRestClient) -> None:
    """수수료율 조회"""
    fee = await private_client.get_trading_fee(DEFAULT_INSTRUMENT, DEFAULT_CURRENCY)

    assert fee is not None


@pytest.mark.asyncio
async def test_get_open_orders(private_client: BtcMarketsRestClient) -> None:
    """미체결 주문 조회"""
    result = await private_client.get_open_orders(DEFAULT_INSTRUMENT, DEFAULT_CURRENCY, limit=10)

    assert "orders" in result


@pytest.mark.asyncio
async def test_get_order_history(private_client: BtcMarketsRestClient) -> None:
    """주문 내역 조회"""
    result = await private_client.get_order_history(
        DEFAULT_INSTRUMENT, DEFAULT_CURRENCY, limit=10, since=1
    )

    assert result is not None
