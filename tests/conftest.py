"""
pytest 공통 fixture 정의
"""

import tempfile
from pathlib import Path

import pytest


# 테스트용 base64 시크릿 ("test-secret-key-for-btcmarkets")
TEST_API_SECRET = "dGVzdC1zZWNyZXQta2V5LWZvci1idGNtYXJrZXRz"


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def api_secret() -> str:
    """테스트용 base64 API 시크릿"""
    return TEST_API_SECRET


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """테스트용 client.yaml 파일 생성"""
    config_content = f"""# 테스트용 client.yaml
btcmarkets:
  api_key: "test_api_key_abcde"
  api_secret: "{TEST_API_SECRET}"
  server: "https://api.example.com"
  timeout: 5
  user_agent: "test-agent"

rate_limit:
  disabled: false
  overrides:
    order_create:
      calls_per_period: 5
      period_ms: 2000
    /custom/path:
      calls_per_period: 1
      period_ms: 500
"""
    config_path = temp_dir / "client.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path


@pytest.fixture
def temp_config_file_public_only(temp_dir: Path) -> Path:
    """키 없는 client.yaml 파일 생성 (공개 요청 전용)"""
    config_content = """rate_limit:
  disabled: true
"""
    config_path = temp_dir / "client_public.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path
