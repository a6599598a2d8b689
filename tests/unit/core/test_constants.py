"""
core/constants.py 테스트

모든 경로가 pathlib.Path 타입이고, 상수가 정상적으로 접근 가능한지 확인
"""

from pathlib import Path

from core.constants import (
    PROJECT_ROOT,
    BtcMarketsEndpoints,
    Defaults,
    Paths,
    RateLimitDefaults,
)


class TestProjectRoot:
    """PROJECT_ROOT 테스트"""

    def test_project_root_is_path(self) -> None:
        """PROJECT_ROOT가 Path 타입인지 확인"""
        assert isinstance(PROJECT_ROOT, Path)

    def test_project_root_contains_core_directory(self) -> None:
        """PROJECT_ROOT에 core 디렉토리가 있는지 확인"""
        assert (PROJECT_ROOT / "core").exists()


class TestBtcMarketsEndpoints:
    """BtcMarketsEndpoints 테스트"""

    def test_production_rest_url(self) -> None:
        """Production REST URL 확인"""
        assert BtcMarketsEndpoints.PROD_REST_URL == "https://api.btcmarkets.net"

    def test_account_namespace(self) -> None:
        """GET 네임스페이스"""
        assert BtcMarketsEndpoints.ACCOUNT_NAMESPACE == "account"


class TestDefaults:
    """Defaults 테스트"""

    def test_timeout_is_20_seconds(self) -> None:
        """기본 타임아웃 20000ms"""
        assert Defaults.TIMEOUT_SEC == 20.0

    def test_defaults_fields(self) -> None:
        """클라이언트/설정 로더가 읽는 기본값만 정의"""
        fields = {name for name in vars(Defaults) if name.isupper()}

        assert fields == {"TIMEOUT_SEC", "USER_AGENT"}


class TestPaths:
    """Paths 테스트"""

    def test_all_paths_are_path_type(self) -> None:
        """모든 경로가 Path 타입"""
        assert isinstance(Paths.CONFIG_DIR, Path)
        assert isinstance(Paths.LOGS_DIR, Path)
        assert isinstance(Paths.CONFIG_FILE, Path)

    def test_config_file_in_config_dir(self) -> None:
        """설정 파일은 config 디렉토리 하위"""
        assert Paths.CONFIG_FILE.parent == Paths.CONFIG_DIR


class TestRateLimitDefaults:
    """RateLimitDefaults 테스트"""

    def test_strict_is_stricter(self) -> None:
        """민감 등급의 최소 간격이 더 길다"""
        standard_interval = RateLimitDefaults.STANDARD_PERIOD_MS / RateLimitDefaults.STANDARD_CALLS
        strict_interval = RateLimitDefaults.STRICT_PERIOD_MS / RateLimitDefaults.STRICT_CALLS

        assert strict_interval > standard_interval
