"""
設定管理單元測試

測試由環境變數建立 AppConfig、預設值與無效設定的錯誤回報。
"""

import pytest

from core.config import AppConfig, HTTPConfig, SiyuanConfig
from core.exceptions import ConfigurationError

ENV_VARS = [
    "SIYUAN_API_URL",
    "SIYUAN_API_TOKEN",
    "SIYUAN_TIMEOUT",
    "HTTP_HOST",
    "HTTP_PORT",
    "RATE_LIMIT_DEFAULT",
    "CORS_PREFLIGHT_MAX_AGE",
    "CORS_ALLOWED_ORIGINS",
    "ENVIRONMENT",
    "MCP_SERVER_NAME",
    "MCP_SERVER_VERSION",
    "LOG_LEVEL",
    "EXPOSE_SENSITIVE_INFO",
]


@pytest.fixture
def clean_env(monkeypatch):
    """清除所有相關環境變數"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAppConfig:
    """應用程式設定"""

    def test_defaults(self, clean_env):
        """✅ 未設定環境變數時使用預設值"""
        config = AppConfig.from_env()

        assert config.siyuan.base_url == "http://127.0.0.1:6806"
        assert config.siyuan.token is None
        assert config.siyuan.has_token is False
        assert config.siyuan.timeout == 30.0
        assert config.server_name == "siyuan-mcp-server"
        assert config.log_level == "INFO"
        assert config.expose_sensitive_info is False
        assert config.http_config.port == 8000

    def test_from_env(self, clean_env):
        """✅ 讀取環境變數"""
        clean_env.setenv("SIYUAN_API_URL", "http://notes.local:6806/")
        clean_env.setenv("SIYUAN_API_TOKEN", "abc123")
        clean_env.setenv("SIYUAN_TIMEOUT", "5.5")
        clean_env.setenv("HTTP_PORT", "9000")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("EXPOSE_SENSITIVE_INFO", "true")

        config = AppConfig.from_env()

        assert config.siyuan.base_url == "http://notes.local:6806"
        assert config.siyuan.token == "abc123"
        assert config.siyuan.timeout == 5.5
        assert config.http_config.port == 9000
        assert config.log_level == "DEBUG"
        assert config.expose_sensitive_info is True

    def test_invalid_port(self, clean_env):
        """❌ 無效的連接埠"""
        clean_env.setenv("HTTP_PORT", "eighty")

        with pytest.raises(ConfigurationError, match="HTTP_PORT must be an integer"):
            AppConfig.from_env()

    def test_invalid_url_scheme(self, clean_env):
        """❌ SiYuan URL 缺少 http(s)"""
        clean_env.setenv("SIYUAN_API_URL", "127.0.0.1:6806")

        with pytest.raises(ConfigurationError, match="Invalid SiYuan configuration"):
            AppConfig.from_env()

    def test_invalid_log_level(self, clean_env):
        """❌ 無效的日誌等級"""
        clean_env.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError, match="Invalid application configuration"):
            AppConfig.from_env()

    def test_direct_construction(self):
        """✅ 不經環境變數直接建立"""
        config = AppConfig(siyuan=SiyuanConfig(base_url="https://siyuan.example.com/"))
        assert config.siyuan.base_url == "https://siyuan.example.com"


class TestHTTPConfig:
    """HTTP 與 CORS 設定"""

    def test_explicit_origins(self, clean_env):
        """✅ CORS_ALLOWED_ORIGINS 以逗號分隔"""
        clean_env.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example ,")

        config = HTTPConfig.from_env()

        assert config.resolve_allowed_origins() == ["https://a.example", "https://b.example"]

    def test_development_defaults(self, clean_env):
        """✅ 開發環境預設允許 localhost"""
        assert HTTPConfig.from_env().resolve_allowed_origins() == [
            "http://localhost:3000",
            "http://localhost:8000",
        ]

    def test_production_without_origins(self, clean_env):
        """✅ 正式環境未設定時不允許跨來源"""
        clean_env.setenv("ENVIRONMENT", "production")

        assert HTTPConfig.from_env().resolve_allowed_origins() == []
