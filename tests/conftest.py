"""
pytest 配置文件

提供測試環境設定、fixtures 和全局配置
"""

import json
import logging
import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from dotenv import load_dotenv

# 添加 src 目錄到 Python 路徑
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# 載入環境變數
load_dotenv()

from core.config import AppConfig, SiyuanConfig  # noqa: E402
from core.context import ExecutionContext  # noqa: E402


@pytest.fixture
def app_config():
    """測試用應用配置（不讀取環境變數）"""
    return AppConfig(
        siyuan=SiyuanConfig(base_url="http://siyuan.test:6806", token="test-token"),
        server_name="siyuan-mcp-test",
        server_version="9.9.9",
    )


@pytest.fixture
def mock_workspace():
    """Mock SiYuan 工作區，所有 API 方法皆為 AsyncMock"""
    workspace = Mock()
    for area in ("search", "document", "block", "notebook", "snapshot", "tag", "system"):
        setattr(workspace, area, AsyncMock())
    workspace.close = AsyncMock()
    return workspace


@pytest.fixture
def context(mock_workspace, app_config):
    """使用 Mock 工作區的執行上下文"""
    return ExecutionContext.create(
        mock_workspace,
        app_config,
        logging.getLogger("siyuan_mcp.test"),
    )


class SiyuanStub:
    """
    httpx.MockTransport 後端：依 endpoint 回傳預先設定的 SiYuan 回應

    未設定的 endpoint 回傳 code=-1 錯誤。
    """

    def __init__(self):
        self.responses = {}
        self.requests = []

    def reply(self, endpoint, data=None, code=0, msg=""):
        self.responses[endpoint] = {"code": code, "msg": msg, "data": data}

    def handle(self, endpoint, func):
        """以 func(body) 的回傳值作為 data"""
        self.responses[endpoint] = func

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.url.path, body, request.headers.get("Authorization")))
        payload = self.responses.get(
            request.url.path,
            {"code": -1, "msg": f"no stub for {request.url.path}", "data": None},
        )
        if callable(payload):
            payload = {"code": 0, "msg": "", "data": payload(body)}
        return httpx.Response(200, json=payload)

    def bodies(self, endpoint):
        return [body for path, body, _ in self.requests if path == endpoint]


@pytest.fixture
def siyuan_stub():
    """模擬 SiYuan 核心 HTTP API"""
    return SiyuanStub()


@pytest.fixture
def transport(siyuan_stub):
    return httpx.MockTransport(siyuan_stub)
