"""SiYuan workspace facade used by tool handlers."""

import logging
from typing import Optional

import httpx

from core.config import SiyuanConfig
from workspace.client import SiyuanClient
from workspace.search import SearchApi
from workspace.document import DocumentApi
from workspace.block import BlockApi
from workspace.notebook import NotebookApi
from workspace.snapshot import SnapshotApi
from workspace.tag import TagApi

logger = logging.getLogger(__name__)


class SystemApi:
    """Kernel metadata, used by health checks."""

    def __init__(self, client: SiyuanClient):
        self.client = client

    async def version(self) -> str:
        return await self.client.request("/api/system/version")


class SiyuanWorkspace:
    """
    One object exposing every workspace operation, grouped by area.

    Handlers reach it through ``context.workspace`` and never talk HTTP
    themselves:

        await context.workspace.block.get_kramdown(block_id)
        await context.workspace.search.query("SELECT * FROM blocks LIMIT 5")
    """

    def __init__(self, client: SiyuanClient):
        self.client = client
        self.search = SearchApi(client)
        self.document = DocumentApi(client)
        self.block = BlockApi(client)
        self.notebook = NotebookApi(client)
        self.snapshot = SnapshotApi(client)
        self.tag = TagApi(client)
        self.system = SystemApi(client)

    @classmethod
    def from_config(
        cls,
        config: SiyuanConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "SiyuanWorkspace":
        """Create the facade and its HTTP client from configuration."""
        client = SiyuanClient(
            config.base_url,
            token=config.token,
            timeout=config.timeout,
            transport=transport,
        )
        if not config.has_token:
            logger.warning("SIYUAN_API_TOKEN is not set - requests will fail if SiYuan requires auth")
        logger.info(f"SiYuan workspace client targeting {config.base_url}")
        return cls(client)

    async def close(self) -> None:
        await self.client.close()


__all__ = [
    "SiyuanWorkspace",
    "SiyuanClient",
    "SearchApi",
    "DocumentApi",
    "BlockApi",
    "NotebookApi",
    "SnapshotApi",
    "TagApi",
    "SystemApi",
]
