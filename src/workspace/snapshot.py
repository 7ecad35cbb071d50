"""Data repository snapshots (requires SiYuan's data repo to be enabled)."""

from typing import Any, Dict

from workspace.client import SiyuanClient


class SnapshotApi:
    """Create, list and restore workspace snapshots."""

    def __init__(self, client: SiyuanClient):
        self.client = client

    async def create(self, memo: str) -> Dict[str, Any]:
        await self.client.request("/api/repo/createSnapshot", {"memo": memo})
        return {"success": True, "memo": memo}

    async def list(self, page: int = 1) -> Dict[str, Any]:
        data = await self.client.request("/api/repo/getRepoSnapshots", {"page": page}) or {}
        return {
            "snapshots": data.get("snapshots") or [],
            "pageCount": data.get("pageCount", 0),
            "totalCount": data.get("totalCount", 0),
        }

    async def rollback(self, snapshot_id: str) -> None:
        await self.client.request("/api/repo/checkoutRepo", {"id": snapshot_id})
