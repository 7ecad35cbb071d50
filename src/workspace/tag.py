"""Tag listing and renaming."""

from typing import Any, Dict, List

from workspace.client import SiyuanClient


def _flatten(nodes: List[Dict[str, Any]], out: List[Dict[str, Any]]) -> None:
    for node in nodes or []:
        out.append({"label": node.get("label"), "count": node.get("count", 0)})
        _flatten(node.get("children") or [], out)


class TagApi:
    """Workspace-wide tag operations."""

    def __init__(self, client: SiyuanClient):
        self.client = client

    async def list(self) -> List[Dict[str, Any]]:
        """Every tag (nested tags flattened to ``parent/child`` labels) with usage counts."""
        data = await self.client.request("/api/tag/getTag", {"sort": 0})
        tags: List[Dict[str, Any]] = []
        _flatten(data or [], tags)
        return tags

    async def replace(self, old_tag: str, new_tag: str) -> None:
        """Rename a tag everywhere it is used."""
        await self.client.request("/api/tag/renameTag", {
            "oldLabel": old_tag.strip("#"),
            "newLabel": new_tag.strip("#"),
        })
