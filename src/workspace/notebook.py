"""Notebook operations and notebook-scoped helpers."""

import logging
from typing import Any, Dict, List, Optional

from core.exceptions import WorkspaceAPIError
from workspace.client import SiyuanClient
from workspace.search import quote_sql_literal

logger = logging.getLogger(__name__)


class NotebookApi:
    """Operations on SiYuan notebooks (top-level containers)."""

    def __init__(self, client: SiyuanClient):
        self.client = client

    async def list(self) -> List[Dict[str, Any]]:
        data = await self.client.request("/api/notebook/lsNotebooks")
        return (data or {}).get("notebooks") or []

    async def create(self, name: str) -> str:
        """Create a notebook and return its ID."""
        data = await self.client.request("/api/notebook/createNotebook", {"name": name})
        notebook = (data or {}).get("notebook") or {}
        if not notebook.get("id"):
            raise WorkspaceAPIError(
                "SiYuan did not return the new notebook ID",
                endpoint="/api/notebook/createNotebook",
            )
        return notebook["id"]

    async def get_conf(self, notebook_id: str) -> Dict[str, Any]:
        data = await self.client.request("/api/notebook/getNotebookConf", {"notebook": notebook_id})
        return (data or {}).get("conf") or {}

    async def set_conf(self, notebook_id: str, conf: Dict[str, Any]) -> Dict[str, Any]:
        data = await self.client.request("/api/notebook/setNotebookConf", {
            "notebook": notebook_id,
            "conf": conf,
        })
        return data or {}

    async def get_recently_updated_documents(
        self,
        limit: int = 10,
        notebook_id: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Documents ordered by last update, newest first."""
        sql = "SELECT id, box, hpath, content, updated FROM blocks WHERE type = 'd'"
        if notebook_id:
            sql += f" AND box = {quote_sql_literal(notebook_id)}"
        sql += f" ORDER BY updated DESC LIMIT {max(int(limit), 1)}"
        rows = await self.client.request("/api/query/sql", {"stmt": sql}) or []
        return [
            {
                "id": row.get("id"),
                "title": row.get("content"),
                "hpath": row.get("hpath"),
                "notebook_id": row.get("box"),
                "updated": row.get("updated"),
            }
            for row in rows
        ]
