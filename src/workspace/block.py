"""Block-level operations (kramdown, insert/move/delete, attributes)."""

import logging
from typing import Any, Dict, List, Optional

from core.exceptions import WorkspaceAPIError
from workspace.client import SiyuanClient, first_operation_id
from workspace.search import in_clause, quote_sql_literal

logger = logging.getLogger(__name__)


class BlockApi:
    """Operations on individual SiYuan blocks."""

    def __init__(self, client: SiyuanClient):
        self.client = client

    async def get_kramdown(self, block_id: str) -> str:
        data = await self.client.request("/api/block/getBlockKramdown", {"id": block_id})
        return (data or {}).get("kramdown", "")

    async def update(self, block_id: str, markdown: str) -> None:
        await self.client.request("/api/block/updateBlock", {
            "id": block_id,
            "dataType": "markdown",
            "data": markdown,
        })

    async def append(self, parent_id: str, markdown: str) -> str:
        """Append a child block at the end of ``parent_id``; returns the new ID."""
        data = await self.client.request("/api/block/appendBlock", {
            "parentID": parent_id,
            "dataType": "markdown",
            "data": markdown,
        })
        return first_operation_id(data, "/api/block/appendBlock")

    async def insert_before(self, next_id: str, markdown: str) -> str:
        """Insert a block right before ``next_id``; returns the new ID."""
        data = await self.client.request("/api/block/insertBlock", {
            "nextID": next_id,
            "dataType": "markdown",
            "data": markdown,
        })
        return first_operation_id(data, "/api/block/insertBlock")

    async def insert_after(self, previous_id: str, markdown: str) -> str:
        """Insert a block right after ``previous_id``; returns the new ID."""
        data = await self.client.request("/api/block/insertBlock", {
            "previousID": previous_id,
            "dataType": "markdown",
            "data": markdown,
        })
        return first_operation_id(data, "/api/block/insertBlock")

    async def delete(self, block_id: str) -> None:
        await self.client.request("/api/block/deleteBlock", {"id": block_id})

    async def move(
        self,
        block_id: str,
        previous_id: Optional[str] = None,
        parent_id: Optional[str] = None
    ) -> None:
        payload = {"id": block_id}
        if previous_id:
            payload["previousID"] = previous_id
        if parent_id:
            payload["parentID"] = parent_id
        await self.client.request("/api/block/moveBlock", payload)

    async def get_children(self, block_id: str) -> List[Dict[str, Any]]:
        """List the direct children of a block (a heading's children are its section)."""
        data = await self.client.request("/api/block/getChildBlocks", {"id": block_id})
        return data or []

    async def get_attrs(self, block_id: str) -> Dict[str, str]:
        data = await self.client.request("/api/attr/getBlockAttrs", {"id": block_id})
        return data or {}

    async def set_attrs(self, block_id: str, attrs: Dict[str, str]) -> None:
        await self.client.request("/api/attr/setBlockAttrs", {"id": block_id, "attrs": attrs})

    async def get_section_markdown(self, heading_id: str) -> str:
        """
        Markdown of a heading followed by every block in its section.

        Args:
            heading_id: ID of a heading block

        Returns:
            Blocks joined by blank lines, in document order
        """
        children = await self.get_children(heading_id)
        ids = [heading_id] + [child["id"] for child in children if child.get("id")]
        rows = await self.client.request("/api/query/sql", {
            "stmt": f"SELECT id, markdown FROM blocks WHERE id IN {in_clause(ids)}"
        }) or []
        markdown_by_id = {row["id"]: row.get("markdown") or "" for row in rows}
        if heading_id not in markdown_by_id:
            raise WorkspaceAPIError(f"Block not found: {heading_id}", endpoint="/api/query/sql")
        return "\n\n".join(markdown_by_id[i] for i in ids if i in markdown_by_id)

    async def get_document(self, block_id: str) -> Dict[str, Any]:
        """Locate the document (root block) that contains ``block_id``."""
        rows = await self.client.request("/api/query/sql", {
            "stmt": f"SELECT root_id FROM blocks WHERE id = {quote_sql_literal(block_id)} LIMIT 1"
        })
        if not rows:
            raise WorkspaceAPIError(f"Block not found: {block_id}", endpoint="/api/query/sql")
        root_id = rows[0]["root_id"]

        docs = await self.client.request("/api/query/sql", {
            "stmt": f"SELECT id, box, hpath, content FROM blocks WHERE id = {quote_sql_literal(root_id)} LIMIT 1"
        })
        doc = docs[0] if docs else {}
        return {
            "block_id": block_id,
            "document_id": root_id,
            "title": doc.get("content"),
            "hpath": doc.get("hpath"),
            "notebook_id": doc.get("box"),
        }
