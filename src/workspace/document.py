"""Document-level operations (file tree, export, daily notes)."""

import logging
from typing import Any, Dict, List, Sequence

from core.exceptions import WorkspaceAPIError
from workspace.client import SiyuanClient, first_operation_id
from workspace.search import quote_sql_literal

logger = logging.getLogger(__name__)


class DocumentApi:
    """Operations on SiYuan documents (root blocks of type ``d``)."""

    def __init__(self, client: SiyuanClient):
        self.client = client

    async def get_content(self, document_id: str) -> str:
        """Export a document as markdown."""
        data = await self.client.request("/api/export/exportMdContent", {"id": document_id})
        return (data or {}).get("content", "")

    async def create(self, notebook_id: str, path: str, markdown: str) -> str:
        """
        Create a document from markdown.

        Args:
            notebook_id: Target notebook ID
            path: Human-readable path such as ``/folder/title`` (no ``.md``)
            markdown: Initial content

        Returns:
            ID of the new document
        """
        return await self.client.request("/api/filetree/createDocWithMd", {
            "notebook": notebook_id,
            "path": path,
            "markdown": markdown,
        })

    async def append(self, document_id: str, markdown: str) -> str:
        """Append markdown at the end of a document and return the new block ID."""
        data = await self.client.request("/api/block/appendBlock", {
            "parentID": document_id,
            "dataType": "markdown",
            "data": markdown,
        })
        return first_operation_id(data, "/api/block/appendBlock")

    async def overwrite(self, document_id: str, markdown: str) -> None:
        """Replace the whole body of a document."""
        await self.client.request("/api/block/updateBlock", {
            "id": document_id,
            "dataType": "markdown",
            "data": markdown,
        })

    async def append_to_daily_note(self, notebook_id: str, markdown: str) -> Dict[str, str]:
        """Append to today's daily note, creating it when missing."""
        note = await self.client.request("/api/filetree/createDailyNote", {"notebook": notebook_id})
        document_id = (note or {}).get("id")
        if not document_id:
            raise WorkspaceAPIError(
                "SiYuan did not return the daily note ID",
                endpoint="/api/filetree/createDailyNote",
            )
        block_id = await self.append(document_id, markdown)
        return {"document_id": document_id, "block_id": block_id}

    async def move_to_parent(self, document_ids: Sequence[str], parent_id: str) -> None:
        """Nest documents under a parent document."""
        await self.client.request("/api/filetree/moveDocsByID", {
            "fromIDs": list(document_ids),
            "toID": parent_id,
        })

    async def move_to_notebook_root(self, document_ids: Sequence[str], notebook_id: str) -> None:
        """Move documents to the top level of a notebook."""
        await self.client.request("/api/filetree/moveDocsByID", {
            "fromIDs": list(document_ids),
            "toID": notebook_id,
        })

    async def rename(self, document_id: str, title: str) -> None:
        await self.client.request("/api/filetree/renameDocByID", {"id": document_id, "title": title})

    async def remove(self, document_id: str) -> None:
        await self.client.request("/api/filetree/removeDocByID", {"id": document_id})

    async def get_hpath(self, block_id: str) -> str:
        """Resolve a block or document ID to its human-readable path."""
        return await self.client.request("/api/filetree/getHPathByID", {"id": block_id})

    async def get_tree(self, root_id: str, depth: int = 1) -> List[Dict[str, Any]]:
        """
        List the document hierarchy below a notebook or document.

        Args:
            root_id: Notebook ID or document ID to start from
            depth: Levels to descend (1 = direct children only)

        Returns:
            Nodes ``{id, name, path, sub_file_count, children}``
        """
        notebook_id, path = await self._resolve_location(root_id)
        return await self._list_level(notebook_id, path, max(int(depth), 1))

    async def _resolve_location(self, root_id: str):
        rows = await self.client.request("/api/query/sql", {
            "stmt": f"SELECT box, path FROM blocks WHERE id = {quote_sql_literal(root_id)} AND type = 'd' LIMIT 1"
        })
        if rows:
            return rows[0]["box"], rows[0]["path"]
        # Not a document, treat as a notebook
        return root_id, "/"

    async def _list_level(self, notebook_id: str, path: str, depth: int) -> List[Dict[str, Any]]:
        data = await self.client.request("/api/filetree/listDocsByPath", {
            "notebook": notebook_id,
            "path": path,
        })
        nodes = []
        for entry in (data or {}).get("files") or []:
            name = entry.get("name", "")
            if name.endswith(".sy"):
                name = name[:-3]
            node = {
                "id": entry.get("id"),
                "name": name,
                "path": entry.get("path"),
                "sub_file_count": entry.get("subFileCount", 0),
                "children": [],
            }
            if depth > 1 and node["sub_file_count"]:
                node["children"] = await self._list_level(notebook_id, node["path"], depth - 1)
            nodes.append(node)
        return nodes
