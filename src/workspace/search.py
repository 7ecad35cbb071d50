"""Search and SQL query operations against the SiYuan ``blocks`` table."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from workspace.client import SiyuanClient

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = "id, root_id, box, path, hpath, type, subtype, content, tag, updated"


def quote_sql_literal(value: Any) -> str:
    """Quote a value as a SQLite string literal."""
    return "'" + str(value).replace("'", "''") + "'"


def like_pattern(value: str) -> str:
    """Build a quoted ``%value%`` pattern for LIKE clauses."""
    return quote_sql_literal(f"%{value}%")


def in_clause(values: Sequence[Any]) -> str:
    return "(" + ", ".join(quote_sql_literal(v) for v in values) + ")"


def _to_search_result(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row.get("id"),
        "document_id": row.get("root_id"),
        "notebook_id": row.get("box"),
        "hpath": row.get("hpath"),
        "type": row.get("type"),
        "subtype": row.get("subtype"),
        "content": row.get("content"),
        "tags": [t for t in (row.get("tag") or "").split("#") if t.strip()],
        "updated": row.get("updated"),
    }


class SearchApi:
    """Full-text style search built on SiYuan's SQL endpoint."""

    def __init__(self, client: SiyuanClient):
        self.client = client

    async def query(self, sql: str) -> List[Dict[str, Any]]:
        """Run a raw SQL statement and return the matching rows."""
        rows = await self.client.request("/api/query/sql", {"stmt": sql})
        return rows or []

    async def search(
        self,
        content: Optional[str] = None,
        tag: Optional[str] = None,
        filename: Optional[str] = None,
        limit: int = 10,
        notebook: Optional[str] = None,
        types: Optional[Sequence[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Search blocks by content, tag and document title.

        Filters are combined with AND. ``filename`` restricts matches to
        document blocks whose title contains the keyword.

        Args:
            content: Keyword contained in the block content
            tag: Tag name, with or without the leading ``#``
            filename: Keyword contained in the document title
            limit: Maximum number of results
            notebook: Restrict to one notebook ID
            types: Restrict to block types (``d``, ``h``, ``p`` ...)

        Returns:
            Matching blocks, most recently updated first
        """
        conditions = []
        if content:
            conditions.append(f"content LIKE {like_pattern(content)}")
        if tag:
            conditions.append(f"tag LIKE {like_pattern('#' + tag.strip().strip('#') + '#')}")
        if filename:
            conditions.append(f"type = 'd' AND content LIKE {like_pattern(filename)}")
        if notebook:
            conditions.append(f"box = {quote_sql_literal(notebook)}")
        if types:
            conditions.append(f"type IN {in_clause(types)}")

        where = " AND ".join(conditions) if conditions else "1 = 1"
        sql = (
            f"SELECT {SEARCH_COLUMNS} FROM blocks WHERE {where} "
            f"ORDER BY updated DESC LIMIT {max(int(limit), 1)}"
        )
        rows = await self.query(sql)
        return [_to_search_result(row) for row in rows]

    async def find_in_document(
        self,
        document_id: str,
        keyword: str,
        types: Optional[Sequence[str]] = None,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        """Find blocks of one document whose content contains ``keyword``."""
        sql = (
            f"SELECT id, type, content FROM blocks "
            f"WHERE root_id = {quote_sql_literal(document_id)} AND content LIKE {like_pattern(keyword)}"
        )
        if types:
            sql += f" AND type IN {in_clause(types)}"
        sql += f" LIMIT {max(int(limit), 1)}"
        rows = await self.query(sql)
        return [
            {"id": row.get("id"), "type": row.get("type"), "content": row.get("content")}
            for row in rows
        ]
