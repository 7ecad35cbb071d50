"""Search and SQL query handlers."""

import logging
from typing import Any, Dict, List

from core.context import ExecutionContext
from core.exceptions import ToolValidationError
from tools.base import ToolHandler
from tools.validators import InputValidator, SQLValidator

logger = logging.getLogger(__name__)


class UnifiedSearchHandler(ToolHandler):
    """Search by content, tag, document title, or a combination."""

    name = "unified_search"
    description = (
        "Search notes in SiYuan by content keywords, tags, note titles, or combined filters. "
        "Returns matching notes and blocks. TIP: When looking for a specific document, use the "
        "filename parameter or add types: [\"d\"] to filter to documents only - otherwise results "
        "will include individual paragraphs, list items, etc."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "content": {
                "type": "string",
                "description": "Optional: Content keyword to search for",
            },
            "tag": {
                "type": "string",
                "description": "Optional: Tag to filter by (without # symbol, e.g., \"project\")",
            },
            "filename": {
                "type": "string",
                "description": "Optional: Note title keyword to search for",
            },
            "limit": {
                "type": "number",
                "description": "Maximum number of results (default: 10)",
                "default": 10,
            },
            "notebook_id": {
                "type": "string",
                "description": "Optional: Limit to specific notebook ID",
            },
            "types": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Optional: Block types to search (e.g., [\"d\"] for documents)",
            },
        },
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> List[Dict[str, Any]]:
        return await context.workspace.search.search(
            content=InputValidator.optional_string(args, "content"),
            tag=InputValidator.optional_string(args, "tag"),
            filename=InputValidator.optional_string(args, "filename"),
            limit=InputValidator.positive_int(args, "limit", 10),
            notebook=InputValidator.optional_string(args, "notebook_id"),
            types=InputValidator.string_list(args, "types"),
        )


class ExecuteSqlHandler(ToolHandler):
    """Run a raw read-only SQL query against the blocks table."""

    name = "execute_sql"
    description = (
        "Execute a raw SQL query against the SiYuan database. The main table is \"blocks\" with "
        "columns: id, parent_id, root_id, box, path, hpath, name, alias, memo, tag, content, "
        "type, subtype, ial, sort, created, updated. Block types: d=document, h=heading, "
        "p=paragraph, l=list, i=list-item, c=code, m=math, t=table, b=blockquote, s=super-block. "
        "Only SELECT statements are accepted."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "sql": {
                "type": "string",
                "description": "SQL query to execute (e.g. \"SELECT * FROM blocks WHERE type='d' LIMIT 10\")",
            },
        },
        "required": ["sql"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> List[Dict[str, Any]]:
        sql = InputValidator.require_string(args, "sql")

        is_valid, error_msg = SQLValidator.validate_query(sql)
        if not is_valid:
            logger.warning(f"Query blocked by validation: {error_msg}")
            raise ToolValidationError(f"SQL validation failed: {error_msg}")

        return await context.workspace.search.query(sql)


class FindBlockInDocumentHandler(ToolHandler):
    name = "find_block_in_document"
    description = (
        "Search for blocks within a specific document by content keyword. Faster than loading the "
        "full document when you need to find a particular paragraph, heading, or list within a known note."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "document_id": {
                "type": "string",
                "description": "The document ID (root_id) to search within",
            },
            "query": {
                "type": "string",
                "description": "Content keyword to search for within the document",
            },
            "types": {
                "type": "array",
                "items": {"type": "string"},
                "description": (
                    "Optional: Block types to filter (e.g. [\"h\"] for headings only, [\"p\"] for "
                    "paragraphs). Omit to search all types."
                ),
            },
        },
        "required": ["document_id", "query"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> List[Dict[str, Any]]:
        return await context.workspace.search.find_in_document(
            InputValidator.require_string(args, "document_id"),
            InputValidator.require_string(args, "query"),
            types=InputValidator.string_list(args, "types"),
        )
