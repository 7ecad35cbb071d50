"""Document handlers: read, create, edit, move and navigate notes."""

import logging
from typing import Any, Dict, List, Optional

from core.context import ExecutionContext
from core.exceptions import ToolValidationError
from tools.base import ToolHandler
from tools.validators import InputValidator

logger = logging.getLogger(__name__)


def _non_negative_int(args: Dict[str, Any], key: str) -> Optional[int]:
    value = args.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ToolValidationError(f"{key} must be a non-negative integer")
    return int(value)


class GetDocumentContentHandler(ToolHandler):
    """Markdown of a whole document, optionally paginated by line."""

    name = "get_document_content"
    description = (
        "Read the markdown content of a note in SiYuan. Returns the full note content in markdown "
        "format, with optional pagination support"
    )
    input_schema = {
        "type": "object",
        "properties": {
            "document_id": {
                "type": "string",
                "description": "The note document ID (block ID)",
            },
            "offset": {
                "type": "number",
                "description": "Starting line number (0-based index). Default is 0 (start from beginning)",
                "default": 0,
            },
            "limit": {
                "type": "number",
                "description": "Number of lines to return. If not specified, returns all lines from offset to end",
            },
        },
        "required": ["document_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> str:
        """
        Fetch the document and slice it by line.

        Without offset/limit the full text is returned behind a header
        giving the total line count; with them, the header also states the
        returned range (or that it is out of range).
        """
        document_id = InputValidator.require_string(args, "document_id")
        offset = _non_negative_int(args, "offset")
        limit = _non_negative_int(args, "limit")

        full_content = await context.workspace.document.get_content(document_id)
        lines = full_content.split("\n")
        total_lines = len(lines)

        if offset is None and limit is None:
            return f"--- Document Info ---\nTotal Lines: {total_lines}\n--- End Info ---\n\n{full_content}"

        start_line = offset or 0
        if start_line >= total_lines:
            return (
                f"--- Document Info ---\nTotal Lines: {total_lines}\n"
                f"Requested Range: {start_line}-{start_line + (limit or 0)}\n"
                f"Status: Out of range\n--- End Info ---\n"
            )

        end_line = start_line + limit if limit is not None else total_lines
        end_line = min(end_line, total_lines)

        meta = (
            f"--- Document Info ---\nTotal Lines: {total_lines}\n"
            f"Current Range: {start_line}-{end_line - 1} (showing {end_line - start_line} lines)\n"
            f"--- End Info ---\n\n"
        )
        return meta + "\n".join(lines[start_line:end_line])


class CreateDocumentHandler(ToolHandler):
    name = "create_document"
    description = "Create a new note document in a SiYuan notebook with markdown content"
    input_schema = {
        "type": "object",
        "properties": {
            "notebook_id": {
                "type": "string",
                "description": "The target notebook ID where the note will be created",
            },
            "path": {
                "type": "string",
                "description": "Note path within the notebook (e.g., /folder/note-title)",
            },
            "content": {
                "type": "string",
                "description": "Markdown content for the new note",
            },
        },
        "required": ["notebook_id", "path", "content"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        path = InputValidator.require_string(args, "path")
        if not path.startswith("/"):
            path = "/" + path
        if path.endswith(".md"):
            path = path[:-3]

        document_id = await context.workspace.document.create(
            InputValidator.require_string(args, "notebook_id"),
            path,
            args.get("content") or "",
        )
        return {"document_id": document_id, "path": path}


class AppendToDocumentHandler(ToolHandler):
    name = "append_to_document"
    description = "Append markdown content to the end of an existing note in SiYuan"
    input_schema = {
        "type": "object",
        "properties": {
            "document_id": {
                "type": "string",
                "description": "The target note document ID",
            },
            "content": {
                "type": "string",
                "description": "Markdown content to append to the note",
            },
        },
        "required": ["document_id", "content"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        block_id = await context.workspace.document.append(
            InputValidator.require_string(args, "document_id"),
            InputValidator.require_string(args, "content"),
        )
        return {"block_id": block_id}


class UpdateDocumentHandler(ToolHandler):
    name = "update_document"
    description = (
        "Replace the entire content of a note in SiYuan with new markdown content "
        "(overwrites existing content)"
    )
    input_schema = {
        "type": "object",
        "properties": {
            "document_id": {
                "type": "string",
                "description": "The note document ID to update",
            },
            "content": {
                "type": "string",
                "description": "New markdown content that will replace the existing note content",
            },
        },
        "required": ["document_id", "content"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        document_id = InputValidator.require_string(args, "document_id")
        content = args.get("content")
        if not isinstance(content, str):
            raise ToolValidationError("Missing required argument: content")
        await context.workspace.document.overwrite(document_id, content)
        return {"success": True, "document_id": document_id}


class AppendToDailyNoteHandler(ToolHandler):
    name = "append_to_daily_note"
    description = (
        "Append markdown content to today's daily note in SiYuan "
        "(automatically creates the daily note if it doesn't exist)"
    )
    input_schema = {
        "type": "object",
        "properties": {
            "notebook_id": {
                "type": "string",
                "description": "The notebook ID where the daily note resides",
            },
            "content": {
                "type": "string",
                "description": "Markdown content to append to today's daily note",
            },
        },
        "required": ["notebook_id", "content"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        return await context.workspace.document.append_to_daily_note(
            InputValidator.require_string(args, "notebook_id"),
            InputValidator.require_string(args, "content"),
        )


class MoveDocumentsHandler(ToolHandler):
    """Move documents under a parent document or to a notebook root."""

    name = "move_documents"
    description = (
        "Move one or more notes to a new location in SiYuan. Provide EXACTLY ONE destination: "
        "either to_parent_id (to nest notes under a parent note) OR to_notebook_root "
        "(to move notes to notebook top level)."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "from_ids": {
                "type": "array",
                "items": {"type": "string"},
                "description": (
                    "Array of note document IDs to move. For a single note, use an array with one "
                    "element: [\"note-id\"]"
                ),
            },
            "to_parent_id": {
                "type": "string",
                "description": (
                    "OPTION 1: Parent note document ID. Notes will be nested under this parent note "
                    "as children. Cannot be used together with to_notebook_root."
                ),
            },
            "to_notebook_root": {
                "type": "string",
                "description": (
                    "OPTION 2: Notebook ID. Notes will be moved to the top level of this notebook. "
                    "Cannot be used together with to_parent_id."
                ),
            },
        },
        "required": ["from_ids"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        from_ids = InputValidator.id_list(args.get("from_ids"), "from_ids")
        target = InputValidator.exactly_one(args, "to_parent_id", "to_notebook_root")

        if target == "to_parent_id":
            await context.workspace.document.move_to_parent(from_ids, args["to_parent_id"])
        else:
            await context.workspace.document.move_to_notebook_root(from_ids, args["to_notebook_root"])

        return {
            "success": True,
            "moved_count": len(from_ids),
            "from_ids": from_ids,
            target: args[target],
        }


class GetDocumentTreeHandler(ToolHandler):
    name = "get_document_tree"
    description = (
        "Get the hierarchical structure of notes in SiYuan with specified depth. Returns the note "
        "tree starting from a notebook or parent note."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "id": {
                "type": "string",
                "description": "Starting point: note document ID or notebook ID",
            },
            "depth": {
                "type": "number",
                "description": (
                    "How deep to traverse the note hierarchy (1 = direct children only, 2 = children "
                    "and grandchildren, etc.). Default is 1."
                ),
                "default": 1,
            },
        },
        "required": ["id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> List[Dict[str, Any]]:
        return await context.workspace.document.get_tree(
            InputValidator.require_string(args, "id"),
            InputValidator.positive_int(args, "depth", 1),
        )


class RenameDocumentHandler(ToolHandler):
    name = "rename_document"
    description = "Rename a note in SiYuan by its document ID (changes the title only, not the location)"
    input_schema = {
        "type": "object",
        "properties": {
            "document_id": {
                "type": "string",
                "description": "The note document ID to rename",
            },
            "title": {
                "type": "string",
                "description": "The new title",
            },
        },
        "required": ["document_id", "title"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        document_id = InputValidator.require_string(args, "document_id")
        title = InputValidator.require_string(args, "title")
        await context.workspace.document.rename(document_id, title)
        return {"success": True, "document_id": document_id, "title": title}


class RemoveDocumentHandler(ToolHandler):
    name = "remove_document"
    description = (
        "Delete a note (and its sub-notes) from SiYuan by document ID. "
        "Consider create_snapshot first - this cannot be undone otherwise."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "document_id": {
                "type": "string",
                "description": "The note document ID to delete",
            },
        },
        "required": ["document_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        document_id = InputValidator.require_string(args, "document_id")
        await context.workspace.document.remove(document_id)
        return {"success": True, "document_id": document_id}


class GetHPathByIdHandler(ToolHandler):
    name = "get_hpath_by_id"
    description = (
        "Resolve a block or document ID to its human-readable path (e.g. /Projects/Plan). "
        "Use this when reporting locations to the user."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "id": {
                "type": "string",
                "description": "Block or document ID",
            },
        },
        "required": ["id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> str:
        return await context.workspace.document.get_hpath(InputValidator.require_string(args, "id"))
