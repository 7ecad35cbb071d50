"""Block-level handlers.

Block tools are the cheap path for targeted reads and edits: they touch one
block (or one heading section) instead of a whole document.
"""

import logging
from typing import Any, Dict, List

from core.context import ExecutionContext
from core.exceptions import ToolValidationError
from tools.base import ToolHandler
from tools.validators import InputValidator

logger = logging.getLogger(__name__)


class GetBlockHandler(ToolHandler):
    name = "get_block"
    description = (
        "Get the content of a single block by its ID in kramdown format. More efficient than "
        "fetching an entire document when you only need one block."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "block_id": {
                "type": "string",
                "description": "The block ID to retrieve",
            },
        },
        "required": ["block_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, str]:
        block_id = InputValidator.require_string(args, "block_id")
        kramdown = await context.workspace.block.get_kramdown(block_id)
        return {"id": block_id, "kramdown": kramdown}


class UpdateBlockHandler(ToolHandler):
    name = "update_block"
    description = (
        "Update the content of a single block by its ID. Replaces the block content with the "
        "provided markdown. More efficient than rewriting an entire document for small edits."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "block_id": {
                "type": "string",
                "description": "The block ID to update",
            },
            "content": {
                "type": "string",
                "description": "New markdown content for the block",
            },
        },
        "required": ["block_id", "content"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        block_id = InputValidator.require_string(args, "block_id")
        content = args.get("content")
        if not isinstance(content, str):
            raise ToolValidationError("Missing required argument: content")
        await context.workspace.block.update(block_id, content)
        return {"success": True, "block_id": block_id}


class AppendBlockHandler(ToolHandler):
    name = "append_block"
    description = (
        "Append a new child block at the end of a parent block. Use this to add content at a "
        "specific position within a document rather than at the document level."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "parent_id": {
                "type": "string",
                "description": "The parent block ID to append under",
            },
            "content": {
                "type": "string",
                "description": "Markdown content for the new block",
            },
        },
        "required": ["parent_id", "content"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, str]:
        block_id = await context.workspace.block.append(
            InputValidator.require_string(args, "parent_id"),
            InputValidator.require_string(args, "content"),
        )
        return {"block_id": block_id}


class InsertBlockHandler(ToolHandler):
    """Insert before or after a reference block; the two are mutually exclusive."""

    name = "insert_block"
    description = (
        "Insert a new block before or after an existing block. Provide exactly one of before_id "
        "or after_id to control placement."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "content": {
                "type": "string",
                "description": "Markdown content for the new block",
            },
            "before_id": {
                "type": "string",
                "description": "OPTION 1: Insert BEFORE this block ID. Cannot be used together with after_id.",
            },
            "after_id": {
                "type": "string",
                "description": "OPTION 2: Insert AFTER this block ID. Cannot be used together with before_id.",
            },
        },
        "required": ["content"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, str]:
        placement = InputValidator.exactly_one(args, "before_id", "after_id")
        content = InputValidator.require_string(args, "content")

        if placement == "before_id":
            block_id = await context.workspace.block.insert_before(args["before_id"], content)
        else:
            block_id = await context.workspace.block.insert_after(args["after_id"], content)

        return {"block_id": block_id}


class DeleteBlockHandler(ToolHandler):
    name = "delete_block"
    description = (
        "Delete a single block by its ID. Deleting a heading does not delete the blocks of its "
        "section. Consider create_snapshot before bulk deletions."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "block_id": {
                "type": "string",
                "description": "The block ID to delete",
            },
        },
        "required": ["block_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        block_id = InputValidator.require_string(args, "block_id")
        await context.workspace.block.delete(block_id)
        return {"success": True, "block_id": block_id}


class MoveBlockHandler(ToolHandler):
    name = "move_block"
    description = (
        "Move a block to a new position. Use parent_id to move it as a child of another block, "
        "or previous_id to place it after a sibling block. Provide at least one destination parameter."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "block_id": {
                "type": "string",
                "description": "The block ID to move",
            },
            "previous_id": {
                "type": "string",
                "description": "Place the block after this sibling block ID",
            },
            "parent_id": {
                "type": "string",
                "description": "Move the block as a child of this parent block ID",
            },
        },
        "required": ["block_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        block_id = InputValidator.require_string(args, "block_id")
        InputValidator.at_least_one(args, ["previous_id", "parent_id"])
        await context.workspace.block.move(
            block_id,
            previous_id=InputValidator.optional_string(args, "previous_id"),
            parent_id=InputValidator.optional_string(args, "parent_id"),
        )
        return {"success": True, "block_id": block_id}


class GetChildBlocksHandler(ToolHandler):
    name = "get_child_blocks"
    description = (
        "Get the child blocks of a block by its ID. Supports two-level navigation: (1) call on a "
        "document ID to get all top-level blocks (headings, paragraphs, etc.), then (2) call on a "
        "heading block ID to get only the blocks within that section. This lets you navigate to a "
        "specific section without loading the full document. Returns each child's ID, type, "
        "subType, and content."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "block_id": {
                "type": "string",
                "description": "The parent block ID whose children to list (often a document ID or heading ID)",
            },
        },
        "required": ["block_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> List[Dict[str, Any]]:
        return await context.workspace.block.get_children(InputValidator.require_string(args, "block_id"))


class GetSectionContentHandler(ToolHandler):
    name = "get_section_content"
    description = (
        "Get the full readable markdown of a heading's section: the heading itself plus every block "
        "under it up to the next heading of the same or higher level. Typically 5-10x cheaper than "
        "get_document_content."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "heading_id": {
                "type": "string",
                "description": "The heading block ID whose section to read",
            },
        },
        "required": ["heading_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> str:
        return await context.workspace.block.get_section_markdown(
            InputValidator.require_string(args, "heading_id")
        )


class GetDocumentForBlockHandler(ToolHandler):
    name = "get_document_for_block"
    description = (
        "Find which document a block belongs to. Use after a search returns block-level results to "
        "get the document ID, title and path before navigating its structure."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "block_id": {
                "type": "string",
                "description": "Any block ID",
            },
        },
        "required": ["block_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        return await context.workspace.block.get_document(InputValidator.require_string(args, "block_id"))


class GetBlockAttrsHandler(ToolHandler):
    name = "get_block_attrs"
    description = (
        "Get all attributes (including custom attributes) of a block by its ID. Returns key-value "
        "pairs such as name, alias, memo, bookmark, and any custom-* attributes."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "block_id": {
                "type": "string",
                "description": "The block ID to get attributes for",
            },
        },
        "required": ["block_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, str]:
        return await context.workspace.block.get_attrs(InputValidator.require_string(args, "block_id"))


class SetBlockAttrsHandler(ToolHandler):
    name = "set_block_attrs"
    description = (
        "Set attributes on a block by its ID. Merges with existing attributes (does not remove "
        "unspecified ones). Use custom-* keys for user-defined metadata "
        "(e.g. {\"custom-status\": \"reviewed\"})."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "block_id": {
                "type": "string",
                "description": "The block ID to set attributes on",
            },
            "attrs": {
                "type": "object",
                "description": (
                    "Key-value pairs of attributes to set. Use custom-* prefixed keys for user-defined "
                    "attributes (e.g. {\"custom-status\": \"done\", \"custom-priority\": \"high\"})"
                ),
            },
        },
        "required": ["block_id", "attrs"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        block_id = InputValidator.require_string(args, "block_id")
        attrs = InputValidator.string_map(args, "attrs")
        await context.workspace.block.set_attrs(block_id, attrs)
        return {"success": True, "block_id": block_id}
