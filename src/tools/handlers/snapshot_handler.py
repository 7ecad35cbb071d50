"""Snapshot handlers: back up and restore the whole workspace."""

import logging
from typing import Any, Dict

from core.context import ExecutionContext
from tools.base import ToolHandler
from tools.validators import InputValidator

logger = logging.getLogger(__name__)

DEFAULT_MEMO = "Auto snapshot"


class CreateSnapshotHandler(ToolHandler):
    name = "create_snapshot"
    description = (
        "Create a snapshot to backup all notes in SiYuan workspace. Essential before bulk "
        "operations to enable rollback if needed"
    )
    input_schema = {
        "type": "object",
        "properties": {
            "memo": {
                "type": "string",
                "description": "Description of what this snapshot is for (optional, default: \"Auto snapshot\")",
            },
        },
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        memo = InputValidator.optional_string(args, "memo") or DEFAULT_MEMO
        result = await context.workspace.snapshot.create(memo)
        logger.info(f"Snapshot created: {memo}")
        return {
            **result,
            "message": f"Snapshot created successfully with memo: \"{memo}\"",
        }


class ListSnapshotsHandler(ToolHandler):
    name = "list_snapshots"
    description = (
        "List available snapshots of your SiYuan notes workspace with pagination. "
        "Shows snapshot creation time and description"
    )
    input_schema = {
        "type": "object",
        "properties": {
            "page_number": {
                "type": "number",
                "description": "Page number (starts from 1, default: 1)",
            },
        },
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        return await context.workspace.snapshot.list(InputValidator.positive_int(args, "page_number", 1))


class RollbackSnapshotHandler(ToolHandler):
    name = "rollback_to_snapshot"
    description = (
        "Restore your SiYuan notes workspace to a previous snapshot state. "
        "Use this to recover from accidental changes or deletions"
    )
    input_schema = {
        "type": "object",
        "properties": {
            "snapshot_id": {
                "type": "string",
                "description": "The snapshot ID to restore to (get from list_snapshots)",
            },
        },
        "required": ["snapshot_id"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        snapshot_id = InputValidator.require_string(args, "snapshot_id")
        await context.workspace.snapshot.rollback(snapshot_id)
        logger.warning(f"Workspace rolled back to snapshot {snapshot_id}")
        return {
            "success": True,
            "snapshot_id": snapshot_id,
            "message": f"Successfully rolled back to snapshot: {snapshot_id}",
        }
