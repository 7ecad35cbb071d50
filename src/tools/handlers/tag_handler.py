"""Tag handlers."""

from typing import Any, Dict, List

from core.context import ExecutionContext
from core.exceptions import ToolValidationError
from tools.base import ToolHandler
from tools.validators import InputValidator


class ListAllTagsHandler(ToolHandler):
    name = "list_all_tags"
    description = (
        "List every tag used in the SiYuan workspace with its usage count. "
        "Nested tags are reported with their full label (e.g. project/alpha)."
    )
    input_schema = {
        "type": "object",
        "properties": {},
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> List[Dict[str, Any]]:
        return await context.workspace.tag.list()


class ReplaceTagHandler(ToolHandler):
    name = "batch_replace_tag"
    description = (
        "Rename a tag across the whole workspace: every block tagged old_tag is retagged new_tag. "
        "Consider create_snapshot first."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "old_tag": {
                "type": "string",
                "description": "Tag to replace (without # symbol)",
            },
            "new_tag": {
                "type": "string",
                "description": "Replacement tag (without # symbol)",
            },
        },
        "required": ["old_tag", "new_tag"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, Any]:
        old_tag = InputValidator.require_string(args, "old_tag").strip("#")
        new_tag = InputValidator.require_string(args, "new_tag").strip("#")
        if not old_tag or not new_tag:
            raise ToolValidationError("Tags cannot be empty")
        if old_tag == new_tag:
            raise ToolValidationError("old_tag and new_tag are identical")

        await context.workspace.tag.replace(old_tag, new_tag)
        return {"success": True, "old_tag": old_tag, "new_tag": new_tag}
