"""Notebook handlers."""

import logging
from typing import Any, Dict, List

from core.context import ExecutionContext
from tools.base import ToolHandler
from tools.validators import InputValidator

logger = logging.getLogger(__name__)


class ListNotebooksHandler(ToolHandler):
    name = "list_notebooks"
    description = (
        "List all notebooks in your SiYuan workspace. Notebooks are top-level containers "
        "for organizing your notes"
    )
    input_schema = {
        "type": "object",
        "properties": {},
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> List[Dict[str, Any]]:
        return await context.workspace.notebook.list()


class GetRecentlyUpdatedDocumentsHandler(ToolHandler):
    name = "get_recently_updated_documents"
    description = (
        "Get recently modified notes in SiYuan, sorted by update time (most recent first). "
        "Useful for finding what you worked on recently"
    )
    input_schema = {
        "type": "object",
        "properties": {
            "limit": {
                "type": "number",
                "description": "Number of notes to return (default: 10)",
                "default": 10,
            },
            "notebook_id": {
                "type": "string",
                "description": "Optional: Filter to a specific notebook ID",
            },
        },
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> List[Dict[str, Any]]:
        return await context.workspace.notebook.get_recently_updated_documents(
            InputValidator.positive_int(args, "limit", 10),
            InputValidator.optional_string(args, "notebook_id"),
        )


class CreateNotebookHandler(ToolHandler):
    name = "create_notebook"
    description = "Create a new notebook in SiYuan with the specified name"
    input_schema = {
        "type": "object",
        "properties": {
            "name": {
                "type": "string",
                "description": "The name of the new notebook",
            },
        },
        "required": ["name"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Dict[str, str]:
        notebook_name = InputValidator.require_string(args, "name")
        notebook_id = await context.workspace.notebook.create(notebook_name)
        return {"notebook_id": notebook_id, "name": notebook_name}


class SetDailyNoteFormatHandler(ToolHandler):
    """Rewrite a notebook's ``dailyNoteSavePath`` while keeping the rest of its conf."""

    name = "set_daily_note_format"
    description = """Configure the folder structure and file naming format for daily notes in a SiYuan notebook. Uses Go time format via Sprig templates.

Available format tokens:
- {{now | date "2006"}}    -> 4-digit year (e.g. 2024)
- {{now | date "01"}}      -> 2-digit month number (e.g. 03)
- {{now | date "January"}} -> full month name (e.g. March)
- {{now | date "Jan"}}     -> abbreviated month (e.g. Mar)
- {{now | date "02"}}      -> 2-digit day (e.g. 21)
- {{now | date "2006-01-02"}} -> full date (e.g. 2024-03-21)

Default format produces: Daily Notes/2024/03 - March/2024-03-21"""
    input_schema = {
        "type": "object",
        "properties": {
            "notebook_id": {
                "type": "string",
                "description": "The notebook ID to configure",
            },
            "path_template": {
                "type": "string",
                "description": (
                    "Path template for daily notes using Go/Sprig date format. Example (default): "
                    "/Daily Notes/{{now | date \"2006\"}}/{{now | date \"01\"}} - "
                    "{{now | date \"January\"}}/{{now | date \"2006-01-02\"}}"
                ),
            },
        },
        "required": ["notebook_id", "path_template"],
    }

    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> str:
        notebook_id = InputValidator.require_string(args, "notebook_id")
        template = InputValidator.require_string(args, "path_template")

        current = await context.workspace.notebook.get_conf(notebook_id)
        await context.workspace.notebook.set_conf(notebook_id, {**current, "dailyNoteSavePath": template})
        return f"Daily note format updated to: {template}"
