"""Server instructions and the fixed prompt catalog."""

from typing import Dict, List

from mcp.types import GetPromptResult, Prompt, PromptMessage, TextContent

from core.exceptions import UnknownPromptError

USAGE_GUIDE_PROMPT = "siyuan-usage-guide"

SERVER_INSTRUCTIONS = """You have access to a SiYuan Note workspace through this MCP server.

## Recommended workflow

1. **Find the document**: use unified_search with filename, or execute_sql. When looking for a document rather than a block, pass types: ["d"] to skip paragraph and list-item matches.
2. **Navigate the structure**: call get_child_blocks on the document ID to see its top-level headings and blocks.
3. **Drill into a section**: call get_child_blocks on a heading ID to list only that section, or get_section_content to read the section as markdown in one call.
4. **Find a specific block**: use find_block_in_document to locate a block by content within a known document.
5. **Read or edit**: use get_block / update_block / insert_block on specific block IDs.

## Efficiency guidelines

- Prefer block-level and section-level tools. get_section_content on a heading is usually far cheaper than get_document_content on the whole note.
- Reach for get_document_content only when you really need the entire note; footnotes are expanded inline and can pull in whole other documents.
- After a search returns block-level hits, use get_document_for_block to find the owning document before navigating it.
- Use execute_sql for multi-condition lookups, sorting or aggregation.
- Use get_hpath_by_id to turn block IDs into readable locations when reporting to the user.

## Data safety

- Create a snapshot with create_snapshot before bulk edits or deletions.
- Read content back after changing it.
- Take care editing blocks near footnote definitions ([^n]); a broken reference breaks rendering.

## Key concepts

- Every piece of content is a **block** with a unique ID.
- **Documents** are top-level blocks (type='d') containing child blocks.
- Block types: d=document, h=heading, p=paragraph, l=list, i=list-item, c=code, m=math, t=table, b=blockquote, s=super-block.
- Custom attributes (custom-* keys) can be read and written with get_block_attrs / set_block_attrs.
- The root_id column of the blocks table always points at the document a block belongs to.
"""

USAGE_GUIDE = """# SiYuan MCP Server Usage Guide

## Overview

This server exposes a SiYuan Note workspace: search, document management, block-level editing, notebooks, snapshots and tags.

## Efficiency tips

- With a block ID in hand, use get_block / update_block instead of loading the full document.
- Use get_document_content when you need the overall structure of a note.
- Use execute_sql for flexible lookups against the blocks table.

## Data safety

1. Before bulk modifications or deletions, call create_snapshot with a descriptive memo.
2. Make the changes.
3. If something goes wrong, call list_snapshots and then rollback_to_snapshot.

## Suggested workflow

1. **Find documents**: unified_search or execute_sql
2. **Read content**: get_document_content (whole note), get_section_content (one heading) or get_block (one block)
3. **Snapshot**: create_snapshot before making changes
4. **Edit**: update_block, insert_block, append_block for targeted edits, update_document for full rewrites
5. **Verify**: read the content again
6. **Roll back if needed**: rollback_to_snapshot

## Tool categories

### Search & Query
- unified_search: search by content, filename, tag, or combinations
- execute_sql: read-only SQL against the blocks table
- find_block_in_document: keyword search inside one document

### Document operations
- get_document_content, create_document, append_to_document, update_document
- rename_document, remove_document, move_documents, get_document_tree
- get_hpath_by_id: resolve a block ID to a human-readable path
- append_to_daily_note: append to today's daily note (created when missing)

### Block operations
- get_block / update_block / delete_block: read, edit or remove one block
- append_block / insert_block: add content at a specific position
- move_block: reorder or relocate blocks
- get_child_blocks / get_section_content / get_document_for_block: navigation
- get_block_attrs / set_block_attrs: custom metadata

### Notebook, Snapshot & Tag tools
- list_notebooks, get_recently_updated_documents, create_notebook, set_daily_note_format
- create_snapshot, list_snapshots, rollback_to_snapshot
- list_all_tags, batch_replace_tag

## Key concepts

- Every piece of content is a **block** with a unique ID (e.g. 20240101120000-abc1234).
- **Documents** are top-level blocks (type='d') containing child blocks.
- Document paths look like /folder/document (no .md extension).
- Snapshots require the data repo feature to be enabled in SiYuan.
- Avoid concurrent modifications to the same document.
"""

PROMPTS: List[Prompt] = [
    Prompt(
        name=USAGE_GUIDE_PROMPT,
        description="Usage guide and best practices for the SiYuan MCP server",
    ),
]

_PROMPT_TEXT: Dict[str, str] = {
    USAGE_GUIDE_PROMPT: USAGE_GUIDE,
}


def list_prompts() -> List[Prompt]:
    return list(PROMPTS)


def get_prompt(name: str) -> GetPromptResult:
    """
    Messages for a catalog prompt.

    Raises:
        UnknownPromptError: ``name`` is not in the catalog
    """
    text = _PROMPT_TEXT.get(name)
    if text is None:
        raise UnknownPromptError(name)

    return GetPromptResult(
        description=next(p.description for p in PROMPTS if p.name == name),
        messages=[
            PromptMessage(
                role="user",
                content=TextContent(type="text", text="Please read the SiYuan MCP server usage guide."),
            ),
            PromptMessage(
                role="assistant",
                content=TextContent(type="text", text=text),
            ),
        ],
    )
