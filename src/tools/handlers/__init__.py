"""Tool handlers package."""

from typing import List

from tools.base import ToolHandler
from tools.handlers.search_handler import (
    UnifiedSearchHandler,
    ExecuteSqlHandler,
    FindBlockInDocumentHandler,
)
from tools.handlers.document_handler import (
    GetDocumentContentHandler,
    CreateDocumentHandler,
    AppendToDocumentHandler,
    UpdateDocumentHandler,
    AppendToDailyNoteHandler,
    MoveDocumentsHandler,
    GetDocumentTreeHandler,
    RenameDocumentHandler,
    RemoveDocumentHandler,
    GetHPathByIdHandler,
)
from tools.handlers.block_handler import (
    GetBlockHandler,
    UpdateBlockHandler,
    AppendBlockHandler,
    InsertBlockHandler,
    DeleteBlockHandler,
    MoveBlockHandler,
    GetChildBlocksHandler,
    GetSectionContentHandler,
    GetDocumentForBlockHandler,
    GetBlockAttrsHandler,
    SetBlockAttrsHandler,
)
from tools.handlers.notebook_handler import (
    ListNotebooksHandler,
    GetRecentlyUpdatedDocumentsHandler,
    CreateNotebookHandler,
    SetDailyNoteFormatHandler,
)
from tools.handlers.snapshot_handler import (
    CreateSnapshotHandler,
    ListSnapshotsHandler,
    RollbackSnapshotHandler,
)
from tools.handlers.tag_handler import (
    ListAllTagsHandler,
    ReplaceTagHandler,
)

# Registration order is the order tools are listed to clients
HANDLER_CLASSES = [
    # Search
    UnifiedSearchHandler,
    ExecuteSqlHandler,
    FindBlockInDocumentHandler,

    # Documents
    GetDocumentContentHandler,
    CreateDocumentHandler,
    AppendToDocumentHandler,
    UpdateDocumentHandler,
    AppendToDailyNoteHandler,
    MoveDocumentsHandler,
    GetDocumentTreeHandler,
    RenameDocumentHandler,
    RemoveDocumentHandler,
    GetHPathByIdHandler,

    # Blocks
    GetBlockHandler,
    UpdateBlockHandler,
    AppendBlockHandler,
    InsertBlockHandler,
    DeleteBlockHandler,
    MoveBlockHandler,
    GetChildBlocksHandler,
    GetSectionContentHandler,
    GetDocumentForBlockHandler,
    GetBlockAttrsHandler,
    SetBlockAttrsHandler,

    # Notebooks
    ListNotebooksHandler,
    GetRecentlyUpdatedDocumentsHandler,
    CreateNotebookHandler,
    SetDailyNoteFormatHandler,

    # Snapshots
    CreateSnapshotHandler,
    ListSnapshotsHandler,
    RollbackSnapshotHandler,

    # Tags
    ListAllTagsHandler,
    ReplaceTagHandler,
]


def create_all_handlers() -> List[ToolHandler]:
    """Instantiate one handler per built-in tool."""
    return [handler_class() for handler_class in HANDLER_CLASSES]


__all__ = [cls.__name__ for cls in HANDLER_CLASSES] + ["HANDLER_CLASSES", "create_all_handlers"]
