"""Execution context shared by every tool invocation."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from core.config import AppConfig

CONTEXT_LOGGER_NAME = "siyuan_mcp"


class ExecutionContext(BaseModel):
    """Dependencies handed to ``ToolHandler.execute``.

    Built once at startup and passed by reference to every call. The model
    is frozen; handlers keep per-call state in local variables.

    Attributes:
        workspace: SiYuan workspace facade (see ``workspace.SiyuanWorkspace``)
        config: Resolved application configuration
        logger: Log sink for handler and dispatch messages
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    workspace: Any
    config: AppConfig
    logger: logging.Logger

    @classmethod
    def create(
        cls,
        workspace: Any,
        config: AppConfig,
        logger: logging.Logger = None
    ) -> "ExecutionContext":
        """Build a context, defaulting to the shared ``siyuan_mcp`` logger."""
        return cls(
            workspace=workspace,
            config=config,
            logger=logger or logging.getLogger(CONTEXT_LOGGER_NAME),
        )
