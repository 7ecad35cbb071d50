"""FastAPI routes for the SiYuan MCP REST API.

The REST surface is a thin mirror of the MCP one: tool calls go through the
same dispatcher and return the same ``{content, isError}`` envelope.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from core.dependencies import get_dispatcher_dependency
from core.error_handling import safe_execute_async
from protocol.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)


class ToolCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    siyuan_connected: bool
    siyuan_version: Optional[str] = None
    siyuan_url: Optional[str] = None
    error: Optional[str] = None


class ToolInfo(BaseModel):
    name: str
    description: str
    parameters: Dict[str, Any]


class PromptInfo(BaseModel):
    name: str
    description: Optional[str] = None


class ContentItem(BaseModel):
    type: str
    text: str


class ToolCallResponse(BaseModel):
    content: List[ContentItem]
    isError: bool


router = APIRouter(prefix="/api/v1")


@router.get("/health", response_model=HealthResponse)
async def health_check(dispatcher: ToolDispatcher = Depends(get_dispatcher_dependency)):
    """Health check endpoint; pings the SiYuan kernel for its version."""
    config = dispatcher.context.config
    probe = await safe_execute_async(dispatcher.context.workspace.system.version)

    response = HealthResponse(
        status="ok" if probe["success"] else "degraded",
        timestamp=datetime.now().isoformat(),
        version=config.server_version,
        siyuan_connected=probe["success"],
        siyuan_version=probe.get("data"),
        error=probe.get("error"),
    )
    if config.expose_sensitive_info:
        response.siyuan_url = config.siyuan.base_url
    return response


@router.get("/tools", response_model=List[ToolInfo])
async def list_tools(dispatcher: ToolDispatcher = Depends(get_dispatcher_dependency)):
    """List all available MCP tools."""
    return [
        ToolInfo(
            name=tool.name,
            description=tool.description or "",
            parameters=tool.inputSchema
        )
        for tool in dispatcher.list_tools()
    ]


@router.post("/tools/{name}", response_model=ToolCallResponse)
async def call_tool(
    name: str,
    request: Optional[ToolCallRequest] = None,
    dispatcher: ToolDispatcher = Depends(get_dispatcher_dependency)
):
    """Invoke a tool; failures come back as ``isError: true`` with HTTP 200."""
    logger.debug(f"REST tool call: {name}")
    arguments = request.arguments if request is not None else {}
    return await dispatcher.call_tool(name, arguments)


@router.get("/prompts", response_model=List[PromptInfo])
async def list_prompts(dispatcher: ToolDispatcher = Depends(get_dispatcher_dependency)):
    """List the prompt catalog."""
    return [
        PromptInfo(name=prompt.name, description=prompt.description)
        for prompt in dispatcher.list_prompts()
    ]

