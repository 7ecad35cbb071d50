"""Unified response formatting for REST API and MCP protocol.

Provides the standardized success/error envelopes and the conversion of
handler results into text content.
"""

import json
import logging
import traceback
from typing import Dict, Any, Optional
from enum import Enum

from pydantic import BaseModel

logger = logging.getLogger(__name__)

SUCCESS_TEXT = "Success"
ERROR_PREFIX = "Error: "


class ErrorFormat(Enum):
    """Error response format types."""
    REST_API = "rest_api"      # REST API format: {"success": false, "error": "..."}
    MCP_TOOL = "mcp_tool"       # MCP tool format: {"content": [{"type": "text", "text": "Error: ..."}], "isError": true}


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def result_to_text(result: Any) -> str:
    """Render a handler result as the text of a single content block.

    None becomes the literal success marker, strings pass through verbatim,
    anything else is pretty-printed JSON so it can be parsed back. JSON has
    no tuples, sets or non-string keys: tuples and sets come back as lists
    and dict keys such as 1 come back as "1".

    Raises:
        TypeError: If the result holds values that JSON cannot represent
    """
    if result is None:
        return SUCCESS_TEXT
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        result = result.model_dump(mode="json")
    return json.dumps(result, indent=2, ensure_ascii=False, default=_json_default)


def error_message(error: BaseException) -> str:
    """Extract the human-readable message of an exception."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    text = str(error)
    return text if text else type(error).__name__


def format_error_response(
    error: Exception,
    format_type: ErrorFormat = ErrorFormat.REST_API,
    include_stacktrace: bool = False,
    context: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Format error response in specified format.

    Args:
        error: The exception that occurred
        format_type: Desired response format (REST_API or MCP_TOOL)
        include_stacktrace: Whether to include stack trace (for debugging)
        context: Additional context information

    Returns:
        Formatted error response dict
    """
    message = error_message(error)

    if format_type == ErrorFormat.REST_API:
        response = {
            "success": False,
            "error": message,
            "error_type": type(error).__name__
        }

        if context:
            response["context"] = context

        if include_stacktrace:
            response["stacktrace"] = traceback.format_exc()

    else:
        error_text = f"{ERROR_PREFIX}{message}"

        if include_stacktrace:
            error_text += f"\n\nStack trace:\n{traceback.format_exc()}"

        if context:
            error_text += f"\n\nContext: {context}"

        response = {
            "content": [{
                "type": "text",
                "text": error_text
            }],
            "isError": True
        }

    return response


def format_success_response(
    data: Any,
    format_type: ErrorFormat = ErrorFormat.REST_API,
    message: Optional[str] = None
) -> Dict[str, Any]:
    """Format success response in specified format.

    Args:
        data: The response data
        format_type: Desired response format
        message: Optional success message (REST only)

    Returns:
        Formatted success response dict

    Raises:
        TypeError: If an MCP_TOOL payload cannot be serialized
    """
    if format_type == ErrorFormat.REST_API:
        response = {
            "success": True,
            "data": data
        }
        if message:
            response["message"] = message

    else:
        response = {
            "content": [{
                "type": "text",
                "text": result_to_text(data)
            }],
            "isError": False
        }

    return response


async def safe_execute_async(
    func: callable,
    format_type: ErrorFormat = ErrorFormat.REST_API,
    include_stacktrace: bool = False,
    context: Optional[Dict[str, Any]] = None
):
    """Safely execute an async function and return formatted response.

    Args:
        func: Async function to execute
        format_type: Error response format
        include_stacktrace: Include stacktrace in error responses
        context: Additional context for error reporting

    Returns:
        Formatted success or error response
    """
    try:
        result = await func()
        return format_success_response(result, format_type)
    except Exception as e:
        logger.error(f"{type(e).__name__}: {error_message(e)}", exc_info=include_stacktrace)
        return format_error_response(e, format_type, include_stacktrace, context)
