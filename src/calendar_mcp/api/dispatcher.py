from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from ..core.errors import CalendarMcpError, ToolValidationError
from .models import ToolResponse
from .registry import call_api
from .serializers import render_payload

logger = logging.getLogger(__name__)


def dispatch_tool_call(name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
    """Validate, execute and wrap a single tool call. Never raises."""

    try:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ToolValidationError("Tool arguments must be a JSON object")
        result = call_api(name, **arguments)
    except CalendarMcpError as exc:
        logger.warning("Tool %s failed: %s", name, exc)
        return ToolResponse.failure(str(exc))
    except Exception as exc:  # noqa: BLE001
        logger.exception("Tool %s raised unexpectedly", name)
        return ToolResponse.failure(str(exc) or type(exc).__name__)

    try:
        text = render_payload(result)
    except TypeError as exc:
        logger.exception("Tool %s returned an unserializable result", name)
        return ToolResponse.failure(str(exc))
    logger.debug("Tool %s executed successfully", name)
    return ToolResponse.success(text)
