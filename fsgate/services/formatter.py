from __future__ import annotations

import json

from pydantic import BaseModel

from ..schemas import TextContent, ToolResponse
from .dispatcher import Outcome


def _payload_text(value) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json(indent=2)
    return json.dumps(value, indent=2, default=str)


def render(outcome: Outcome) -> ToolResponse:
    """Wrap an outcome in the response envelope; failures stay in the content."""
    if outcome.ok:
        return ToolResponse(content=[TextContent(text=_payload_text(outcome.value))])
    where = f" on path '{outcome.path}'" if outcome.path is not None else ''
    text = f"Error processing tool '{outcome.operation}'{where}: {outcome.message}"
    return ToolResponse(content=[TextContent(text=text)], is_error=True)
