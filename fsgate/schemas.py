from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class DirectoryEntry(BaseModel):
    name: str
    kind: Literal['file', 'directory']
    size: Optional[int] = None
    modified_timestamp: Optional[str] = None
    error: Optional[str] = None


class DirectoryListing(BaseModel):
    path: str
    contents: list[DirectoryEntry]


class FileInfo(BaseModel):
    path: str
    kind: Literal['file', 'directory']
    size: int
    created_timestamp: str
    modified_timestamp: str
    accessed_timestamp: str
    permission_bits: str


class TextContent(BaseModel):
    type: Literal['text'] = 'text'
    text: str


class ToolResponse(BaseModel):
    content: list[TextContent]
    is_error: bool = False

    @property
    def text(self) -> str:
        return '\n'.join(item.text for item in self.content)


class ToolCallRequest(BaseModel):
    name: Any = None
    arguments: Any = None


class ToolDescriptor(BaseModel):
    name: str
    description: str
    input_schema: dict[str, Any] = Field(serialization_alias='inputSchema')
