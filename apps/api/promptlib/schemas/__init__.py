"""Pydantic request/response schemas."""

from promptlib.schemas.folder import (
    FolderCreate,
    FolderUpdate,
    FolderSummary,
    FolderResponse,
)
from promptlib.schemas.tag import TagCreate, TagUpdate, TagResponse
from promptlib.schemas.prompt import (
    PromptCreate,
    PromptUpdate,
    PromptResponse,
    VariablesResponse,
    RenderRequest,
    RenderResponse,
    DeletedResponse,
)

__all__ = [
    "FolderCreate",
    "FolderUpdate",
    "FolderSummary",
    "FolderResponse",
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    "PromptCreate",
    "PromptUpdate",
    "PromptResponse",
    "VariablesResponse",
    "RenderRequest",
    "RenderResponse",
    "DeletedResponse",
]
