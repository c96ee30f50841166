from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from promptlib.schemas.folder import FolderSummary, _strip_optional
from promptlib.schemas.tag import TagResponse
from promptlib.templating import FillMode


class PromptCreate(BaseModel):
    """Body for POST/PUT /prompts. tag_ids and folder_id reference existing rows; folder_id None => uncategorized."""

    title: str = Field(..., max_length=500)
    content: str
    description: Optional[str] = None
    tag_ids: list[str] = []
    folder_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("Prompt title is required")
        return s

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Prompt content is required")
        return v

    @field_validator("tag_ids")
    @classmethod
    def dedupe_tag_ids(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(t for t in v if t))

    @field_validator("description", "folder_id")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return _strip_optional(v)


# PUT replaces every editable field
PromptUpdate = PromptCreate


class PromptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    description: Optional[str] = None
    tags: list[TagResponse] = []
    folder: Optional[FolderSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VariablesResponse(BaseModel):
    prompt_id: str
    variables: list[str]


class RenderRequest(BaseModel):
    values: dict[str, Optional[str]] = {}
    mode: FillMode = FillMode.FINAL


class RenderResponse(BaseModel):
    prompt_id: str
    mode: FillMode
    text: str
    variables: list[str]
    missing: list[str] = []


class DeletedResponse(BaseModel):
    message: str
    id: str
