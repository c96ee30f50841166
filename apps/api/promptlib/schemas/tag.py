from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from promptlib.schemas.folder import _strip_optional


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    color: Optional[str] = Field(None, max_length=50)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("Tag name is required")
        return s

    @field_validator("color")
    @classmethod
    def strip_color(cls, v: Optional[str]) -> Optional[str]:
        return _strip_optional(v)


class TagUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    color: Optional[str] = Field(None, max_length=50)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        s = v.strip()
        if not s:
            raise ValueError("Tag name cannot be empty")
        return s

    @field_validator("color")
    @classmethod
    def strip_color(cls, v: Optional[str]) -> Optional[str]:
        return _strip_optional(v)


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    color: Optional[str] = None
    created_at: Optional[datetime] = None
