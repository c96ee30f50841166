import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    ForeignKey,
    Index,
    Table,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


def uuid4_str():
    return str(uuid.uuid4())


prompt_tags = Table(
    "prompt_tags",
    Base.metadata,
    Column("prompt_id", String(36), ForeignKey("prompts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("ix_prompt_tags_tag_id", "tag_id"),
)


class Folder(Base):
    __tablename__ = "folders"

    id = Column(String(36), primary_key=True, default=uuid4_str)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    prompts = relationship("Prompt", back_populates="folder")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=uuid4_str)
    name = Column(String(255), unique=True, nullable=False)
    color = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    prompts = relationship("Prompt", secondary=prompt_tags, back_populates="tags")


class Prompt(Base):
    __tablename__ = "prompts"

    id = Column(String(36), primary_key=True, default=uuid4_str)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)  # the template, may contain {{placeholders}}
    description = Column(Text, nullable=True)
    # NULL => uncategorized
    folder_id = Column(String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    folder = relationship("Folder", back_populates="prompts")
    tags = relationship("Tag", secondary=prompt_tags, back_populates="prompts")

    __table_args__ = (
        Index("ix_prompts_folder_id", "folder_id"),
        Index("ix_prompts_updated_at", "updated_at"),
    )
