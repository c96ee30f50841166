"""Prompt CRUD and the filtered listing behind GET /prompts."""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from promptlib.core.constants import UNCATEGORIZED_FOLDER
from promptlib.db.models import Folder, Prompt, Tag, prompt_tags
from promptlib.schemas import PromptCreate, PromptUpdate
from promptlib.services.errors import InvalidReferenceError

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class PromptFilters:
    """Listing constraints; several may be set at once and combine with AND."""
    folder_id: Optional[str] = None  # a folder id or UNCATEGORIZED_FOLDER
    tag_id: Optional[str] = None
    search: Optional[str] = None


def is_valid_id(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (TypeError, ValueError, AttributeError):
        return False
    return True


def _like_pattern(term: str) -> str:
    """Case-insensitive substring pattern with LIKE wildcards in the term escaped."""
    escaped = (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def prompt_filter_clauses(filters: PromptFilters) -> list:
    clauses = []
    if filters.folder_id == UNCATEGORIZED_FOLDER:
        clauses.append(Prompt.folder_id.is_(None))
    elif filters.folder_id:
        clauses.append(Prompt.folder_id == filters.folder_id)
    if filters.tag_id:
        clauses.append(Prompt.tags.any(Tag.id == filters.tag_id))
    if filters.search:
        pattern = _like_pattern(filters.search)
        clauses.append(
            or_(
                Prompt.title.ilike(pattern, escape=_LIKE_ESCAPE),
                Prompt.description.ilike(pattern, escape=_LIKE_ESCAPE),
                Prompt.content.ilike(pattern, escape=_LIKE_ESCAPE),
            )
        )
    return clauses


def _with_relations(q):
    return q.options(selectinload(Prompt.tags), selectinload(Prompt.folder))


async def list_prompts(db: AsyncSession, filters: PromptFilters) -> list[Prompt]:
    """Prompts matching filters, most recently updated first."""
    q = _with_relations(select(Prompt))
    for clause in prompt_filter_clauses(filters):
        q = q.where(clause)
    q = q.order_by(Prompt.updated_at.desc(), Prompt.created_at.desc())
    result = await db.execute(q)
    return list(result.scalars().all())


async def get_prompt(db: AsyncSession, prompt_id: str) -> Prompt | None:
    """Fetch a prompt with tags and folder populated (fresh from the DB)."""
    result = await db.execute(
        _with_relations(select(Prompt))
        .where(Prompt.id == prompt_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _resolve_tags(db: AsyncSession, tag_ids: list[str]) -> list[Tag]:
    if not tag_ids:
        return []
    bad = [t for t in tag_ids if not is_valid_id(t)]
    if bad:
        raise InvalidReferenceError(f"Invalid tag id format: {bad[0]}")
    result = await db.execute(select(Tag).where(Tag.id.in_(tag_ids)))
    by_id = {t.id: t for t in result.scalars().all()}
    missing = [t for t in tag_ids if t not in by_id]
    if missing:
        raise InvalidReferenceError(f"Tag not found: {missing[0]}")
    return [by_id[t] for t in tag_ids]


async def _check_folder(db: AsyncSession, folder_id: Optional[str]) -> None:
    if folder_id is None:
        return
    if not is_valid_id(folder_id):
        raise InvalidReferenceError("Invalid folder id format")
    result = await db.execute(select(Folder.id).where(Folder.id == folder_id))
    if result.scalar_one_or_none() is None:
        raise InvalidReferenceError(f"Folder not found: {folder_id}")


async def create_prompt(db: AsyncSession, body: PromptCreate) -> Prompt:
    tags = await _resolve_tags(db, body.tag_ids)
    await _check_folder(db, body.folder_id)
    prompt = Prompt(
        title=body.title,
        content=body.content,
        description=body.description,
        folder_id=body.folder_id,
        tags=tags,
    )
    db.add(prompt)
    await db.flush()
    logger.info("Created prompt %s (%d tags)", prompt.id, len(tags))
    return await get_prompt(db, prompt.id)


async def update_prompt(db: AsyncSession, prompt: Prompt, body: PromptUpdate) -> Prompt:
    """Replace all editable fields of prompt; prompt must be loaded with its tags."""
    tags = await _resolve_tags(db, body.tag_ids)
    await _check_folder(db, body.folder_id)
    prompt.title = body.title
    prompt.content = body.content
    prompt.description = body.description
    prompt.folder_id = body.folder_id
    prompt.tags = tags
    await db.flush()
    return await get_prompt(db, prompt.id)


async def delete_prompt(db: AsyncSession, prompt_id: str) -> None:
    await db.execute(delete(prompt_tags).where(prompt_tags.c.prompt_id == prompt_id))
    await db.execute(delete(Prompt).where(Prompt.id == prompt_id))
    logger.info("Deleted prompt %s", prompt_id)


class PromptService:
    """Facade for prompt operations."""

    @staticmethod
    async def list_filtered(db: AsyncSession, filters: PromptFilters) -> list[Prompt]:
        return await list_prompts(db, filters)

    @staticmethod
    async def get(db: AsyncSession, prompt_id: str) -> Prompt | None:
        return await get_prompt(db, prompt_id)

    @staticmethod
    async def create(db: AsyncSession, body: PromptCreate) -> Prompt:
        return await create_prompt(db, body)

    @staticmethod
    async def update(db: AsyncSession, prompt: Prompt, body: PromptUpdate) -> Prompt:
        return await update_prompt(db, prompt, body)

    @staticmethod
    async def delete(db: AsyncSession, prompt_id: str) -> None:
        await delete_prompt(db, prompt_id)


prompt_service = PromptService()
