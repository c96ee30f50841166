"""Tag CRUD. Deleting a tag removes it from every prompt that carries it."""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from promptlib.db.models import Tag, prompt_tags
from promptlib.schemas import TagCreate, TagUpdate
from promptlib.services.errors import DuplicateNameError

logger = logging.getLogger(__name__)


async def list_tags(db: AsyncSession) -> list[Tag]:
    result = await db.execute(select(Tag).order_by(func.lower(Tag.name), Tag.name))
    return list(result.scalars().all())


async def get_tag(db: AsyncSession, tag_id: str) -> Tag | None:
    result = await db.execute(select(Tag).where(Tag.id == tag_id))
    return result.scalar_one_or_none()


async def _ensure_name_free(db: AsyncSession, name: str, exclude_id: str | None = None) -> None:
    q = select(Tag.id).where(Tag.name == name)
    if exclude_id:
        q = q.where(Tag.id != exclude_id)
    result = await db.execute(q)
    if result.first() is not None:
        raise DuplicateNameError("Tag with this name already exists")


async def _flush(db: AsyncSession) -> None:
    try:
        await db.flush()
    except IntegrityError as e:
        raise DuplicateNameError("Tag with this name already exists", cause=e) from e


async def create_tag(db: AsyncSession, body: TagCreate) -> Tag:
    await _ensure_name_free(db, body.name)
    tag = Tag(name=body.name, color=body.color)
    db.add(tag)
    await _flush(db)
    await db.refresh(tag)
    logger.info("Created tag %s (%s)", tag.id, tag.name)
    return tag


async def update_tag(db: AsyncSession, tag: Tag, body: TagUpdate) -> Tag:
    if body.name is not None and body.name != tag.name:
        await _ensure_name_free(db, body.name, exclude_id=tag.id)
        tag.name = body.name
    if "color" in body.model_fields_set:
        tag.color = body.color
    await _flush(db)
    await db.refresh(tag)
    return tag


async def delete_tag(db: AsyncSession, tag_id: str) -> int:
    """Delete tag and its prompt links. Returns how many prompts lost the tag."""
    result = await db.execute(delete(prompt_tags).where(prompt_tags.c.tag_id == tag_id))
    await db.execute(delete(Tag).where(Tag.id == tag_id))
    unlinked = result.rowcount or 0
    logger.info("Deleted tag %s; removed from %d prompts", tag_id, unlinked)
    return unlinked


class TagService:
    """Facade for tag operations."""

    @staticmethod
    async def list_all(db: AsyncSession) -> list[Tag]:
        return await list_tags(db)

    @staticmethod
    async def get(db: AsyncSession, tag_id: str) -> Tag | None:
        return await get_tag(db, tag_id)

    @staticmethod
    async def create(db: AsyncSession, body: TagCreate) -> Tag:
        return await create_tag(db, body)

    @staticmethod
    async def update(db: AsyncSession, tag: Tag, body: TagUpdate) -> Tag:
        return await update_tag(db, tag, body)

    @staticmethod
    async def delete(db: AsyncSession, tag_id: str) -> int:
        return await delete_tag(db, tag_id)


tag_service = TagService()
