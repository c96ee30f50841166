"""Folder CRUD. Deleting a folder leaves its prompts uncategorized."""

import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from promptlib.db.models import Folder, Prompt
from promptlib.schemas import FolderCreate, FolderUpdate
from promptlib.services.errors import DuplicateNameError

logger = logging.getLogger(__name__)


async def list_folders(db: AsyncSession) -> list[Folder]:
    result = await db.execute(select(Folder).order_by(func.lower(Folder.name), Folder.name))
    return list(result.scalars().all())


async def get_folder(db: AsyncSession, folder_id: str) -> Folder | None:
    result = await db.execute(select(Folder).where(Folder.id == folder_id))
    return result.scalar_one_or_none()


async def _ensure_name_free(db: AsyncSession, name: str, exclude_id: str | None = None) -> None:
    q = select(Folder.id).where(Folder.name == name)
    if exclude_id:
        q = q.where(Folder.id != exclude_id)
    result = await db.execute(q)
    if result.first() is not None:
        raise DuplicateNameError("Folder with this name already exists")


async def _flush(db: AsyncSession) -> None:
    try:
        await db.flush()
    except IntegrityError as e:
        raise DuplicateNameError("Folder with this name already exists", cause=e) from e


async def create_folder(db: AsyncSession, body: FolderCreate) -> Folder:
    await _ensure_name_free(db, body.name)
    folder = Folder(name=body.name, description=body.description)
    db.add(folder)
    await _flush(db)
    await db.refresh(folder)
    logger.info("Created folder %s (%s)", folder.id, folder.name)
    return folder


async def update_folder(db: AsyncSession, folder: Folder, body: FolderUpdate) -> Folder:
    """Apply the fields present in body; description may be cleared with an explicit null."""
    if body.name is not None and body.name != folder.name:
        await _ensure_name_free(db, body.name, exclude_id=folder.id)
        folder.name = body.name
    if "description" in body.model_fields_set:
        folder.description = body.description
    await _flush(db)
    await db.refresh(folder)
    return folder


async def delete_folder(db: AsyncSession, folder_id: str) -> int:
    """Delete folder and detach its prompts. Returns the number of prompts now uncategorized."""
    result = await db.execute(
        update(Prompt).where(Prompt.folder_id == folder_id).values(folder_id=None)
    )
    await db.execute(delete(Folder).where(Folder.id == folder_id))
    detached = result.rowcount or 0
    logger.info("Deleted folder %s; %d prompts uncategorized", folder_id, detached)
    return detached


class FolderService:
    """Facade for folder operations."""

    @staticmethod
    async def list_all(db: AsyncSession) -> list[Folder]:
        return await list_folders(db)

    @staticmethod
    async def get(db: AsyncSession, folder_id: str) -> Folder | None:
        return await get_folder(db, folder_id)

    @staticmethod
    async def create(db: AsyncSession, body: FolderCreate) -> Folder:
        return await create_folder(db, body)

    @staticmethod
    async def update(db: AsyncSession, folder: Folder, body: FolderUpdate) -> Folder:
        return await update_folder(db, folder, body)

    @staticmethod
    async def delete(db: AsyncSession, folder_id: str) -> int:
        return await delete_folder(db, folder_id)


folder_service = FolderService()
