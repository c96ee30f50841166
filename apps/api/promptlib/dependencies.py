from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from promptlib.core.constants import FOLDER_PARAM, SEARCH_PARAM, TAG_PARAM, UNCATEGORIZED_FOLDER
from promptlib.db.models import Folder, Prompt, Tag
from promptlib.db.session import async_session
from promptlib.services import PromptFilters, folder_service, prompt_service, tag_service
from promptlib.services.prompts import is_valid_id


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def _require_valid_id(value: str, label: str) -> None:
    if not is_valid_id(value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} ID format",
        )


async def get_prompt_or_404(
    prompt_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Prompt:
    """Load prompt (tags and folder populated) or raise 400/404. Requires route path param prompt_id."""
    _require_valid_id(prompt_id, "Prompt")
    prompt = await prompt_service.get(db, prompt_id)
    if not prompt:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prompt not found")
    return prompt


async def get_folder_or_404(
    folder_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Folder:
    _require_valid_id(folder_id, "Folder")
    folder = await folder_service.get(db, folder_id)
    if not folder:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Folder not found")
    return folder


async def get_tag_or_404(
    tag_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Tag:
    _require_valid_id(tag_id, "Tag")
    tag = await tag_service.get(db, tag_id)
    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
    return tag


async def get_prompt_filters(
    folder_id: str | None = Query(None, alias=FOLDER_PARAM),
    tag_id: str | None = Query(None, alias=TAG_PARAM),
    search: str | None = Query(None, alias=SEARCH_PARAM),
) -> PromptFilters:
    """Validate listing query params or raise 400. folderId may be the uncategorized sentinel."""
    if folder_id and folder_id != UNCATEGORIZED_FOLDER:
        _require_valid_id(folder_id, "Folder")
    if tag_id:
        _require_valid_id(tag_id, "Tag")
    return PromptFilters(
        folder_id=folder_id or None,
        tag_id=tag_id or None,
        search=search or None,
    )
