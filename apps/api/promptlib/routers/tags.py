from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from promptlib.db.models import Tag
from promptlib.dependencies import get_db, get_tag_or_404
from promptlib.schemas import DeletedResponse, TagCreate, TagResponse, TagUpdate
from promptlib.services import DuplicateNameError, tag_service

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagResponse])
async def list_tags(db: AsyncSession = Depends(get_db)):
    tags = await tag_service.list_all(db)
    return [TagResponse.model_validate(t) for t in tags]


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    body: TagCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        tag = await tag_service.create(db, body)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    await db.commit()
    return TagResponse.model_validate(tag)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    body: TagUpdate,
    tag: Tag = Depends(get_tag_or_404),
    db: AsyncSession = Depends(get_db),
):
    try:
        tag = await tag_service.update(db, tag, body)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    await db.commit()
    return TagResponse.model_validate(tag)


@router.delete("/{tag_id}", response_model=DeletedResponse)
async def delete_tag(
    tag: Tag = Depends(get_tag_or_404),
    db: AsyncSession = Depends(get_db),
):
    """The tag is removed from every prompt that carries it."""
    await tag_service.delete(db, tag.id)
    await db.commit()
    return DeletedResponse(message="Tag deleted successfully", id=tag.id)
