from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from promptlib.db.models import Folder
from promptlib.dependencies import get_db, get_folder_or_404
from promptlib.schemas import DeletedResponse, FolderCreate, FolderResponse, FolderUpdate
from promptlib.services import DuplicateNameError, folder_service

router = APIRouter(prefix="/folders", tags=["folders"])


@router.get("", response_model=list[FolderResponse])
async def list_folders(db: AsyncSession = Depends(get_db)):
    folders = await folder_service.list_all(db)
    return [FolderResponse.model_validate(f) for f in folders]


@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    body: FolderCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        folder = await folder_service.create(db, body)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    await db.commit()
    return FolderResponse.model_validate(folder)


@router.put("/{folder_id}", response_model=FolderResponse)
async def update_folder(
    body: FolderUpdate,
    folder: Folder = Depends(get_folder_or_404),
    db: AsyncSession = Depends(get_db),
):
    try:
        folder = await folder_service.update(db, folder, body)
    except DuplicateNameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    await db.commit()
    return FolderResponse.model_validate(folder)


@router.delete("/{folder_id}", response_model=DeletedResponse)
async def delete_folder(
    folder: Folder = Depends(get_folder_or_404),
    db: AsyncSession = Depends(get_db),
):
    """Prompts inside become uncategorized; they are not deleted."""
    await folder_service.delete(db, folder.id)
    await db.commit()
    return DeletedResponse(message="Folder deleted successfully", id=folder.id)
