from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from promptlib.core import get_settings, limiter
from promptlib.db.models import Prompt
from promptlib.dependencies import get_db, get_prompt_filters, get_prompt_or_404
from promptlib.schemas import (
    DeletedResponse,
    PromptCreate,
    PromptResponse,
    PromptUpdate,
    RenderRequest,
    RenderResponse,
    VariablesResponse,
)
from promptlib.services import InvalidReferenceError, PromptFilters, prompt_service
from promptlib.templating import FillMode, VariableSession, extract_variables

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("", response_model=list[PromptResponse])
@limiter.limit(get_settings().prompts_list_rate_limit)
async def list_prompts(
    request: Request,
    filters: PromptFilters = Depends(get_prompt_filters),
    db: AsyncSession = Depends(get_db),
):
    prompts = await prompt_service.list_filtered(db, filters)
    return [PromptResponse.model_validate(p) for p in prompts]


@router.get("/{prompt_id}", response_model=PromptResponse)
async def get_prompt(prompt: Prompt = Depends(get_prompt_or_404)):
    return PromptResponse.model_validate(prompt)


@router.post("", response_model=PromptResponse, status_code=status.HTTP_201_CREATED)
async def create_prompt(
    body: PromptCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        prompt = await prompt_service.create(db, body)
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    await db.commit()
    return PromptResponse.model_validate(prompt)


@router.put("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    body: PromptUpdate,
    prompt: Prompt = Depends(get_prompt_or_404),
    db: AsyncSession = Depends(get_db),
):
    try:
        prompt = await prompt_service.update(db, prompt, body)
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    await db.commit()
    return PromptResponse.model_validate(prompt)


@router.delete("/{prompt_id}", response_model=DeletedResponse)
async def delete_prompt(
    prompt: Prompt = Depends(get_prompt_or_404),
    db: AsyncSession = Depends(get_db),
):
    await prompt_service.delete(db, prompt.id)
    await db.commit()
    return DeletedResponse(message="Prompt deleted successfully", id=prompt.id)


@router.get("/{prompt_id}/variables", response_model=VariablesResponse)
async def get_prompt_variables(prompt: Prompt = Depends(get_prompt_or_404)):
    return VariablesResponse(prompt_id=prompt.id, variables=extract_variables(prompt.content))


@router.post("/{prompt_id}/render", response_model=RenderResponse)
async def render_prompt(
    body: RenderRequest,
    prompt: Prompt = Depends(get_prompt_or_404),
):
    """Fill the prompt's placeholders. preview keeps blank ones visible; final blanks them out."""
    session = VariableSession(prompt.content, title=prompt.title)
    session.update(body.values)
    text = session.preview if body.mode is FillMode.PREVIEW else session.final_text()
    return RenderResponse(
        prompt_id=prompt.id,
        mode=body.mode,
        text=text,
        variables=session.variables,
        missing=session.missing,
    )
