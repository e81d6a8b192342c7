import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, status

from bookr.core.config import settings
from bookr.db.store import InMemoryStore, get_store
from bookr.utils.deps import get_current_user, require_admin
from bookr.schemas.tag_schema import (
    DraftResponse,
    DraftToggleRequest,
    DraftUserTagRequest,
    SystemTagCreate,
    TagOverviewResponse,
    TagResponse,
)
from bookr.models.user_model import User
from bookr.services import tag_registry
from bookr.services.tag_service import tag_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Tags"],
    prefix=f"{settings.API_V1_STR}/tags",
)


@router.get(
    "/system",
    status_code=status.HTTP_200_OK,
    response_model=List[TagResponse],
    summary="Get system tags",
    description="The curated tag catalogue offered on the book form",
)
async def get_system_tags(*, db: InMemoryStore = Depends(get_store)):
    return await tag_service.get_system_tags(db)


@router.get(
    "/all",
    status_code=status.HTTP_200_OK,
    response_model=List[TagResponse],
    summary="Get all tags",
    description="System tags merged with every tag used on a book, one entry per name",
)
async def get_all_tags(*, db: InMemoryStore = Depends(get_store)):
    return await tag_service.get_all_tags(db)


@router.get(
    "/overview",
    status_code=status.HTTP_200_OK,
    response_model=TagOverviewResponse,
    summary="Tag management overview",
    description="System tags, user-generated tags and the reconciled list (admin only)",
    dependencies=[Depends(require_admin)],
)
async def get_tag_overview(*, db: InMemoryStore = Depends(get_store)):
    return await tag_service.get_tag_overview(db)


# ======CREATE========
@router.post(
    "/system",
    status_code=status.HTTP_201_CREATED,
    response_model=TagResponse,
    summary="Create a system tag",
    description="Add a tag to the curated catalogue (admin only)",
)
async def create_system_tag(
    *,
    tag_data: SystemTagCreate,
    db: InMemoryStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    return await tag_service.add_system_tag(
        db, name=tag_data.name, current_user=current_user
    )


# ======DELETE========
@router.delete(
    "/system/{tag_id}",
    status_code=status.HTTP_200_OK,
    response_model=Dict[str, str],
    summary="Delete a system tag",
    description="Remove a tag from the curated catalogue; books keep their copies",
)
async def delete_system_tag(
    *,
    tag_id: str,
    db: InMemoryStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    await tag_service.delete_system_tag(db, tag_id=tag_id, current_user=current_user)
    return {"message": "Tag deleted successfully"}


# ======DRAFT EDITING========
@router.post(
    "/draft/toggle",
    status_code=status.HTTP_200_OK,
    response_model=DraftResponse,
    summary="Toggle a tag on a draft",
    description="Remove the tag if a tag with its id is on the draft, otherwise append it",
    dependencies=[Depends(get_current_user)],
)
async def toggle_draft_tag(*, draft: DraftToggleRequest):
    return DraftResponse(
        draft_tags=tag_registry.toggle_tag_on_draft(draft.draft_tags, draft.tag)
    )


@router.post(
    "/draft/user-tag",
    status_code=status.HTTP_200_OK,
    response_model=DraftResponse,
    summary="Add a user tag to a draft",
    description="Append a free-form tag unless the name is blank or already on the draft",
    dependencies=[Depends(get_current_user)],
)
async def add_draft_user_tag(*, draft: DraftUserTagRequest):
    return DraftResponse(
        draft_tags=tag_registry.add_user_tag(draft.draft_tags, draft.name)
    )
