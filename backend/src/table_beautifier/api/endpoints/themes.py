"""API endpoints for custom theme operations."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status

from table_beautifier.core.dependencies import get_storage
from table_beautifier.models.saved_table import CustomTheme
from table_beautifier.schemas.table_api import CustomThemeCreate, OwnerRequest, SuccessResponse
from table_beautifier.services.storage.base import TableStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[CustomTheme], summary="List custom themes")
async def list_custom_themes(
    user_id: Optional[int] = Query(None, alias="userId"),
    public: Optional[str] = Query(None),
    storage: TableStorage = Depends(get_storage),
) -> List[CustomTheme]:
    """List public themes when ``public=true``, otherwise the caller's themes."""
    if public == "true":
        return storage.get_public_custom_themes()
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="userId required for private themes",
        )
    return storage.get_custom_themes_by_user(user_id)


@router.get("/{theme_id}", response_model=CustomTheme, summary="Get a custom theme by ID")
async def get_custom_theme(
    theme_id: int = Path(..., description="The ID of the custom theme"),
    storage: TableStorage = Depends(get_storage),
) -> CustomTheme:
    theme = storage.get_custom_theme(theme_id)
    if not theme:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Theme not found")
    return theme


@router.post(
    "",
    response_model=CustomTheme,
    status_code=status.HTTP_201_CREATED,
    summary="Save a custom theme",
)
async def create_custom_theme(
    theme_create: CustomThemeCreate,
    storage: TableStorage = Depends(get_storage),
) -> CustomTheme:
    try:
        return storage.create_custom_theme(theme_create)
    except Exception as e:
        logger.error(f"Error saving theme: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid data provided"
        )


@router.delete("/{theme_id}", response_model=SuccessResponse, summary="Delete a custom theme")
async def delete_custom_theme(
    theme_id: int = Path(..., description="The ID of the custom theme"),
    owner: Optional[OwnerRequest] = Body(None),
    storage: TableStorage = Depends(get_storage),
) -> SuccessResponse:
    """Delete a custom theme owned by ``userId``."""
    if owner is None or owner.user_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="userId required")

    if not storage.delete_custom_theme(theme_id, owner.user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Theme not found or not authorized"
        )
    return SuccessResponse()
