"""API endpoints for saved table operations."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status

from table_beautifier.core.dependencies import get_storage
from table_beautifier.models.saved_table import SavedTable
from table_beautifier.schemas.table_api import (
    OwnerRequest,
    SavedTableCreate,
    SavedTableUpdate,
    SuccessResponse,
)
from table_beautifier.services.storage.base import TableStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=List[SavedTable],
    summary="List saved tables",
    description="List public tables, or the tables owned by a user.",
)
async def list_saved_tables(
    user_id: Optional[int] = Query(None, alias="userId"),
    public: Optional[str] = Query(None),
    storage: TableStorage = Depends(get_storage),
) -> List[SavedTable]:
    """List public tables when ``public=true``, otherwise the caller's tables."""
    if public == "true":
        return storage.get_public_saved_tables()
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="userId required for private tables",
        )
    return storage.get_saved_tables_by_user(user_id)


@router.get(
    "/{table_id}",
    response_model=SavedTable,
    summary="Get a saved table by ID",
)
async def get_saved_table(
    table_id: int = Path(..., description="The ID of the saved table"),
    storage: TableStorage = Depends(get_storage),
) -> SavedTable:
    """Get a saved table by ID."""
    table = storage.get_saved_table(table_id)
    if not table:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Table not found")
    return table


@router.post(
    "",
    response_model=SavedTable,
    status_code=status.HTTP_201_CREATED,
    summary="Save a table",
)
async def create_saved_table(
    table_create: SavedTableCreate,
    storage: TableStorage = Depends(get_storage),
) -> SavedTable:
    """Save a new table."""
    try:
        return storage.create_saved_table(table_create)
    except Exception as e:
        logger.error(f"Error saving table: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid data provided"
        )


@router.put(
    "/{table_id}",
    response_model=SavedTable,
    summary="Update a saved table",
    description="Update a table owned by the caller. The owner itself is never changed.",
)
async def update_saved_table(
    table_update: SavedTableUpdate,
    table_id: int = Path(..., description="The ID of the saved table"),
    storage: TableStorage = Depends(get_storage),
) -> SavedTable:
    """Update a saved table owned by ``userId``."""
    if table_update.user_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="userId required")

    table = storage.update_saved_table(table_id, table_update.user_id, table_update.changes())
    if not table:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Table not found or not authorized"
        )
    return table


@router.delete(
    "/{table_id}",
    response_model=SuccessResponse,
    summary="Delete a saved table",
)
async def delete_saved_table(
    table_id: int = Path(..., description="The ID of the saved table"),
    owner: Optional[OwnerRequest] = Body(None),
    storage: TableStorage = Depends(get_storage),
) -> SuccessResponse:
    """Delete a saved table owned by ``userId``."""
    if owner is None or owner.user_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="userId required")

    if not storage.delete_saved_table(table_id, owner.user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Table not found or not authorized"
        )
    return SuccessResponse()
