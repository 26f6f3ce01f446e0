"""API for the Table Beautifier."""

from datetime import datetime, timezone

from fastapi import APIRouter

from table_beautifier.api.endpoints import ai, export, markdown, presets, tables, themes
from table_beautifier.schemas.table_api import HealthResponse

api_router = APIRouter()
api_router.include_router(tables.router, prefix="/tables", tags=["tables"])
api_router.include_router(themes.router, prefix="/themes", tags=["themes"])
api_router.include_router(ai.router, prefix="/ai", tags=["ai"])
api_router.include_router(presets.router, prefix="/presets", tags=["presets"])
api_router.include_router(markdown.router, prefix="/markdown", tags=["markdown"])
api_router.include_router(export.router, prefix="/export", tags=["export"])


@api_router.get("/health", response_model=HealthResponse, tags=["health"])
async def health() -> HealthResponse:
    """Report that the API is up."""
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))
