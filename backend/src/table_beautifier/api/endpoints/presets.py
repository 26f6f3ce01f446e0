"""API endpoint for the preset theme catalog."""

from typing import Dict

from fastapi import APIRouter

from table_beautifier.models.table import TableStyles
from table_beautifier.services.style_engine import PRESET_THEMES

router = APIRouter()


@router.get("", response_model=Dict[str, TableStyles], summary="List preset themes")
async def list_presets() -> Dict[str, TableStyles]:
    """Return every preset theme keyed by name."""
    return PRESET_THEMES
