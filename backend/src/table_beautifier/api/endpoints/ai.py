"""API endpoints for AI style suggestions and table analysis."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from table_beautifier.core.dependencies import get_style_suggestion_service
from table_beautifier.schemas.ai_api import (
    AnalyzeTableRequest,
    StyleSuggestionRequest,
    StyleSuggestionResponse,
    TableAnalysis,
)
from table_beautifier.services.style_suggestion_service import (
    StyleSuggestionService,
    SuggestionError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/style-suggestions",
    response_model=StyleSuggestionResponse,
    response_model_exclude_none=True,
    summary="Suggest table styles",
    description="Ask the language model for styling suggestions based on the table content.",
)
async def style_suggestions(
    request: StyleSuggestionRequest,
    service: StyleSuggestionService = Depends(get_style_suggestion_service),
) -> StyleSuggestionResponse:
    """Generate styling suggestions for a table."""
    try:
        suggestions = await service.generate_style_suggestions(
            request.table_data, request.markdown_content
        )
    except SuggestionError as e:
        logger.error(f"Style suggestions unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate style suggestions",
        )
    return StyleSuggestionResponse(suggestions=suggestions)


@router.post(
    "/analyze-table",
    response_model=TableAnalysis,
    summary="Analyze table content",
)
async def analyze_table(
    request: AnalyzeTableRequest,
    service: StyleSuggestionService = Depends(get_style_suggestion_service),
) -> TableAnalysis:
    """Describe the table's data types and purpose."""
    try:
        return await service.analyze_table_content(request.table_data)
    except SuggestionError as e:
        logger.error(f"Table analysis unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to analyze table content",
        )
