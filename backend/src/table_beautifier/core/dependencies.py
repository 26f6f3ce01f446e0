"""Dependencies for the application using FastAPI app state for singletons."""

import logging

from fastapi import Request

from table_beautifier.services.storage.base import TableStorage
from table_beautifier.services.style_suggestion_service import StyleSuggestionService

logger = logging.getLogger(__name__)


def get_storage(request: Request) -> TableStorage:
    """Get the storage backend from application state."""
    if not hasattr(request.app.state, "storage"):
        raise ValueError("Storage not initialized in application state")

    return request.app.state.storage


def get_style_suggestion_service(request: Request) -> StyleSuggestionService:
    """Get the style suggestion service from application state."""
    if not hasattr(request.app.state, "style_suggestion_service"):
        raise ValueError("Style suggestion service not initialized in application state")

    return request.app.state.style_suggestion_service
