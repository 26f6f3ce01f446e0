"""Main module for the Table Beautifier API service."""

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from table_beautifier.api.api import api_router
from table_beautifier.core.config import get_settings
from table_beautifier.services.llm.factory import CompletionServiceFactory
from table_beautifier.services.storage.factory import StorageFactory
from table_beautifier.services.style_suggestion_service import StyleSuggestionService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title=settings.project_name,
    openapi_url=f"{settings.api_prefix}/openapi.json",
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    expose_headers=["Content-Length", "Content-Disposition"],
    max_age=600,  # Cache preflight requests for 10 minutes
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed requests with a generic 400."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid data provided"},
    )


app.include_router(api_router, prefix=settings.api_prefix)


@app.on_event("startup")
async def startup_event():
    """Initialize services once at application startup."""
    logger.info("Initializing application services...")

    # Initialize LangSmith tracing if enabled
    if settings.langsmith_tracing and settings.langsmith_api_key:
        logger.info("Initializing LangSmith tracing")
        os.environ["LANGCHAIN_TRACING_V2"] = "true"
        os.environ["LANGCHAIN_ENDPOINT"] = settings.langsmith_endpoint
        os.environ["LANGCHAIN_API_KEY"] = settings.langsmith_api_key
        os.environ["LANGCHAIN_PROJECT"] = settings.langsmith_project
        logger.info(f"LangSmith tracing enabled with project: {settings.langsmith_project}")

    app.state.storage = StorageFactory.create_storage(settings)

    logger.info(f"Creating LLM service for provider: {settings.llm_provider}")
    llm_service = CompletionServiceFactory.create_service(settings)
    if llm_service is None:
        logger.warning("No LLM service available; AI suggestions will use local heuristics")

    app.state.style_suggestion_service = StyleSuggestionService(llm_service, settings)
    logger.info("All application services initialized successfully")
