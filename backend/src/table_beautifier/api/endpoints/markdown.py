"""API endpoints for parsing and reordering markdown tables."""

import logging

from fastapi import APIRouter, HTTPException, status

from table_beautifier.schemas.editor_api import (
    ParseRequest,
    ParseResponse,
    ReorderRequest,
    ReorderResponse,
    SampleResponse,
)
from table_beautifier.services.markdown_parser import (
    generate_sample_markdown,
    is_valid_markdown_table,
    parse_markdown_table,
)
from table_beautifier.services.table_editor import move_column, move_row, table_to_markdown

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/parse", response_model=ParseResponse, summary="Parse a markdown table")
async def parse(request: ParseRequest) -> ParseResponse:
    """Parse the first table in the markdown.

    ``isValid`` is the quick separator-line check; ``tableData`` is null when
    no consistent table could be parsed.
    """
    return ParseResponse(
        table_data=parse_markdown_table(request.markdown_content),
        is_valid=is_valid_markdown_table(request.markdown_content),
    )


@router.post("/reorder", response_model=ReorderResponse, summary="Move a row or column")
async def reorder(request: ReorderRequest) -> ReorderResponse:
    """Move one row or column and return the table with its re-serialized markdown."""
    table_data = parse_markdown_table(request.markdown_content)
    if table_data is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No valid table found in markdown"
        )

    try:
        if request.axis == "row":
            move_row(table_data, request.from_index, request.to_index)
        else:
            move_column(table_data, request.from_index, request.to_index)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ReorderResponse(table_data=table_data, markdown_content=table_to_markdown(table_data))


@router.get("/sample", response_model=SampleResponse, summary="Get the starter table")
async def sample() -> SampleResponse:
    """Return the sample markdown shown to new users, already parsed."""
    markdown = generate_sample_markdown()
    return SampleResponse(markdown_content=markdown, table_data=parse_markdown_table(markdown))
