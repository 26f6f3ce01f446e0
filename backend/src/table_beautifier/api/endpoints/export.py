"""API endpoints for exporting styled tables."""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Path, status
from fastapi.responses import Response

from table_beautifier.schemas.editor_api import ExportRequest
from table_beautifier.services.table_exporter import (
    ExportError,
    ExportTooLargeError,
    NoTableError,
    copy_table_as_image,
    export_embed_code,
    export_table_as_csv,
    export_table_as_html,
    export_table_as_png,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ExportFormat = Literal["png", "copy-image", "html", "embed", "csv"]


def _attachment(content, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/{export_format}",
    summary="Export a styled table",
    description=(
        "png, html and csv are returned as downloads; copy-image and embed are "
        "returned inline for the client to place on the clipboard."
    ),
    responses={
        200: {
            "content": {
                "image/png": {},
                "text/html": {},
                "text/csv": {},
                "text/plain": {},
            }
        }
    },
)
async def export_table(
    request: ExportRequest,
    export_format: ExportFormat = Path(..., description="The export format"),
) -> Response:
    """Render the table in the requested format."""
    try:
        if export_format == "png":
            png = export_table_as_png(
                request.table_data, request.styles, request.settings, request.expanded
            )
            return _attachment(png, "image/png", "table.png")
        if export_format == "copy-image":
            png = copy_table_as_image(request.table_data, request.styles, request.expanded)
            return Response(content=png, media_type="image/png")
        if export_format == "html":
            html = export_table_as_html(request.table_data, request.styles)
            return _attachment(html, "text/html", "table.html")
        if export_format == "embed":
            return Response(
                content=export_embed_code(request.table_data, request.styles),
                media_type="text/plain",
            )
        csv = export_table_as_csv(request.table_data)
        return _attachment(csv, "text/csv", "table.csv")
    except (NoTableError, ExportTooLargeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ExportError as e:
        logger.error(f"Export as {export_format} failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
