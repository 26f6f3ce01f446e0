"""Export pipeline: PNG, clipboard image, HTML document, embed code and CSV."""

import logging
from typing import Optional

from table_beautifier.models.table import ExportSettings, TableData, TableStyles
from table_beautifier.services.rasterizer import CanvasTooLargeError, rasterize_table
from table_beautifier.services.style_engine import (
    HOVER_CLASS,
    cell_attributes,
    hover_css,
    render_table_html,
    table_attributes,
)

logger = logging.getLogger(__name__)

BASE_DPI = 96

# (normal, expanded) DPI per quality tier
QUALITY_DPI = {
    "high": (240, 300),
    "medium": (150, 200),
    "low": (72, 120),
}

CLIPBOARD_SCALE = (2, 3)

# Properties carried from the rendered table into exported stylesheets
EXPORTED_CSS_PROPERTIES = (
    "font-family",
    "font-size",
    "color",
    "background-color",
    "border",
    "border-collapse",
    "padding",
    "text-align",
)


class ExportError(Exception):
    """Raised when an export cannot be produced."""


class NoTableError(ExportError):
    """Raised when there is no table to export."""


class ExportTooLargeError(ExportError):
    """Raised when the rendered image would exceed the canvas size limit."""


def _require_table(table_data: Optional[TableData]) -> TableData:
    if table_data is None or not table_data.headers:
        raise NoTableError("No table found to export. Please create a table first.")
    return table_data


def export_scale(quality: str, expanded: bool = False) -> float:
    """Raster scale factor for a quality tier."""
    normal, large = QUALITY_DPI[quality]
    return (large if expanded else normal) / BASE_DPI


def background_fill(settings: ExportSettings) -> Optional[str]:
    """Canvas fill for the background mode; None means transparent."""
    if settings.background == "transparent":
        return None
    if settings.background == "white":
        return "#FFFFFF"
    return settings.custom_background or "#FFFFFF"


def export_table_as_png(
    table_data: Optional[TableData],
    styles: TableStyles,
    settings: ExportSettings,
    expanded: bool = False,
) -> bytes:
    """Rasterize the table to PNG bytes using the export settings."""
    table_data = _require_table(table_data)
    scale = export_scale(settings.quality, expanded)
    try:
        png = rasterize_table(table_data, styles, scale, background_fill(settings))
    except CanvasTooLargeError as e:
        logger.warning(f"Refusing PNG export: {e}")
        raise ExportTooLargeError("Table is too large to export as an image") from e
    except Exception as e:
        logger.error(f"Error exporting table as PNG: {e}")
        raise ExportError("Failed to export table as PNG") from e
    logger.info(f"Exported PNG ({len(png)} bytes) at scale {scale:.2f}")
    return png


def copy_table_as_image(
    table_data: Optional[TableData],
    styles: TableStyles,
    expanded: bool = False,
) -> bytes:
    """PNG bytes for the image clipboard, always on white."""
    table_data = _require_table(table_data)
    scale = CLIPBOARD_SCALE[1] if expanded else CLIPBOARD_SCALE[0]
    try:
        return rasterize_table(table_data, styles, scale, "#FFFFFF")
    except CanvasTooLargeError as e:
        logger.warning(f"Refusing clipboard image: {e}")
        raise ExportTooLargeError("Table is too large to copy as an image") from e
    except Exception as e:
        logger.error(f"Error copying table as image: {e}")
        raise ExportError("Failed to copy table as image") from e


def _exported_css(styles: TableStyles) -> str:
    """Stylesheet built from the allow-listed properties of the table."""
    table_attrs = table_attributes(styles)
    body_cell = cell_attributes(styles)
    computed = dict(table_attrs)
    computed["padding"] = body_cell["padding"]
    computed["text-align"] = body_cell["text-align"]
    computed["border"] = (
        f'{table_attrs["border-width"]} {table_attrs["border-style"]} {table_attrs["border-color"]}'
    )
    declarations = "\n".join(
        f"  {prop}: {computed[prop]};" for prop in EXPORTED_CSS_PROPERTIES if computed.get(prop)
    )
    css = (
        f"table {{\n{declarations}\n  width: 100%;\n}}\n"
        "table th, table td { padding: inherit; border: inherit; text-align: inherit; }\n"
        "table th { background-color: inherit; font-weight: 600; }"
    )
    if styles.hover_effects:
        css += "\n" + hover_css(styles, f"table.{HOVER_CLASS}")
    return css


def export_table_as_html(table_data: Optional[TableData], styles: TableStyles) -> str:
    """Standalone HTML document embedding the styled table."""
    table_data = _require_table(table_data)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Exported Table</title>
    <style>
        body {{ font-family: Inter, sans-serif; margin: 20px; }}
{_exported_css(styles)}
    </style>
</head>
<body>
{_table_markup(table_data, styles)}
</body>
</html>"""


def export_embed_code(table_data: Optional[TableData], styles: TableStyles) -> str:
    """Embeddable snippet: a style block and a scrollable container."""
    table_data = _require_table(table_data)
    return (
        f"<style>\n{_exported_css(styles)}\n</style>\n"
        f'<div style="overflow-x: auto;">\n{_table_markup(table_data, styles)}\n</div>'
    )


def _table_markup(table_data: TableData, styles: TableStyles) -> str:
    # The hover rule already lives in the exported stylesheet
    markup = render_table_html(table_data, styles)
    if styles.hover_effects:
        markup = markup.split("\n", 1)[1]
    return markup


def export_table_as_csv(table_data: Optional[TableData]) -> str:
    """Comma-joined lines.

    Cells are not quoted or escaped: a comma or newline inside a cell is
    indistinguishable from a separator.
    """
    table_data = _require_table(table_data)
    lines = [",".join(table_data.headers)]
    lines.extend(",".join(row) for row in table_data.rows)
    return "\n".join(lines)
