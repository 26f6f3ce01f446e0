"""Test the export pipeline."""

import io
from unittest.mock import patch

import pytest
from PIL import Image

from table_beautifier.models.table import ExportSettings, TableData, TableStyles
from table_beautifier.services.table_exporter import (
    ExportError,
    ExportTooLargeError,
    NoTableError,
    background_fill,
    copy_table_as_image,
    export_embed_code,
    export_scale,
    export_table_as_csv,
    export_table_as_html,
    export_table_as_png,
)


@pytest.fixture
def table_data():
    """Create a small table for testing."""
    return TableData(
        headers=["Product", "Price"],
        rows=[["Widget", "9.99"], ["Gadget", "19.99"], ["Gizmo", "4.50"]],
    )


@pytest.fixture
def styles():
    """Create default styles for testing."""
    return TableStyles()


def _open(png: bytes) -> Image.Image:
    return Image.open(io.BytesIO(png))


@pytest.mark.parametrize(
    "quality, expanded, dpi",
    [
        ("high", False, 240),
        ("high", True, 300),
        ("medium", False, 150),
        ("medium", True, 200),
        ("low", False, 72),
        ("low", True, 120),
    ],
)
def test_export_scale(quality, expanded, dpi):
    """Quality tiers map to DPI relative to the 96 DPI screen."""
    assert export_scale(quality, expanded) == pytest.approx(dpi / 96)


def test_background_fill():
    """Background modes resolve to a fill color or None for transparent."""
    assert background_fill(ExportSettings(background="white")) == "#FFFFFF"
    assert background_fill(ExportSettings(background="transparent")) is None
    assert background_fill(ExportSettings(background="custom", custom_background="#123456")) == "#123456"
    assert background_fill(ExportSettings(background="custom")) == "#FFFFFF"


def test_export_png_white(table_data, styles):
    """White background exports are opaque PNGs."""
    png = export_table_as_png(table_data, styles, ExportSettings(quality="low"))

    image = _open(png)
    assert image.format == "PNG"
    assert image.mode == "RGB"
    assert image.getpixel((0, 0)) == (255, 255, 255)


def test_export_png_transparent(table_data, styles):
    """Transparent exports keep an alpha channel with clear padding."""
    png = export_table_as_png(
        table_data, styles, ExportSettings(quality="low", background="transparent")
    )

    image = _open(png)
    assert image.mode == "RGBA"
    assert image.getpixel((0, 0))[3] == 0


def test_export_png_custom_background(table_data, styles):
    """Custom backgrounds fill the padding around the table."""
    png = export_table_as_png(
        table_data,
        styles,
        ExportSettings(quality="low", background="custom", custom_background="#FF0000"),
    )

    assert _open(png).getpixel((0, 0)) == (255, 0, 0)


def test_export_png_quality_scales_size(table_data, styles):
    """Higher quality and expanded mode produce larger images."""
    low = _open(export_table_as_png(table_data, styles, ExportSettings(quality="low")))
    high = _open(export_table_as_png(table_data, styles, ExportSettings(quality="high")))
    expanded = _open(
        export_table_as_png(table_data, styles, ExportSettings(quality="high"), expanded=True)
    )

    assert high.width > low.width
    assert high.height > low.height
    assert expanded.width > high.width


def test_export_png_wide_table_not_clipped(styles):
    """Wide tables grow the canvas instead of being cut off."""
    narrow = TableData(headers=["a"], rows=[["1"]])
    wide = TableData(headers=["column header"] * 12, rows=[["some cell text"] * 12])
    settings = ExportSettings(quality="low")

    narrow_image = _open(export_table_as_png(narrow, styles, settings))
    wide_image = _open(export_table_as_png(wide, styles, settings))

    assert wide_image.width > narrow_image.width * 5


@pytest.mark.parametrize(
    "overrides",
    [
        {"rounded_corners": True},
        {"border_style": "dashed", "border_width": 2},
        {"border_style": "dotted"},
        {"border_style": "none"},
        {"header_styling": False, "striped_rows": False, "text_alignment": "center"},
        {"text_alignment": "right", "background_color": "#1F2937"},
    ],
)
def test_export_png_style_variants(table_data, overrides):
    """Every style combination rasterizes."""
    png = export_table_as_png(table_data, TableStyles(**overrides), ExportSettings(quality="low"))

    assert _open(png).format == "PNG"


def test_copy_table_as_image(table_data, styles):
    """Clipboard images are opaque and larger when expanded."""
    normal = _open(copy_table_as_image(table_data, styles))
    expanded = _open(copy_table_as_image(table_data, styles, expanded=True))

    assert normal.mode == "RGB"
    assert expanded.width > normal.width


@pytest.mark.parametrize("table", [None, TableData(headers=[], rows=[])])
def test_export_without_table(table, styles):
    """Every export refuses to run without a table."""
    message = "No table found to export"
    with pytest.raises(NoTableError, match=message):
        export_table_as_png(table, styles, ExportSettings())
    with pytest.raises(NoTableError, match=message):
        copy_table_as_image(table, styles)
    with pytest.raises(NoTableError, match=message):
        export_table_as_html(table, styles)
    with pytest.raises(NoTableError, match=message):
        export_embed_code(table, styles)
    with pytest.raises(NoTableError, match=message):
        export_table_as_csv(table)


@patch("table_beautifier.services.table_exporter.rasterize_table")
def test_export_png_failure_is_wrapped(mock_rasterize, table_data, styles):
    """Rasterization errors surface as ExportError."""
    mock_rasterize.side_effect = OSError("broken font")

    with pytest.raises(ExportError, match="Failed to export table as PNG"):
        export_table_as_png(table_data, styles, ExportSettings())


@patch("table_beautifier.services.rasterizer.MAX_CANVAS_PIXELS", 1000)
def test_oversized_image_export_is_refused(table_data, styles):
    """Canvases over the pixel limit are refused before allocation."""
    with pytest.raises(ExportTooLargeError, match="too large to export"):
        export_table_as_png(table_data, styles, ExportSettings())
    with pytest.raises(ExportTooLargeError, match="too large to copy"):
        copy_table_as_image(table_data, styles)


def test_wide_table_over_pixel_limit(styles):
    """Very wide tables hit the limit even with default styles."""
    table = TableData(headers=["x" * 2000] * 50, rows=[["y" * 2000] * 50])

    with pytest.raises(ExportTooLargeError):
        export_table_as_png(table, styles, ExportSettings(quality="high"))


def test_export_html_document(table_data, styles):
    """HTML exports are complete documents with the allow-listed stylesheet."""
    html = export_table_as_html(table_data, styles)

    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Exported Table</title>" in html
    assert "font-family: Inter;" in html
    assert "font-size: 14px;" in html
    assert "border: 1px solid #E5E7EB;" in html
    assert "border-collapse: collapse;" in html
    assert "padding: 12px;" in html
    assert "text-align: left;" in html
    assert "<td" in html and "Widget" in html
    assert html.rstrip().endswith("</html>")


def test_export_html_excludes_other_properties(table_data):
    """Properties outside the allow-list do not reach the stylesheet."""
    html = export_table_as_html(table_data, TableStyles(rounded_corners=True))
    stylesheet = html.split("</style>")[0]

    assert "border-radius" not in stylesheet
    assert "overflow" not in stylesheet
    assert "border-collapse: separate;" in stylesheet


def test_export_html_with_hover(table_data):
    """The hover rule is written once, inside the document stylesheet."""
    html = export_table_as_html(table_data, TableStyles(hover_effects=True))

    assert html.count(":hover") == 1
    assert 'class="hover-enabled"' in html


def test_export_embed_code(table_data, styles):
    """Embed code is a style block and a scrollable container, no document."""
    embed = export_embed_code(table_data, styles)

    assert embed.startswith("<style>")
    assert '<div style="overflow-x: auto;">' in embed
    assert embed.endswith("</div>")
    assert "<html" not in embed


def test_export_csv(table_data):
    """CSV is a plain comma join of headers and rows."""
    assert export_table_as_csv(table_data) == (
        "Product,Price\nWidget,9.99\nGadget,19.99\nGizmo,4.50"
    )


def test_export_csv_does_not_quote():
    """Commas inside cells are written verbatim."""
    table = TableData(headers=["name", "note"], rows=[["Smith, J", "ok"]])

    assert export_table_as_csv(table) == "name,note\nSmith, J,ok"
