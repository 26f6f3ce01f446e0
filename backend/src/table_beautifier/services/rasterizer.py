"""Pillow rasterizer that paints a styled table onto an auto-sized canvas."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from table_beautifier.models.table import TableData, TableStyles
from table_beautifier.services.style_engine import (
    cell_attributes,
    iter_cell_positions,
    row_attributes,
    table_attributes,
)

logger = logging.getLogger(__name__)

CONTAINER_PADDING = 20
REM_PX = 16
RADIUS_PX = 8
TRANSPARENT = (0, 0, 0, 0)
# Upper bound on output area, in device pixels
MAX_CANVAS_PIXELS = 40_000_000

RGBA = Tuple[int, int, int, int]


class CanvasTooLargeError(ValueError):
    """Raised when a table would rasterize to more than MAX_CANVAS_PIXELS."""


def _css_px(value: str, base: float) -> float:
    """Convert ``14px``/``0.75rem``/``inherit`` style values to pixels."""
    value = value.strip()
    if value.endswith("rem"):
        return float(value[:-3]) * REM_PX
    if value.endswith("px"):
        return float(value[:-2])
    if value in ("", "inherit"):
        return base
    return float(value)


def _rgba(color: str) -> RGBA:
    return ImageColor.getcolor(color, "RGBA")  # type: ignore[return-value]


@lru_cache(maxsize=64)
def _resolve_font(family: str, size: int, bold: bool) -> ImageFont.ImageFont:
    candidates = []
    if family:
        name = family.split(",")[0].strip().strip("'\"")
        suffix = "-Bold" if bold else ""
        candidates += [f"{name}{suffix}.ttf", f"{name}.ttf", name]
    candidates.append("DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf")
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug(f"No TrueType font for {family}; using the default font.")
    return ImageFont.load_default(size=size)


@dataclass
class _Cell:
    row: int
    column: int
    text: str
    attrs: Dict[str, str]
    font: ImageFont.ImageFont


class TableRasterizer:
    """Paints a table at ``scale`` device pixels per CSS pixel."""

    def __init__(self, styles: TableStyles, scale: float, background: Optional[str]) -> None:
        self.styles = styles
        self.scale = scale
        self.background = background

    def _px(self, value: float) -> int:
        return max(0, int(round(value * self.scale)))

    def _layout(self, table_data: TableData) -> Tuple[List[_Cell], List[int], List[int]]:
        base_size = float(self.styles.font_size)
        cells: List[_Cell] = []
        column_count = len(table_data.headers)
        widths = [0] * column_count
        heights = [0] * (len(table_data.rows) + 1)
        border = self._px(self._border_width())

        for row_index, column, text, flags in iter_cell_positions(table_data):
            attrs = cell_attributes(self.styles, **flags)
            size = self._px(_css_px(attrs.get("font-size", "inherit"), base_size))
            bold = attrs.get("font-weight") == "600"
            if attrs.get("text-transform") == "uppercase":
                text = text.upper()
            font = _resolve_font(self.styles.font_family, max(size, 1), bold)
            padding = self._px(_css_px(attrs["padding"], 0))

            left, top, right, bottom = font.getbbox(text or "Ag")
            text_width = int(font.getlength(text)) if text else 0
            line_height = max(bottom - top, int(font.getbbox("Ag")[3]))

            slot = row_index + 1
            widths[column] = max(widths[column], text_width + 2 * padding + border)
            heights[slot] = max(heights[slot], line_height + 2 * padding + border)
            cells.append(_Cell(slot, column, text, attrs, font))

        return cells, widths, heights

    def _border_width(self) -> float:
        return _css_px(table_attributes(self.styles)["border-width"], 0)

    def render(self, table_data: TableData) -> Image.Image:
        """Paint the table and return the RGBA image."""
        cells, widths, heights = self._layout(table_data)
        border = self._px(self._border_width())
        table_width = sum(widths) + border
        table_height = sum(heights) + border
        pad = self._px(CONTAINER_PADDING)
        size = (table_width + 2 * pad, table_height + 2 * pad)
        if size[0] * size[1] > MAX_CANVAS_PIXELS:
            raise CanvasTooLargeError(
                f"Canvas of {size[0]}x{size[1]} pixels exceeds the {MAX_CANVAS_PIXELS} pixel limit"
            )

        background = _rgba(self.background) if self.background else TRANSPARENT
        canvas = Image.new("RGBA", size, background)

        table_attrs = table_attributes(self.styles)
        layer = Image.new("RGBA", (table_width, table_height), _rgba(table_attrs["background-color"]))
        fills = Image.new("RGBA", layer.size, TRANSPARENT)
        fill_draw = ImageDraw.Draw(fills)

        xs = [border // 2]
        for width in widths:
            xs.append(xs[-1] + width)
        ys = [border // 2]
        for height in heights:
            ys.append(ys[-1] + height)

        for slot in range(1, len(heights)):
            row_color = row_attributes(self.styles, slot - 1).get("background-color")
            if row_color:
                fill_draw.rectangle((0, ys[slot], table_width, ys[slot + 1]), fill=_rgba(row_color))
        for cell in cells:
            cell_color = cell.attrs.get("background-color")
            if cell_color:
                box = (xs[cell.column], ys[cell.row], xs[cell.column + 1], ys[cell.row + 1])
                fill_draw.rectangle(box, fill=_rgba(cell_color))
        layer.alpha_composite(fills)

        draw = ImageDraw.Draw(layer)
        if border:
            self._draw_grid(draw, xs, ys, border, _rgba(table_attrs["border-color"]))

        text_color = _rgba(table_attrs["color"])
        for cell in cells:
            self._draw_text(draw, cell, xs, ys, text_color)

        mask = None
        if self.styles.rounded_corners:
            mask = Image.new("L", layer.size, 0)
            ImageDraw.Draw(mask).rounded_rectangle(
                (0, 0, table_width - 1, table_height - 1), radius=self._px(RADIUS_PX), fill=255
            )
            if border:
                draw.rounded_rectangle(
                    (0, 0, table_width - 1, table_height - 1),
                    radius=self._px(RADIUS_PX),
                    outline=_rgba(table_attrs["border-color"]),
                    width=border,
                )
        canvas.paste(layer, (pad, pad), mask if mask is not None else layer)
        return canvas

    def _draw_grid(self, draw: ImageDraw.ImageDraw, xs: List[int], ys: List[int], width: int, color: RGBA) -> None:
        for x in xs:
            self._draw_line(draw, (x, ys[0]), (x, ys[-1]), color, width)
        for y in ys:
            self._draw_line(draw, (xs[0], y), (xs[-1], y), color, width)

    def _draw_line(
        self,
        draw: ImageDraw.ImageDraw,
        start: Tuple[int, int],
        end: Tuple[int, int],
        color: RGBA,
        width: int,
    ) -> None:
        style = self.styles.border_style
        if style == "solid":
            draw.line((start, end), fill=color, width=width)
            return
        dash = width * (3 if style == "dashed" else 1)
        gap = dash
        horizontal = start[1] == end[1]
        length = (end[0] - start[0]) if horizontal else (end[1] - start[1])
        offset = 0
        while offset < length:
            stop = min(offset + dash, length)
            if horizontal:
                segment = ((start[0] + offset, start[1]), (start[0] + stop, start[1]))
            else:
                segment = ((start[0], start[1] + offset), (start[0], start[1] + stop))
            draw.line(segment, fill=color, width=width)
            offset = stop + gap

    def _draw_text(self, draw: ImageDraw.ImageDraw, cell: _Cell, xs: List[int], ys: List[int], color: RGBA) -> None:
        if not cell.text:
            return
        padding = self._px(_css_px(cell.attrs["padding"], 0))
        left, right = xs[cell.column] + padding, xs[cell.column + 1] - padding
        top, bottom = ys[cell.row], ys[cell.row + 1]
        text_width = cell.font.getlength(cell.text)
        align = cell.attrs.get("text-align", "left")
        if align == "right":
            x = right - text_width
        elif align == "center":
            x = left + (right - left - text_width) / 2
        else:
            x = left
        bbox = cell.font.getbbox(cell.text)
        y = top + (bottom - top - (bbox[3] - bbox[1])) / 2 - bbox[1]
        draw.text((x, y), cell.text, font=cell.font, fill=color)


def rasterize_table(
    table_data: TableData,
    styles: TableStyles,
    scale: float,
    background: Optional[str],
) -> bytes:
    """Render the table to PNG bytes. ``background=None`` leaves it transparent."""
    image = TableRasterizer(styles, scale, background).render(table_data)
    if background is not None:
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, "PNG")
    return buffer.getvalue()
