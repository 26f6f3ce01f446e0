"""Style engine: maps a TableStyles configuration to per-element CSS attributes.

Every renderer (inline HTML, exported documents, the raster exporter) reads
its visual attributes from the functions in this module, so a given
``TableStyles`` and ``TableData`` always produce the same attribute sets.
"""

import html
import logging
import re
from typing import Dict, List

from table_beautifier.models.table import TableData, TableStyles, TableStylesPatch

logger = logging.getLogger(__name__)

CORNER_RADIUS = "8px"
STRIPE_ALPHA = "dd"
HOVER_ALPHA = "bb"
HOVER_CLASS = "hover-enabled"

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

DEFAULT_STYLES = TableStyles()

PRESET_THEMES: Dict[str, TableStyles] = {
    "default": DEFAULT_STYLES,
    "minimal": DEFAULT_STYLES.model_copy(
        update={
            "border_style": "none",
            "striped_rows": False,
            "header_styling": False,
            "background_color": "#FFFFFF",
            "header_color": "#FFFFFF",
        }
    ),
    "fancy": DEFAULT_STYLES.model_copy(
        update={
            "border_width": 2,
            "border_color": "#3B82F6",
            "header_color": "#3B82F6",
            "text_color": "#FFFFFF",
            "rounded_corners": True,
            "hover_effects": True,
        }
    ),
    "dark": DEFAULT_STYLES.model_copy(
        update={
            "background_color": "#1F2937",
            "header_color": "#374151",
            "text_color": "#F9FAFB",
            "border_color": "#4B5563",
        }
    ),
    "corporate": DEFAULT_STYLES.model_copy(
        update={
            "font_family": "Arial",
            "header_color": "#F3F4F6",
            "border_color": "#D1D5DB",
            "striped_rows": False,
        }
    ),
}


def with_alpha(color: str, alpha: str) -> str:
    """Append a two-digit hex alpha to a hex color; other colors pass through."""
    match = _HEX_COLOR.match(color.strip())
    if not match:
        return color
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits}{alpha}"


def _border_width(styles: TableStyles) -> str:
    return "0" if styles.border_style == "none" else f"{styles.border_width}px"


def table_attributes(styles: TableStyles) -> Dict[str, str]:
    """CSS properties for the ``<table>`` element."""
    attrs = {
        "font-family": styles.font_family,
        "font-size": f"{styles.font_size}px",
        "color": styles.text_color,
        "background-color": styles.background_color,
        "border-color": styles.border_color,
        "border-style": styles.border_style,
        "border-width": _border_width(styles),
    }
    if styles.rounded_corners:
        # Collapsed borders cannot carry a radius
        attrs["border-collapse"] = "separate"
        attrs["border-spacing"] = "0"
        attrs["border-radius"] = CORNER_RADIUS
        attrs["overflow"] = "hidden"
    else:
        attrs["border-collapse"] = "collapse"
    attrs["width"] = "100%"
    return attrs


def cell_attributes(
    styles: TableStyles,
    *,
    is_header: bool = False,
    is_first_row: bool = False,
    is_last_row: bool = False,
    is_first_cell: bool = False,
    is_last_cell: bool = False,
) -> Dict[str, str]:
    """CSS properties for a ``<th>``/``<td>`` at the given position."""
    attrs = {
        "padding": f"{styles.cell_padding}px",
        "text-align": styles.text_alignment,
        "border-color": styles.border_color,
        "border-style": styles.border_style,
        "border-width": _border_width(styles),
    }
    if is_header and styles.header_styling:
        attrs.update(
            {
                "background-color": styles.header_color,
                "font-weight": "600",
                "text-transform": "uppercase",
                "font-size": "0.75rem",
                "letter-spacing": "0.05em",
            }
        )
    if styles.rounded_corners:
        if is_first_row and is_first_cell:
            attrs["border-top-left-radius"] = CORNER_RADIUS
        if is_first_row and is_last_cell:
            attrs["border-top-right-radius"] = CORNER_RADIUS
        if is_last_row and is_first_cell:
            attrs["border-bottom-left-radius"] = CORNER_RADIUS
        if is_last_row and is_last_cell:
            attrs["border-bottom-right-radius"] = CORNER_RADIUS
    return attrs


def row_attributes(styles: TableStyles, index: int) -> Dict[str, str]:
    """CSS properties for the body row at 0-based ``index``."""
    attrs: Dict[str, str] = {}
    if styles.striped_rows and index % 2 == 1:
        attrs["background-color"] = with_alpha(styles.background_color, STRIPE_ALPHA)
    if styles.hover_effects:
        attrs["transition"] = "background-color 0.15s ease-in-out"
    return attrs


def hover_css(styles: TableStyles, selector: str = f".{HOVER_CLASS}") -> str:
    """Scoped hover rule; inline styles cannot express ``:hover``."""
    if not styles.hover_effects:
        return ""
    hover_color = with_alpha(styles.background_color, HOVER_ALPHA)
    return f"{selector} tbody tr:hover {{ background-color: {hover_color} !important; }}"


def style_string(attrs: Dict[str, str]) -> str:
    """Render attributes as the value of an inline ``style`` attribute."""
    return "; ".join(f"{name}: {value}" for name, value in attrs.items())


def iter_cell_positions(table_data: TableData):
    """Yield ``(row_index, cell_index, text, flags)`` for every cell, header first.

    ``row_index`` is -1 for the header row.
    """
    column_count = len(table_data.headers)
    row_count = len(table_data.rows)
    for j, header in enumerate(table_data.headers):
        yield -1, j, header, {
            "is_header": True,
            "is_first_row": True,
            "is_last_row": row_count == 0,
            "is_first_cell": j == 0,
            "is_last_cell": j == column_count - 1,
        }
    for i, row in enumerate(table_data.rows):
        for j, cell in enumerate(row):
            yield i, j, cell, {
                "is_header": False,
                "is_first_row": False,
                "is_last_row": i == row_count - 1,
                "is_first_cell": j == 0,
                "is_last_cell": j == len(row) - 1,
            }


def render_table_html(table_data: TableData, styles: TableStyles) -> str:
    """Render the table as markup with inline styles."""
    cells: Dict[int, List[str]] = {}
    for row_index, _, text, flags in iter_cell_positions(table_data):
        tag = "th" if flags["is_header"] else "td"
        attrs = cell_attributes(styles, **flags)
        cells.setdefault(row_index, []).append(
            f'<{tag} style="{style_string(attrs)}">{html.escape(text)}</{tag}>'
        )

    class_attr = f' class="{HOVER_CLASS}"' if styles.hover_effects else ""
    lines = []
    if styles.hover_effects:
        lines.append(f"<style>{hover_css(styles)}</style>")
    lines.append(f'<table{class_attr} style="{style_string(table_attributes(styles))}">')
    lines.append("  <thead>")
    lines.append("    <tr>")
    lines.extend(f"      {cell}" for cell in cells.get(-1, []))
    lines.append("    </tr>")
    lines.append("  </thead>")
    lines.append("  <tbody>")
    for i in range(len(table_data.rows)):
        row_attrs = row_attributes(styles, i)
        row_style = f' style="{style_string(row_attrs)}"' if row_attrs else ""
        lines.append(f"    <tr{row_style}>")
        lines.extend(f"      {cell}" for cell in cells.get(i, []))
        lines.append("    </tr>")
    lines.append("  </tbody>")
    lines.append("</table>")
    return "\n".join(lines)


def apply_theme(theme_key: str) -> TableStyles:
    """Return a fresh copy of a preset theme, replacing the whole style object."""
    if theme_key not in PRESET_THEMES:
        raise ValueError(f"Unknown theme: {theme_key}")
    return PRESET_THEMES[theme_key].model_copy()


def apply_suggestion(current: TableStyles, patch: TableStylesPatch) -> TableStyles:
    """Shallow-merge the fields present in ``patch`` over ``current``."""
    updates = patch.model_dump(exclude_unset=True, exclude_none=True)
    logger.debug(f"Applying style suggestion fields: {sorted(updates)}")
    return current.model_copy(update=updates)
