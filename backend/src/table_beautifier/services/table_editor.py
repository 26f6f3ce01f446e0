"""Row and column reordering, and re-serialization back to markdown."""

import logging
from typing import List, TypeVar

from table_beautifier.models.table import TableData

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _move(items: List[T], from_index: int, to_index: int) -> None:
    """Remove the item at ``from_index`` and insert it at ``to_index``."""
    size = len(items)
    if not 0 <= from_index < size or not 0 <= to_index < size:
        raise ValueError(
            f"Move from {from_index} to {to_index} is outside 0..{size - 1}"
        )
    item = items.pop(from_index)
    items.insert(to_index, item)


def move_row(table_data: TableData, from_index: int, to_index: int) -> TableData:
    """Move a body row in place and return the table."""
    _move(table_data.rows, from_index, to_index)
    logger.info(f"Moved row {from_index} to {to_index}")
    return table_data


def move_column(table_data: TableData, from_index: int, to_index: int) -> TableData:
    """Move a column in place: the header and every row's cell move together."""
    _move(table_data.headers, from_index, to_index)
    for row in table_data.rows:
        _move(row, from_index, to_index)
    logger.info(f"Moved column {from_index} to {to_index}")
    return table_data


def _markdown_line(cells: List[str]) -> str:
    # A literal pipe would otherwise split the cell on re-parse
    return "| " + " | ".join(cell.replace("|", "\\|") for cell in cells) + " |"


def table_to_markdown(table_data: TableData) -> str:
    """Serialize the table to markdown.

    Alignment markers and source whitespace are not preserved.
    """
    lines = [
        _markdown_line(table_data.headers),
        _markdown_line(["---"] * len(table_data.headers)),
    ]
    lines.extend(_markdown_line(row) for row in table_data.rows)
    return "\n".join(lines)
