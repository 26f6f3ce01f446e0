"""Markdown table parsing built on markdown-it-py."""

import logging
import re
from typing import List, Optional

from markdown_it import MarkdownIt

from table_beautifier.models.table import TableData

logger = logging.getLogger(__name__)

_md = MarkdownIt("commonmark").enable("table")

SEPARATOR_PATTERN = re.compile(r"^\s*\|?[\s\-\|:]+\|?\s*$")
_CELL_SPLIT = re.compile(r"(?<!\\)\|")


def _source_cell_count(line: str, quote_depth: int = 0) -> int:
    """Count the cells written on a source table line.

    ``quote_depth`` blockquote markers are stripped from the start of the
    line first; lazy continuation lines may omit them.
    """
    if quote_depth:
        line = re.sub(r"^(?:\s*>){0,%d}" % quote_depth, "", line)
    text = line.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not text.endswith("\\|"):
        text = text[:-1]
    return len(_CELL_SPLIT.split(text))


def parse_markdown_table(markdown: str) -> Optional[TableData]:
    """Parse the first table in ``markdown``.

    Returns None when there is no table, when the table is empty, or when a
    body row does not have exactly one cell per header. Never raises.
    """
    try:
        tokens = _md.parse(markdown)

        table_open_index = -1
        table_close_index = -1
        for i, token in enumerate(tokens):
            if token.type == "table_open" and table_open_index == -1:
                table_open_index = i
            elif token.type == "table_close" and table_open_index != -1:
                table_close_index = i
                break

        if table_open_index == -1 or table_close_index == -1:
            return None

        quote_depth = 0
        for token in tokens[:table_open_index]:
            if token.type == "blockquote_open":
                quote_depth += 1
            elif token.type == "blockquote_close":
                quote_depth -= 1

        source_lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        headers: List[str] = []
        rows: List[List[str]] = []
        current_row: List[str] = []
        is_header = True

        for token in tokens[table_open_index + 1:table_close_index]:
            if token.type == "thead_open":
                is_header = True
            elif token.type == "tbody_open":
                is_header = False
            elif token.type == "tr_open":
                current_row = []
                if not is_header and token.map and headers:
                    line = source_lines[token.map[0]]
                    if _source_cell_count(line, quote_depth) != len(headers):
                        logger.info(
                            f"Rejecting table: row on line {token.map[0] + 1} "
                            f"does not have {len(headers)} cells"
                        )
                        return None
            elif token.type == "tr_close":
                if is_header and current_row:
                    headers.extend(current_row)
                elif not is_header and current_row:
                    rows.append(list(current_row))
                current_row = []
            elif token.type == "inline":
                current_row.append(token.content or "")

        if not headers and not rows:
            return None

        return TableData(headers=headers, rows=rows)
    except Exception as e:
        logger.error(f"Error parsing markdown table: {e}")
        return None


def is_valid_markdown_table(markdown: str) -> bool:
    """Cheap check that the second line looks like a table separator row."""
    lines = markdown.strip().split("\n")
    if len(lines) < 2:
        return False
    return SEPARATOR_PATTERN.match(lines[1]) is not None


def generate_sample_markdown() -> str:
    """Sample table shown to new users."""
    return (
        "| Name | Age | City | Occupation |\n"
        "|------|-----|------|------------|\n"
        "| John Doe | 25 | New York | Designer |\n"
        "| Jane Smith | 30 | Los Angeles | Developer |\n"
        "| Bob Johnson | 35 | Chicago | Manager |\n"
        "| Alice Brown | 28 | Seattle | Analyst |"
    )
