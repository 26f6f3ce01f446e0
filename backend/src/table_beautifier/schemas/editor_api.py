"""Schemas for parsing, reordering, presets and export requests."""

from typing import Literal, Optional

from pydantic import Field

from table_beautifier.models.table import CamelModel, ExportSettings, TableData, TableStyles


class ParseRequest(CamelModel):
    """Markdown parse request schema."""

    markdown_content: str


class ParseResponse(CamelModel):
    """Markdown parse response schema; ``table_data`` is null when nothing parsed."""

    table_data: Optional[TableData] = None
    is_valid: bool


class SampleResponse(CamelModel):
    """Starter markdown and its parsed table."""

    markdown_content: str
    table_data: TableData


class ReorderRequest(CamelModel):
    """Row or column move request schema."""

    markdown_content: str
    axis: Literal["row", "column"]
    from_index: int
    to_index: int


class ReorderResponse(CamelModel):
    """Reordered table and its re-serialized markdown."""

    table_data: TableData
    markdown_content: str


class ExportRequest(CamelModel):
    """Export request schema."""

    table_data: Optional[TableData] = None
    styles: TableStyles = Field(default_factory=TableStyles)
    settings: ExportSettings = Field(default_factory=ExportSettings)
    expanded: bool = False
