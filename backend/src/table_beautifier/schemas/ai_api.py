"""AI suggestion schemas for API requests and responses."""

from typing import List, Literal

from pydantic import Field

from table_beautifier.models.table import CamelModel, TableData, TableStylesPatch

SuggestionCategory = Literal["professional", "casual", "technical", "creative"]


class StyleSuggestion(CamelModel):
    """A named partial style proposal."""

    name: str
    description: str
    reasoning: str
    styles: TableStylesPatch
    category: SuggestionCategory


class StyleSuggestionRequest(CamelModel):
    """Style suggestion request schema."""

    table_data: TableData
    markdown_content: str = ""


class StyleSuggestionResponse(CamelModel):
    """Style suggestion response schema."""

    suggestions: List[StyleSuggestion]


class AnalyzeTableRequest(CamelModel):
    """Table analysis request schema."""

    table_data: TableData


class TableAnalysis(CamelModel):
    """Table analysis response schema."""

    data_types: List[str] = Field(default_factory=list)
    purpose: str = "General data table"
    recommendations: List[str] = Field(default_factory=list)
