"""AI style suggestions and table analysis, with local heuristic fallbacks."""

import json
import logging
import math
import re
from typing import List, Optional

from table_beautifier.core.config import Settings
from table_beautifier.models.table import TableData, TableStylesPatch
from table_beautifier.schemas.ai_api import StyleSuggestion, TableAnalysis
from table_beautifier.services.llm.base import CompletionService

logger = logging.getLogger(__name__)

SUGGESTION_SYSTEM_PROMPT = (
    "You are an expert UI/UX designer specializing in data presentation and table "
    "formatting. Provide practical, visually appealing styling suggestions based on "
    "table content analysis."
)
ANALYSIS_SYSTEM_PROMPT = (
    "You are a data analysis expert. Analyze table structure and content to provide "
    "formatting insights."
)

SUGGESTION_SAMPLE_ROWS = 5
ANALYSIS_SAMPLE_ROWS = 3
ANALYSIS_SAMPLE_CELLS = 20

_DATE_PATTERN = re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}$|^\d{4}-\d{2}-\d{2}$")


class SuggestionError(Exception):
    """Raised when the model fails and fallbacks are disabled."""


def _is_number(text: str) -> bool:
    text = text.strip()
    if not text:
        return False
    try:
        return not math.isnan(float(text))
    except ValueError:
        return False


def fallback_suggestions(table_data: TableData) -> List[StyleSuggestion]:
    """Canned suggestions tuned by whether the table holds numbers."""
    has_numbers = any(_is_number(cell) for row in table_data.rows for cell in row)
    row_count = len(table_data.rows)

    return [
        StyleSuggestion(
            name="Professional Report",
            description="Clean, business-ready styling with subtle borders and professional typography",
            reasoning="Ideal for business reports and presentations with clear data hierarchy",
            category="professional",
            styles=TableStylesPatch(
                font_family="Inter",
                font_size=14,
                text_color="#1F2937",
                background_color="#FFFFFF",
                header_color="#F8FAFC",
                border_color="#E2E8F0",
                border_style="solid",
                border_width=1,
                cell_padding=12,
                text_alignment="right" if has_numbers else "left",
                striped_rows=row_count > 5,
                hover_effects=True,
                header_styling=True,
                rounded_corners=False,
            ),
        ),
        StyleSuggestion(
            name="Modern Minimal",
            description="Clean design with no borders and ample spacing for a contemporary look",
            reasoning="Perfect for modern dashboards and clean data presentations",
            category="casual",
            styles=TableStylesPatch(
                font_family="Inter",
                font_size=15,
                text_color="#374151",
                background_color="#FFFFFF",
                header_color="#F9FAFB",
                border_color="#FFFFFF",
                border_style="none",
                border_width=0,
                cell_padding=16,
                text_alignment="left",
                striped_rows=False,
                hover_effects=True,
                header_styling=True,
                rounded_corners=True,
            ),
        ),
        StyleSuggestion(
            name="Data Dashboard",
            description="Optimized for numerical data with right alignment and clear visual separation",
            reasoning=(
                "Right-aligned for easy number comparison"
                if has_numbers
                else "Clean layout for data visualization"
            ),
            category="technical",
            styles=TableStylesPatch(
                font_family="Inter",
                font_size=13,
                text_color="#111827",
                background_color="#FFFFFF",
                header_color="#EFF6FF",
                border_color="#D1D5DB",
                border_style="solid",
                border_width=1,
                cell_padding=10,
                text_alignment="right" if has_numbers else "center",
                striped_rows=True,
                hover_effects=True,
                header_styling=True,
                rounded_corners=False,
            ),
        ),
        StyleSuggestion(
            name="Creative Accent",
            description="Vibrant styling with colored headers and rounded corners for visual appeal",
            reasoning="Eye-catching design for presentations and creative content",
            category="creative",
            styles=TableStylesPatch(
                font_family="Inter",
                font_size=14,
                text_color="#1F2937",
                background_color="#FFFFFF",
                header_color="#EBF4FF",
                border_color="#3B82F6",
                border_style="solid",
                border_width=2,
                cell_padding=14,
                text_alignment="left",
                striped_rows=False,
                hover_effects=True,
                header_styling=True,
                rounded_corners=True,
            ),
        ),
    ]


def fallback_analysis(table_data: TableData) -> TableAnalysis:
    """Classify sampled cells and derive purpose and recommendations."""
    sample_cells = [cell for row in table_data.rows for cell in row][:ANALYSIS_SAMPLE_CELLS]

    has_numbers = has_dates = has_percentages = has_text = False
    for cell in sample_cells:
        text = cell.strip()
        if not text:
            continue
        if _is_number(text):
            has_numbers = True
        elif "%" in text:
            has_percentages = True
        elif _DATE_PATTERN.match(text):
            has_dates = True
        else:
            has_text = True

    data_types = []
    if has_numbers:
        data_types.append("numeric")
    if has_text:
        data_types.append("text")
    if has_dates:
        data_types.append("date")
    if has_percentages:
        data_types.append("percentage")

    headers = [h.lower() for h in table_data.headers]

    def mentions(*words: str) -> bool:
        return any(word in h for h in headers for word in words)

    purpose = "Data table"
    if mentions("sales", "revenue", "profit"):
        purpose = "Financial/sales data table"
    elif mentions("user", "customer", "member"):
        purpose = "User/customer data table"
    elif mentions("product", "item", "inventory"):
        purpose = "Product/inventory table"
    elif has_numbers and has_percentages:
        purpose = "Performance metrics table"

    recommendations = []
    if has_numbers:
        recommendations.append("Right-align numeric columns for better readability")
    if len(table_data.rows) > 5:
        recommendations.append("Consider alternating row colors for easier scanning")
    if has_percentages or has_numbers:
        recommendations.append("Use professional styling for data-focused presentation")
    recommendations.append("Ensure adequate padding for comfortable reading")

    return TableAnalysis(data_types=data_types, purpose=purpose, recommendations=recommendations)


def _suggestion_prompt(table_data: TableData, markdown_content: str) -> str:
    truncated = " ... (truncated)" if len(table_data.rows) > SUGGESTION_SAMPLE_ROWS else ""
    return f"""Analyze this markdown table and provide 3-4 intelligent styling suggestions:

Table Data:
Headers: {json.dumps(table_data.headers)}
Rows: {json.dumps(table_data.rows[:SUGGESTION_SAMPLE_ROWS])}{truncated}

Markdown:
{markdown_content}

Based on the table content, data types, and purpose, suggest styling options. Consider:
- Data type (numerical, text, dates, financial, etc.)
- Table purpose (dashboard, report, presentation, documentation)
- Professional vs casual context
- Readability and visual hierarchy

Respond with JSON in this exact format:
{{
  "suggestions": [
    {{
      "name": "Style Name",
      "description": "Brief description for user",
      "reasoning": "Why this style works for this data",
      "category": "professional|casual|technical|creative",
      "styles": {{
        "fontFamily": "Inter",
        "fontSize": 14,
        "textColor": "#1F2937",
        "backgroundColor": "#FFFFFF",
        "headerColor": "#F9FAFB",
        "borderColor": "#E5E7EB",
        "borderStyle": "solid",
        "borderWidth": 1,
        "cellPadding": 12,
        "textAlignment": "left",
        "stripedRows": true,
        "hoverEffects": false,
        "headerStyling": true,
        "roundedCorners": false
      }}
    }}
  ]
}}"""


def _analysis_prompt(table_data: TableData) -> str:
    return f"""Analyze this table data and provide insights:

Headers: {json.dumps(table_data.headers)}
Sample Data: {json.dumps(table_data.rows[:ANALYSIS_SAMPLE_ROWS])}

Analyze and respond with JSON:
{{
  "dataTypes": ["text", "numeric", "date", "percentage", etc.],
  "purpose": "brief description of table purpose",
  "recommendations": ["styling recommendation 1", "recommendation 2", etc.]
}}"""


class StyleSuggestionService:
    """Bridges table content to the language model."""

    def __init__(self, llm_service: Optional[CompletionService], settings: Settings) -> None:
        self.llm_service = llm_service
        self.fallback_enabled = settings.ai_fallback_enabled

    async def generate_style_suggestions(
        self, table_data: TableData, markdown_content: str
    ) -> List[StyleSuggestion]:
        """Ask the model for suggestions; fall back to heuristics on failure."""
        try:
            if self.llm_service is None:
                raise SuggestionError("No completion service configured")
            result = await self.llm_service.generate_json(
                SUGGESTION_SYSTEM_PROMPT,
                _suggestion_prompt(table_data, markdown_content),
                temperature=0.7,
                max_tokens=2000,
            )
            suggestions = [
                StyleSuggestion.model_validate(item) for item in result.get("suggestions") or []
            ]
            logger.info(f"Generated {len(suggestions)} style suggestions")
            return suggestions
        except Exception as e:
            logger.error(f"Error generating style suggestions: {e}")
            if not self.fallback_enabled:
                raise SuggestionError("Failed to generate style suggestions") from e
            logger.info("Using fallback suggestions due to API unavailability")
            return fallback_suggestions(table_data)

    async def analyze_table_content(self, table_data: TableData) -> TableAnalysis:
        """Ask the model for an analysis; fall back to heuristics on failure."""
        try:
            if self.llm_service is None:
                raise SuggestionError("No completion service configured")
            result = await self.llm_service.generate_json(
                ANALYSIS_SYSTEM_PROMPT,
                _analysis_prompt(table_data),
                temperature=0.3,
                max_tokens=800,
            )
            return TableAnalysis(
                data_types=result.get("dataTypes") or [],
                purpose=result.get("purpose") or "General data table",
                recommendations=result.get("recommendations") or [],
            )
        except Exception as e:
            logger.error(f"Error analyzing table content: {e}")
            if not self.fallback_enabled:
                raise SuggestionError("Failed to analyze table content") from e
            logger.info("Using fallback analysis due to API unavailability")
            return fallback_analysis(table_data)
