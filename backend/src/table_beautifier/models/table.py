"""Table data and style models shared by the parser, renderers and API."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

BorderStyle = Literal["solid", "dashed", "dotted", "none"]
TextAlignment = Literal["left", "center", "right"]
ExportQuality = Literal["high", "medium", "low"]
BackgroundMode = Literal["transparent", "white", "custom"]

# Numeric style bounds, in CSS pixels
FONT_SIZE_RANGE = (8, 72)
BORDER_WIDTH_RANGE = (0, 16)
CELL_PADDING_RANGE = (0, 64)


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TableData(CamelModel):
    """A parsed markdown table: one header per column, rows of equal width."""

    headers: List[str] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_row_widths(self) -> "TableData":
        """Reject rows whose cell count differs from the header count."""
        for index, row in enumerate(self.rows):
            if len(row) != len(self.headers):
                raise ValueError(
                    f"Row {index} has {len(row)} cells, expected {len(self.headers)}"
                )
        return self


class TableStyles(CamelModel):
    """Flat style configuration applied to a rendered table."""

    font_family: str = "Inter"
    font_size: int = Field(14, ge=FONT_SIZE_RANGE[0], le=FONT_SIZE_RANGE[1])
    text_color: str = "#1F2937"
    background_color: str = "#FFFFFF"
    header_color: str = "#F9FAFB"
    border_color: str = "#E5E7EB"
    border_style: BorderStyle = "solid"
    border_width: int = Field(1, ge=BORDER_WIDTH_RANGE[0], le=BORDER_WIDTH_RANGE[1])
    cell_padding: int = Field(12, ge=CELL_PADDING_RANGE[0], le=CELL_PADDING_RANGE[1])
    text_alignment: TextAlignment = "left"
    striped_rows: bool = True
    hover_effects: bool = False
    header_styling: bool = True
    rounded_corners: bool = False


class TableStylesPatch(CamelModel):
    """Partial style configuration; only the fields that are set apply."""

    font_family: Optional[str] = None
    font_size: Optional[int] = Field(None, ge=FONT_SIZE_RANGE[0], le=FONT_SIZE_RANGE[1])
    text_color: Optional[str] = None
    background_color: Optional[str] = None
    header_color: Optional[str] = None
    border_color: Optional[str] = None
    border_style: Optional[BorderStyle] = None
    border_width: Optional[int] = Field(None, ge=BORDER_WIDTH_RANGE[0], le=BORDER_WIDTH_RANGE[1])
    cell_padding: Optional[int] = Field(None, ge=CELL_PADDING_RANGE[0], le=CELL_PADDING_RANGE[1])
    text_alignment: Optional[TextAlignment] = None
    striped_rows: Optional[bool] = None
    hover_effects: Optional[bool] = None
    header_styling: Optional[bool] = None
    rounded_corners: Optional[bool] = None


class ExportSettings(CamelModel):
    """Raster export options."""

    quality: ExportQuality = "high"
    background: BackgroundMode = "white"
    custom_background: Optional[str] = None
