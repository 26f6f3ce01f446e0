"""Persisted entities: users, saved tables and custom themes."""

from datetime import datetime
from typing import Any, Dict, Optional

from table_beautifier.models.table import CamelModel


class User(CamelModel):
    """Model for a stored user."""

    id: int
    username: str
    password: str


class SavedTable(CamelModel):
    """Model for a saved markdown table and its styles."""

    id: int
    user_id: Optional[int] = None
    name: str
    markdown_content: str
    styles: Dict[str, Any]  # Stored verbatim as JSON
    is_public: bool = False
    created_at: datetime
    updated_at: datetime


class CustomTheme(CamelModel):
    """Model for a user-saved style configuration."""

    id: int
    user_id: Optional[int] = None
    name: str
    styles: Dict[str, Any]
    is_public: bool = False
    created_at: datetime
