"""API schemas for saved table and custom theme operations."""

from datetime import datetime
from typing import Any, Dict, Optional

from table_beautifier.models.table import CamelModel


class UserCreate(CamelModel):
    """Schema for creating a user."""

    username: str
    password: str


class SavedTableCreate(CamelModel):
    """Schema for creating a new saved table."""

    user_id: Optional[int] = None
    name: str
    markdown_content: str
    styles: Dict[str, Any]
    is_public: bool = False


class SavedTableUpdate(CamelModel):
    """Schema for updating an existing saved table.

    ``user_id`` identifies the caller and is never written to the record.
    """

    user_id: Optional[int] = None
    name: Optional[str] = None
    markdown_content: Optional[str] = None
    styles: Optional[Dict[str, Any]] = None
    is_public: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        """Return the fields to write, keyed by attribute name."""
        return self.model_dump(exclude={"user_id"}, exclude_unset=True, exclude_none=True)


class CustomThemeCreate(CamelModel):
    """Schema for creating a new custom theme."""

    user_id: Optional[int] = None
    name: str
    styles: Dict[str, Any]
    is_public: bool = False


class OwnerRequest(CamelModel):
    """Body of delete requests: the caller's user id."""

    user_id: Optional[int] = None


class SuccessResponse(CamelModel):
    """Schema for a successful delete."""

    success: bool = True


class HealthResponse(CamelModel):
    """Schema for the health check."""

    status: str
    timestamp: datetime
