"""Abstract base class for table and theme storage."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from table_beautifier.models.saved_table import CustomTheme, SavedTable, User
from table_beautifier.schemas.table_api import CustomThemeCreate, SavedTableCreate, UserCreate


class TableStorage(ABC):
    """Abstract base class for table and theme storage.

    Lookups return ``None`` when a record is absent or the read fails, and
    listings return ``[]`` on failure. Creates raise. Updates and deletes are
    gated on both id and owner; a missing record and a record owned by
    someone else produce the same ``None``/``False`` result.
    """

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get a user by id."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        pass

    @abstractmethod
    def create_user(self, user: UserCreate) -> User:
        """Create a user."""
        pass

    # Saved tables
    @abstractmethod
    def get_saved_table(self, table_id: int) -> Optional[SavedTable]:
        """Get a saved table by id."""
        pass

    @abstractmethod
    def get_saved_tables_by_user(self, user_id: int) -> List[SavedTable]:
        """List a user's saved tables, newest first."""
        pass

    @abstractmethod
    def get_public_saved_tables(self) -> List[SavedTable]:
        """List public saved tables, newest first."""
        pass

    @abstractmethod
    def create_saved_table(self, table: SavedTableCreate) -> SavedTable:
        """Create a saved table."""
        pass

    @abstractmethod
    def update_saved_table(
        self, table_id: int, user_id: int, changes: Dict[str, Any]
    ) -> Optional[SavedTable]:
        """Apply changes to a table owned by ``user_id``."""
        pass

    @abstractmethod
    def delete_saved_table(self, table_id: int, user_id: int) -> bool:
        """Delete a table owned by ``user_id``."""
        pass

    # Custom themes
    @abstractmethod
    def get_custom_theme(self, theme_id: int) -> Optional[CustomTheme]:
        """Get a custom theme by id."""
        pass

    @abstractmethod
    def get_custom_themes_by_user(self, user_id: int) -> List[CustomTheme]:
        """List a user's custom themes, newest first."""
        pass

    @abstractmethod
    def get_public_custom_themes(self) -> List[CustomTheme]:
        """List public custom themes, newest first."""
        pass

    @abstractmethod
    def create_custom_theme(self, theme: CustomThemeCreate) -> CustomTheme:
        """Create a custom theme."""
        pass

    @abstractmethod
    def delete_custom_theme(self, theme_id: int, user_id: int) -> bool:
        """Delete a theme owned by ``user_id``."""
        pass
