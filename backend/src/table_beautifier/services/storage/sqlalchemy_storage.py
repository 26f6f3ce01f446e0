"""Storage implementation using SQLAlchemy ORM sessions."""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import create_engine, delete, select
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker

from table_beautifier.models.db_tables import Base, CustomThemeRow, SavedTableRow, UserRow
from table_beautifier.models.saved_table import CustomTheme, SavedTable, User
from table_beautifier.schemas.table_api import CustomThemeCreate, SavedTableCreate, UserCreate
from table_beautifier.services.storage.base import TableStorage

logger = logging.getLogger(__name__)

UPDATABLE_TABLE_FIELDS = ("name", "markdown_content", "styles", "is_public")


def _engine_for(url: str):
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    connect_args = {"check_same_thread": False}
    if not parsed.database or parsed.database == ":memory:":
        # A single shared connection keeps the in-memory database alive
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)

    dir_path = os.path.dirname(parsed.database)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)
    return create_engine(url, connect_args=connect_args)


class SQLAlchemyStorage(TableStorage):
    """Storage for users, saved tables and custom themes behind any SQLAlchemy URL."""

    def __init__(self, url: str) -> None:
        self.engine = _engine_for(url)
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)
        Base.metadata.create_all(self.engine)
        logger.info(f"Initialized SQLAlchemy storage for {self.engine.url.render_as_string()}")

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        """Get a user by id."""
        try:
            with self.Session() as session:
                row = session.get(UserRow, user_id)
                return User.model_validate(row, from_attributes=True) if row else None
        except Exception as e:
            logger.error(f"Error loading user {user_id}: {e}")
            return None

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        try:
            with self.Session() as session:
                row = session.scalars(
                    select(UserRow).where(UserRow.username == username)
                ).first()
                return User.model_validate(row, from_attributes=True) if row else None
        except Exception as e:
            logger.error(f"Error loading user {username}: {e}")
            return None

    def create_user(self, user: UserCreate) -> User:
        """Create a user."""
        with self.Session() as session:
            row = UserRow(username=user.username, password=user.password)
            session.add(row)
            session.commit()
            logger.info(f"Inserted new user {row.id} into database")
            return User.model_validate(row, from_attributes=True)

    # Saved tables

    def get_saved_table(self, table_id: int) -> Optional[SavedTable]:
        """Get a saved table by id."""
        try:
            with self.Session() as session:
                row = session.get(SavedTableRow, table_id)
                if row is None:
                    logger.warning(f"Saved table {table_id} not found in database")
                    return None
                return SavedTable.model_validate(row, from_attributes=True)
        except Exception as e:
            logger.error(f"Error loading saved table {table_id}: {e}")
            return None

    def get_saved_tables_by_user(self, user_id: int) -> List[SavedTable]:
        """List a user's saved tables, newest first."""
        return self._list_tables(SavedTableRow.user_id == user_id)

    def get_public_saved_tables(self) -> List[SavedTable]:
        """List public saved tables, newest first."""
        return self._list_tables(SavedTableRow.is_public.is_(True))

    def _list_tables(self, condition: Any) -> List[SavedTable]:
        try:
            with self.Session() as session:
                rows = session.scalars(
                    select(SavedTableRow)
                    .where(condition)
                    .order_by(SavedTableRow.updated_at.desc(), SavedTableRow.id.desc())
                ).all()
                tables = [SavedTable.model_validate(row, from_attributes=True) for row in rows]
                logger.info(f"Listed {len(tables)} saved tables from database")
                return tables
        except Exception as e:
            logger.error(f"Error listing saved tables: {e}")
            return []

    def create_saved_table(self, table: SavedTableCreate) -> SavedTable:
        """Create a saved table."""
        with self.Session() as session:
            row = SavedTableRow(**table.model_dump())
            session.add(row)
            session.commit()
            logger.info(f"Inserted new saved table {row.id} into database")
            return SavedTable.model_validate(row, from_attributes=True)

    def update_saved_table(
        self, table_id: int, user_id: int, changes: Dict[str, Any]
    ) -> Optional[SavedTable]:
        """Apply changes to a table owned by ``user_id``."""
        try:
            with self.Session() as session:
                row = session.scalars(
                    select(SavedTableRow).where(
                        SavedTableRow.id == table_id, SavedTableRow.user_id == user_id
                    )
                ).first()
                if row is None:
                    logger.warning(f"Saved table {table_id} not found for user {user_id}")
                    return None
                for field in UPDATABLE_TABLE_FIELDS:
                    if field in changes:
                        setattr(row, field, changes[field])
                row.updated_at = datetime.now(timezone.utc)
                session.commit()
                logger.info(f"Updated saved table {table_id} in database")
                return SavedTable.model_validate(row, from_attributes=True)
        except Exception as e:
            logger.error(f"Error updating saved table {table_id}: {e}")
            return None

    def delete_saved_table(self, table_id: int, user_id: int) -> bool:
        """Delete a table owned by ``user_id``."""
        return self._delete_owned(SavedTableRow, table_id, user_id)

    # Custom themes

    def get_custom_theme(self, theme_id: int) -> Optional[CustomTheme]:
        """Get a custom theme by id."""
        try:
            with self.Session() as session:
                row = session.get(CustomThemeRow, theme_id)
                if row is None:
                    logger.warning(f"Custom theme {theme_id} not found in database")
                    return None
                return CustomTheme.model_validate(row, from_attributes=True)
        except Exception as e:
            logger.error(f"Error loading custom theme {theme_id}: {e}")
            return None

    def get_custom_themes_by_user(self, user_id: int) -> List[CustomTheme]:
        """List a user's custom themes, newest first."""
        return self._list_themes(CustomThemeRow.user_id == user_id)

    def get_public_custom_themes(self) -> List[CustomTheme]:
        """List public custom themes, newest first."""
        return self._list_themes(CustomThemeRow.is_public.is_(True))

    def _list_themes(self, condition: Any) -> List[CustomTheme]:
        try:
            with self.Session() as session:
                rows = session.scalars(
                    select(CustomThemeRow)
                    .where(condition)
                    .order_by(CustomThemeRow.created_at.desc(), CustomThemeRow.id.desc())
                ).all()
                return [CustomTheme.model_validate(row, from_attributes=True) for row in rows]
        except Exception as e:
            logger.error(f"Error listing custom themes: {e}")
            return []

    def create_custom_theme(self, theme: CustomThemeCreate) -> CustomTheme:
        """Create a custom theme."""
        with self.Session() as session:
            row = CustomThemeRow(**theme.model_dump())
            session.add(row)
            session.commit()
            logger.info(f"Inserted new custom theme {row.id} into database")
            return CustomTheme.model_validate(row, from_attributes=True)

    def delete_custom_theme(self, theme_id: int, user_id: int) -> bool:
        """Delete a theme owned by ``user_id``."""
        return self._delete_owned(CustomThemeRow, theme_id, user_id)

    def _delete_owned(self, model: Type[Base], record_id: int, user_id: int) -> bool:
        try:
            with self.Session() as session:
                result = session.execute(
                    delete(model).where(model.id == record_id, model.user_id == user_id)
                )
                session.commit()
                if result.rowcount == 0:
                    logger.warning(
                        f"Record {record_id} in {model.__tablename__} not found for user {user_id}"
                    )
                    return False
                logger.info(f"Deleted record {record_id} from {model.__tablename__}")
                return True
        except Exception as e:
            logger.error(f"Error deleting record {record_id} from {model.__tablename__}: {e}")
            return False
