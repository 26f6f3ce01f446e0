"""Storage implementation using the SQLite driver directly."""

import json
import logging
import os
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from table_beautifier.models.saved_table import CustomTheme, SavedTable, User
from table_beautifier.schemas.table_api import CustomThemeCreate, SavedTableCreate, UserCreate
from table_beautifier.services.storage.base import TableStorage

logger = logging.getLogger(__name__)

TABLE_COLUMNS = "id, user_id, name, markdown_content, styles, is_public, created_at, updated_at"
THEME_COLUMNS = "id, user_id, name, styles, is_public, created_at"

# Columns a saved table update may write
UPDATABLE_TABLE_COLUMNS = ("name", "markdown_content", "styles", "is_public")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_table(row: tuple) -> SavedTable:
    return SavedTable(
        id=row[0],
        user_id=row[1],
        name=row[2],
        markdown_content=row[3],
        styles=json.loads(row[4]),
        is_public=bool(row[5]),
        created_at=datetime.fromisoformat(row[6]),
        updated_at=datetime.fromisoformat(row[7]),
    )


def _row_to_theme(row: tuple) -> CustomTheme:
    return CustomTheme(
        id=row[0],
        user_id=row[1],
        name=row[2],
        styles=json.loads(row[3]),
        is_public=bool(row[4]),
        created_at=datetime.fromisoformat(row[5]),
    )


class SQLiteStorage(TableStorage):
    """Storage for users, saved tables and custom themes in a SQLite file."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        dir_path = os.path.dirname(db_path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
            logger.info(f"Ensured directory exists: {dir_path}")
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def init_db(self) -> None:
        """Initialize the SQLite database."""
        conn = self._connect()
        cursor = conn.cursor()

        cursor.execute(
            """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL
        )
        """
        )
        cursor.execute(
            """
        CREATE TABLE IF NOT EXISTS saved_tables (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER,
            name TEXT NOT NULL,
            markdown_content TEXT NOT NULL,
            styles TEXT NOT NULL,
            is_public INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """
        )
        cursor.execute(
            """
        CREATE TABLE IF NOT EXISTS custom_themes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER,
            name TEXT NOT NULL,
            styles TEXT NOT NULL,
            is_public INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL
        )
        """
        )
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_saved_tables_user ON saved_tables (user_id)")
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_custom_themes_user ON custom_themes (user_id)"
        )

        conn.commit()
        conn.close()

        logger.info(f"Initialized SQLite database at {self.db_path}")

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        """Get a user by id."""
        return self._fetch_user("SELECT id, username, password FROM users WHERE id = ?", user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        return self._fetch_user(
            "SELECT id, username, password FROM users WHERE username = ?", username
        )

    def _fetch_user(self, query: str, key: Any) -> Optional[User]:
        conn = self._connect()
        try:
            row = conn.execute(query, (key,)).fetchone()
            if not row:
                return None
            return User(id=row[0], username=row[1], password=row[2])
        except Exception as e:
            logger.error(f"Error loading user {key}: {e}")
            return None
        finally:
            conn.close()

    def create_user(self, user: UserCreate) -> User:
        """Create a user."""
        conn = self._connect()
        try:
            cursor = conn.execute(
                "INSERT INTO users (username, password) VALUES (?, ?)",
                (user.username, user.password),
            )
            conn.commit()
            logger.info(f"Inserted new user {cursor.lastrowid} into database")
            return User(id=cursor.lastrowid, username=user.username, password=user.password)
        except Exception as e:
            conn.rollback()
            logger.error(f"Error creating user {user.username}: {e}")
            raise
        finally:
            conn.close()

    # Saved tables

    def get_saved_table(self, table_id: int) -> Optional[SavedTable]:
        """Get a saved table by id."""
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {TABLE_COLUMNS} FROM saved_tables WHERE id = ?", (table_id,)
            ).fetchone()
            if not row:
                logger.warning(f"Saved table {table_id} not found in database")
                return None
            return _row_to_table(row)
        except Exception as e:
            logger.error(f"Error loading saved table {table_id}: {e}")
            return None
        finally:
            conn.close()

    def get_saved_tables_by_user(self, user_id: int) -> List[SavedTable]:
        """List a user's saved tables, newest first."""
        return self._list_tables("WHERE user_id = ?", (user_id,))

    def get_public_saved_tables(self) -> List[SavedTable]:
        """List public saved tables, newest first."""
        return self._list_tables("WHERE is_public = 1", ())

    def _list_tables(self, where: str, params: tuple) -> List[SavedTable]:
        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT {TABLE_COLUMNS} FROM saved_tables {where} "
                "ORDER BY updated_at DESC, id DESC",
                params,
            ).fetchall()
            tables = [_row_to_table(row) for row in rows]
            logger.info(f"Listed {len(tables)} saved tables from database")
            return tables
        except Exception as e:
            logger.error(f"Error listing saved tables: {e}")
            return []
        finally:
            conn.close()

    def create_saved_table(self, table: SavedTableCreate) -> SavedTable:
        """Create a saved table."""
        now = _now()
        conn = self._connect()
        try:
            cursor = conn.execute(
                "INSERT INTO saved_tables "
                "(user_id, name, markdown_content, styles, is_public, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    table.user_id,
                    table.name,
                    table.markdown_content,
                    json.dumps(table.styles),
                    int(table.is_public),
                    now,
                    now,
                ),
            )
            conn.commit()
            table_id = cursor.lastrowid
            logger.info(f"Inserted new saved table {table_id} into database")
        except Exception as e:
            conn.rollback()
            logger.error(f"Error creating saved table {table.name}: {e}")
            raise
        finally:
            conn.close()

        return SavedTable(
            id=table_id,
            user_id=table.user_id,
            name=table.name,
            markdown_content=table.markdown_content,
            styles=table.styles,
            is_public=table.is_public,
            created_at=datetime.fromisoformat(now),
            updated_at=datetime.fromisoformat(now),
        )

    def update_saved_table(
        self, table_id: int, user_id: int, changes: Dict[str, Any]
    ) -> Optional[SavedTable]:
        """Apply changes to a table owned by ``user_id``."""
        assignments = []
        values: List[Any] = []
        for column in UPDATABLE_TABLE_COLUMNS:
            if column not in changes:
                continue
            value = changes[column]
            if column == "styles":
                value = json.dumps(value)
            elif column == "is_public":
                value = int(value)
            assignments.append(f"{column} = ?")
            values.append(value)
        assignments.append("updated_at = ?")
        values.append(_now())

        conn = self._connect()
        try:
            cursor = conn.execute(
                f"UPDATE saved_tables SET {', '.join(assignments)} WHERE id = ? AND user_id = ?",
                (*values, table_id, user_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                logger.warning(f"Saved table {table_id} not found for user {user_id}")
                return None
            logger.info(f"Updated saved table {table_id} in database")
        except Exception as e:
            conn.rollback()
            logger.error(f"Error updating saved table {table_id}: {e}")
            return None
        finally:
            conn.close()

        return self.get_saved_table(table_id)

    def delete_saved_table(self, table_id: int, user_id: int) -> bool:
        """Delete a table owned by ``user_id``."""
        return self._delete_owned("saved_tables", table_id, user_id)

    # Custom themes

    def get_custom_theme(self, theme_id: int) -> Optional[CustomTheme]:
        """Get a custom theme by id."""
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {THEME_COLUMNS} FROM custom_themes WHERE id = ?", (theme_id,)
            ).fetchone()
            if not row:
                logger.warning(f"Custom theme {theme_id} not found in database")
                return None
            return _row_to_theme(row)
        except Exception as e:
            logger.error(f"Error loading custom theme {theme_id}: {e}")
            return None
        finally:
            conn.close()

    def get_custom_themes_by_user(self, user_id: int) -> List[CustomTheme]:
        """List a user's custom themes, newest first."""
        return self._list_themes("WHERE user_id = ?", (user_id,))

    def get_public_custom_themes(self) -> List[CustomTheme]:
        """List public custom themes, newest first."""
        return self._list_themes("WHERE is_public = 1", ())

    def _list_themes(self, where: str, params: tuple) -> List[CustomTheme]:
        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT {THEME_COLUMNS} FROM custom_themes {where} "
                "ORDER BY created_at DESC, id DESC",
                params,
            ).fetchall()
            return [_row_to_theme(row) for row in rows]
        except Exception as e:
            logger.error(f"Error listing custom themes: {e}")
            return []
        finally:
            conn.close()

    def create_custom_theme(self, theme: CustomThemeCreate) -> CustomTheme:
        """Create a custom theme."""
        now = _now()
        conn = self._connect()
        try:
            cursor = conn.execute(
                "INSERT INTO custom_themes (user_id, name, styles, is_public, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (theme.user_id, theme.name, json.dumps(theme.styles), int(theme.is_public), now),
            )
            conn.commit()
            theme_id = cursor.lastrowid
            logger.info(f"Inserted new custom theme {theme_id} into database")
        except Exception as e:
            conn.rollback()
            logger.error(f"Error creating custom theme {theme.name}: {e}")
            raise
        finally:
            conn.close()

        return CustomTheme(
            id=theme_id,
            user_id=theme.user_id,
            name=theme.name,
            styles=theme.styles,
            is_public=theme.is_public,
            created_at=datetime.fromisoformat(now),
        )

    def delete_custom_theme(self, theme_id: int, user_id: int) -> bool:
        """Delete a theme owned by ``user_id``."""
        return self._delete_owned("custom_themes", theme_id, user_id)

    def _delete_owned(self, table: str, record_id: int, user_id: int) -> bool:
        conn = self._connect()
        try:
            cursor = conn.execute(
                f"DELETE FROM {table} WHERE id = ? AND user_id = ?", (record_id, user_id)
            )
            conn.commit()
            if cursor.rowcount == 0:
                logger.warning(f"Record {record_id} in {table} not found for user {user_id}")
                return False
            logger.info(f"Deleted record {record_id} from {table}")
            return True
        except Exception as e:
            conn.rollback()
            logger.error(f"Error deleting record {record_id} from {table}: {e}")
            return False
        finally:
            conn.close()
