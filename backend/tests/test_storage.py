"""Test both storage backends against the same behavior."""

from datetime import timedelta

import pytest

from table_beautifier.core.config import Settings
from table_beautifier.schemas.table_api import (
    CustomThemeCreate,
    SavedTableCreate,
    SavedTableUpdate,
    UserCreate,
)
from table_beautifier.services.storage.factory import StorageFactory, sqlite_path_from_url
from table_beautifier.services.storage.sqlalchemy_storage import SQLAlchemyStorage
from table_beautifier.services.storage.sqlite_storage import SQLiteStorage

STYLES = {"fontFamily": "Inter", "fontSize": 14, "stripedRows": True}


@pytest.fixture(params=["sqlite", "sqlalchemy"])
def storage(request, tmp_path):
    """Create a storage backend on a temporary database file."""
    db_path = tmp_path / "data" / "tables.db"
    if request.param == "sqlite":
        return SQLiteStorage(str(db_path))
    return SQLAlchemyStorage(f"sqlite:///{db_path}")


def _table(user_id=1, name="Sales", is_public=False):
    return SavedTableCreate(
        user_id=user_id,
        name=name,
        markdown_content="| a | b |\n|---|---|\n| 1 | 2 |",
        styles=STYLES,
        is_public=is_public,
    )


def _theme(user_id=1, name="Ocean", is_public=False):
    return CustomThemeCreate(user_id=user_id, name=name, styles=STYLES, is_public=is_public)


def test_create_and_get_saved_table(storage):
    """Created tables get an id and timestamps and read back verbatim."""
    created = storage.create_saved_table(_table())

    assert created.id is not None
    assert created.created_at is not None
    assert created.updated_at is not None

    loaded = storage.get_saved_table(created.id)
    assert loaded is not None
    assert loaded.name == "Sales"
    assert loaded.user_id == 1
    assert loaded.styles == STYLES
    assert loaded.is_public is False
    assert loaded.created_at.tzinfo is not None
    assert loaded.updated_at.tzinfo is not None


def test_timestamps_read_back_as_utc(storage):
    """Listings and themes return timezone-aware UTC timestamps."""
    created = storage.create_saved_table(_table(is_public=True))
    theme = storage.create_custom_theme(_theme())

    listed = storage.get_saved_tables_by_user(1)[0]
    public = storage.get_public_saved_tables()[0]
    loaded_theme = storage.get_custom_theme(theme.id)

    for stamp in (listed.created_at, listed.updated_at, public.updated_at, loaded_theme.created_at):
        assert stamp.utcoffset() == timedelta(0)
    assert listed.id == created.id


def test_get_missing_saved_table(storage):
    """Unknown ids read as None."""
    assert storage.get_saved_table(999) is None


def test_list_saved_tables_by_user(storage):
    """Owner listings only include that owner's tables."""
    storage.create_saved_table(_table(user_id=1, name="one"))
    storage.create_saved_table(_table(user_id=1, name="two"))
    storage.create_saved_table(_table(user_id=2, name="other"))

    names = {table.name for table in storage.get_saved_tables_by_user(1)}

    assert names == {"one", "two"}
    assert storage.get_saved_tables_by_user(3) == []


def test_public_listing_excludes_private(storage):
    """Public listings never include private tables."""
    storage.create_saved_table(_table(name="private"))
    storage.create_saved_table(_table(name="shared", is_public=True))

    public = storage.get_public_saved_tables()

    assert [table.name for table in public] == ["shared"]
    assert all(table.is_public for table in public)


def test_update_saved_table_by_owner(storage):
    """Owners may change fields; untouched fields keep their values."""
    created = storage.create_saved_table(_table())
    update = SavedTableUpdate(user_id=1, name="Renamed", is_public=True)

    updated = storage.update_saved_table(created.id, 1, update.changes())

    assert updated is not None
    assert updated.name == "Renamed"
    assert updated.is_public is True
    assert updated.markdown_content == created.markdown_content
    assert updated.styles == STYLES
    assert updated.user_id == 1


def test_update_saved_table_by_non_owner(storage):
    """Non-owners get None and the record is unchanged."""
    created = storage.create_saved_table(_table())

    result = storage.update_saved_table(created.id, 2, {"name": "Hijacked"})

    assert result is None
    assert storage.get_saved_table(created.id).name == "Sales"


def test_update_missing_saved_table(storage):
    """Updating an unknown id looks the same as updating someone else's table."""
    assert storage.update_saved_table(999, 1, {"name": "x"}) is None


def test_update_never_changes_owner(storage):
    """The caller's user id is not written to the record."""
    created = storage.create_saved_table(_table())
    update = SavedTableUpdate.model_validate({"userId": 1, "name": "Kept owner"})

    updated = storage.update_saved_table(created.id, 1, update.changes())

    assert "user_id" not in update.changes()
    assert updated.user_id == 1


def test_delete_saved_table(storage):
    """Only owners delete, and deleted tables are gone."""
    created = storage.create_saved_table(_table())

    assert storage.delete_saved_table(created.id, 2) is False
    assert storage.get_saved_table(created.id) is not None

    assert storage.delete_saved_table(created.id, 1) is True
    assert storage.get_saved_table(created.id) is None
    assert storage.delete_saved_table(created.id, 1) is False


def test_unowned_table_cannot_be_modified(storage):
    """Tables saved without an owner cannot be updated or deleted."""
    created = storage.create_saved_table(_table(user_id=None, is_public=True))

    assert storage.update_saved_table(created.id, 1, {"name": "x"}) is None
    assert storage.delete_saved_table(created.id, 1) is False


def test_custom_themes(storage):
    """Themes follow the same owner and public rules as tables."""
    mine = storage.create_custom_theme(_theme(user_id=1, name="Mine"))
    storage.create_custom_theme(_theme(user_id=2, name="Shared", is_public=True))

    assert storage.get_custom_theme(mine.id).styles == STYLES
    assert storage.get_custom_theme(999) is None
    assert [theme.name for theme in storage.get_custom_themes_by_user(1)] == ["Mine"]
    assert [theme.name for theme in storage.get_public_custom_themes()] == ["Shared"]

    assert storage.delete_custom_theme(mine.id, 2) is False
    assert storage.delete_custom_theme(mine.id, 1) is True
    assert storage.get_custom_theme(mine.id) is None


def test_users(storage):
    """Users are stored with unique usernames."""
    user = storage.create_user(UserCreate(username="ada", password="secret"))

    assert storage.get_user(user.id).username == "ada"
    assert storage.get_user_by_username("ada").id == user.id
    assert storage.get_user_by_username("nobody") is None
    with pytest.raises(Exception):
        storage.create_user(UserCreate(username="ada", password="other"))


def test_sqlite_path_from_url():
    """sqlite URLs map to file paths."""
    assert sqlite_path_from_url("sqlite:///data/tables.db") == "data/tables.db"
    assert sqlite_path_from_url("sqlite:////tmp/tables.db") == "/tmp/tables.db"
    assert sqlite_path_from_url("tables.db") == "tables.db"


def test_storage_factory(tmp_path):
    """The configured backend is selected at construction."""
    url = f"sqlite:///{tmp_path / 'factory.db'}"

    sqlite = StorageFactory.create_storage(
        Settings(_env_file=None, storage_backend="sqlite", dev_database_url=url)
    )
    orm = StorageFactory.create_storage(
        Settings(_env_file=None, storage_backend="sqlalchemy", dev_database_url=url)
    )

    assert isinstance(sqlite, SQLiteStorage)
    assert isinstance(orm, SQLAlchemyStorage)
    with pytest.raises(ValueError, match="Unknown storage backend"):
        StorageFactory.create_storage(
            Settings(_env_file=None, storage_backend="mongo", dev_database_url=url)
        )
