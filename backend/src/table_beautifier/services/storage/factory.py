"""Storage factory."""

import logging

from table_beautifier.core.config import Settings
from table_beautifier.services.storage.base import TableStorage
from table_beautifier.services.storage.sqlalchemy_storage import SQLAlchemyStorage
from table_beautifier.services.storage.sqlite_storage import SQLiteStorage

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"


def sqlite_path_from_url(url: str) -> str:
    """Filesystem path of a ``sqlite:///`` URL; other strings pass through."""
    if url.startswith(SQLITE_URL_PREFIX):
        return url[len(SQLITE_URL_PREFIX):]
    return url


class StorageFactory:
    """The factory for the storage backends."""

    @staticmethod
    def create_storage(settings: Settings) -> TableStorage:
        """Create the storage backend named by the settings."""
        url = settings.get_database_url()
        if not url:
            raise ValueError("No database URL configured")

        backend = settings.storage_backend
        logger.info(f"Creating storage backend: {backend}")

        if backend == "sqlite":
            return SQLiteStorage(sqlite_path_from_url(url))
        elif backend == "sqlalchemy":
            return SQLAlchemyStorage(url)
        else:
            raise ValueError(f"Unknown storage backend: {backend}")
