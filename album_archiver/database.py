"""
PostgreSQL access to the photo upload album links table.
"""

from typing import Any, List, Optional
import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from .models import LinkRecord
from .config import Settings
from .logging import get_logger


class LinkStoreError(Exception):
    """Custom exception for database errors."""
    pass


class LinkStore:
    """Reads and retags album links over a single database connection.
    
    The connection runs in autocommit mode, so every UPDATE is committed on
    its own and a failure part way through a code leaves earlier rows archived.
    """
    
    def __init__(self, settings: Settings, connection: Optional[Any] = None):
        self.logger = get_logger("database")
        self.table = sql.Identifier(*settings.links_table.split("."))
        self.conn = connection if connection is not None else self._connect(settings)
    
    def _connect(self, settings: Settings):
        """Open the connection described by the settings."""
        options = {}
        if settings.db_sslmode:
            options["sslmode"] = settings.db_sslmode
        try:
            conn = psycopg.connect(
                settings.database_url,
                autocommit=True,
                row_factory=dict_row,
                **options
            )
        except psycopg.Error as e:
            raise LinkStoreError(f"Could not connect to database: {e}") from e
        self.logger.debug(f"🔌 Connected to database, using table {settings.links_table}")
        return conn
    
    def fetch_links(self, album_code: str) -> List[LinkRecord]:
        """Get every link whose album code equals ``album_code`` exactly."""
        query = sql.SQL(
            'SELECT "Id", "LinkedDateTime" FROM {table} WHERE "AlbumCode" = %s'
        ).format(table=self.table)
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, (album_code,))
                rows = cur.fetchall()
        except psycopg.Error as e:
            raise LinkStoreError(f"Failed to fetch links for {album_code}: {e}") from e
        
        return [LinkRecord(id=row["Id"], linked_at=row["LinkedDateTime"]) for row in rows]
    
    def set_album_code(self, record_id: Any, album_code: str) -> int:
        """Set the album code of a single link, matched by its Id.
        
        Returns:
            Number of rows updated
        """
        query = sql.SQL(
            'UPDATE {table} SET "AlbumCode" = %s WHERE "Id" = %s'
        ).format(table=self.table)
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, (album_code, record_id))
                return cur.rowcount
        except psycopg.Error as e:
            raise LinkStoreError(f"Failed to update link {record_id}: {e}") from e
    
    def close(self):
        """Release the connection. Safe to call more than once."""
        if self.conn is None:
            return
        self.conn.close()
        self.conn = None
        self.logger.debug("🔌 Database connection closed")
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
