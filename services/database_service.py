import sqlite3
import json
import logging
from datetime import datetime

import psycopg2
from psycopg2.extras import Json, RealDictCursor

from config import Config
from services.errors import ErrorKind, PredictionError

logger = logging.getLogger("tipster")

PENDING = "pending"

POSTGRES_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS predictions (
        id SERIAL PRIMARY KEY,
        team_a TEXT,
        team_b TEXT,
        match_category TEXT,
        prediction_data JSONB,
        status TEXT DEFAULT 'pending',
        created_at TIMESTAMPTZ DEFAULT NOW()
    )
'''

SQLITE_SCHEMA = '''
    CREATE TABLE IF NOT EXISTS predictions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        team_a TEXT,
        team_b TEXT,
        match_category TEXT,
        prediction_data TEXT,
        status TEXT DEFAULT 'pending',
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
'''

DB_ERRORS = (psycopg2.Error, sqlite3.Error)


class DatabaseService:
    """
    Stores predictions in Postgres when DATABASE_URL is set, otherwise in a
    local sqlite file. Each call opens and closes its own connection.
    """

    def __init__(self, db_url=None, service_key=None, sqlite_path=None):
        config = Config()
        self.db_url = db_url if db_url is not None else config.database_url
        self.service_key = service_key if service_key is not None else config.database_service_key
        self.sqlite_path = sqlite_path or config.sqlite_path
        self._schema_ready = False

    @property
    def backend(self):
        return "postgres" if self.db_url else "sqlite"

    def _get_connection(self):
        if self.db_url:
            if self.service_key:
                return psycopg2.connect(self.db_url, password=self.service_key)
            return psycopg2.connect(self.db_url)
        return sqlite3.connect(self.sqlite_path)

    def _get_placeholder(self):
        return "%s" if self.db_url else "?"

    def _ensure_schema(self, conn):
        if self._schema_ready:
            return
        cursor = conn.cursor()
        cursor.execute(POSTGRES_SCHEMA if self.db_url else SQLITE_SCHEMA)
        conn.commit()
        self._schema_ready = True

    def _row_to_dict(self, cursor, row):
        if self.db_url:
            pred = dict(row)
        else:
            columns = [col[0] for col in cursor.description]
            pred = dict(zip(columns, row))
            if isinstance(pred.get('prediction_data'), str):
                pred['prediction_data'] = json.loads(pred['prediction_data'])
        if isinstance(pred.get('created_at'), datetime):
            pred['created_at'] = pred['created_at'].isoformat()
        return pred

    def save_prediction(self, team_a, team_b, match_category, prediction_data):
        """Insert one pending prediction and return the stored row."""
        try:
            conn = self._get_connection()
        except DB_ERRORS as e:
            logger.error(f"DB Error connecting: {e}")
            raise PredictionError(ErrorKind.STORAGE_FAILURE, f"Failed to save prediction to the database: {e}") from e

        try:
            self._ensure_schema(conn)
            ph = self._get_placeholder()

            if self.db_url:
                cursor = conn.cursor(cursor_factory=RealDictCursor)
                cursor.execute(f'''
                    INSERT INTO predictions (team_a, team_b, match_category, prediction_data, status)
                    VALUES ({ph}, {ph}, {ph}, {ph}, {ph})
                    RETURNING *
                ''', (team_a, team_b, match_category, Json(prediction_data), PENDING))
                row = cursor.fetchone()
            else:
                cursor = conn.cursor()
                cursor.execute(f'''
                    INSERT INTO predictions (team_a, team_b, match_category, prediction_data, status)
                    VALUES ({ph}, {ph}, {ph}, {ph}, {ph})
                ''', (team_a, team_b, match_category, json.dumps(prediction_data), PENDING))
                cursor.execute(f"SELECT * FROM predictions WHERE id = {ph}", (cursor.lastrowid,))
                row = cursor.fetchone()

            conn.commit()
            return self._row_to_dict(cursor, row)
        except DB_ERRORS as e:
            logger.error(f"DB Error saving prediction: {e}")
            raise PredictionError(ErrorKind.STORAGE_FAILURE, f"Failed to save prediction to the database: {e}") from e
        finally:
            conn.close()

    def get_recent_predictions(self, limit=20):
        try:
            conn = self._get_connection()
        except DB_ERRORS as e:
            logger.error(f"DB Error connecting: {e}")
            raise PredictionError(ErrorKind.STORAGE_FAILURE, f"Failed to read predictions from the database: {e}") from e

        try:
            self._ensure_schema(conn)
            if self.db_url:
                cursor = conn.cursor(cursor_factory=RealDictCursor)
            else:
                cursor = conn.cursor()

            ph = self._get_placeholder()
            cursor.execute(f'SELECT * FROM predictions ORDER BY created_at DESC, id DESC LIMIT {ph}', (limit,))
            return [self._row_to_dict(cursor, row) for row in cursor.fetchall()]
        except DB_ERRORS as e:
            logger.error(f"DB Error fetching recent predictions: {e}")
            raise PredictionError(ErrorKind.STORAGE_FAILURE, f"Failed to read predictions from the database: {e}") from e
        finally:
            conn.close()
