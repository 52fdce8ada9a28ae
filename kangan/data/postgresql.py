import logging
import threading
import psycopg2
from uuid import UUID
from typing import Any, Dict, List, Tuple, Optional, Callable

from kangan.data.base import DbAdapter

logger = logging.getLogger(__name__)


class PostgreSQLAdapter(DbAdapter):
    """PostgreSQL adapter for the storefront database."""

    def __init__(self, host: str, port: int, user: str, password: str, database: str,
                 connect_timeout: int = 10,
                 connection_resolver: Optional[Callable] = None,
                 connection_closer: Optional[Callable] = None):
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._database = database
        self._connect_timeout = connect_timeout
        # Connection and cursor are held per thread.
        self._local = threading.local()

        if connection_resolver is None:
            self._connection_resolver = psycopg2.connect
        else:
            self._connection_resolver = connection_resolver

        self._connection_closer = connection_closer

    @property
    def _connection(self):
        return getattr(self._local, "connection", None)

    @_connection.setter
    def _connection(self, value):
        self._local.connection = value

    @property
    def _cursor(self):
        return getattr(self._local, "cursor", None)

    @_cursor.setter
    def _cursor(self, value):
        self._local.cursor = value

    def __enter__(self):
        """Context manager entry point for creating DB connection."""
        self._connection = self.connect
        self._cursor = self._connection.cursor()

        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Context manager exit point for closing DB connection."""
        self.close_connection()

    def close_connection(self):
        """Closes the connection and cursor."""

        if self._connection_closer:
            self._connection_closer(self)
        else:
            if self._cursor is not None:
                self._cursor.close()
                self._cursor = None

            if self._connection is not None:
                self._connection.close()
                self._connection = None

    @property
    def connect(self):
        return self._connection_resolver(
            host=self._host,
            port=self._port,
            user=self._user,
            password=self._password,
            database=self._database,
            connect_timeout=self._connect_timeout
        )

    def _call_cursor(self, function_name, *args, **kwargs):
        """Calls a function specified by function_name argument in PostgreSQL Cursor passing forward args and kwargs."""
        if not self._cursor:
            raise Exception("No cursor is available.")
        return getattr(self._cursor, function_name)(*args, **kwargs)

    def _build_condition_string(self, table, key, value):
        if '.' not in key:
            key = f"{table}.{key}"

        if isinstance(value, (str, bool, int, float)):
            return f"{key} = %s", [value]
        elif isinstance(value, list):
            placeholders = ', '.join(['%s'] * len(value))
            return f"{key} IN ({placeholders})", value
        elif isinstance(value, UUID):
            return f"{key} = %s", [str(value)]
        elif value is None:
            return f"{key} IS NULL", []
        else:
            raise Exception(
                f"Unsupported type {type(value)} for condition key: {key}, value: {value}")

    def _rows_as_dicts(self):
        column_names = [desc[0] for desc in self._cursor.description]
        return [dict(zip(column_names, row)) for row in self._call_cursor('fetchall')]

    def execute_query(self, sql, _vars=None):
        """Executes a query against the DB."""
        if _vars is None:
            _vars = ()

        try:
            self._call_cursor('execute', sql, _vars)
            if sql.strip().upper().startswith("SELECT"):
                return self._rows_as_dicts()
            self._connection.commit()
            return None
        except psycopg2.Error as ex:
            self._connection.rollback()
            logger.error("Error in SQL:\n%s", ex)
            raise

    def get_one(
            self,
            table: str,
            conditions: Dict[str, Any],
            sort: List[Tuple[str, str]] = None,
            join_statements: list = None,
            additional_fields: list = None
    ) -> Optional[Dict[str, Any]]:
        fields = [f'{table}.*']
        if additional_fields:
            fields += additional_fields

        query = f"SELECT {', '.join(fields)} FROM {table}"
        if join_statements:
            for join_stmt in join_statements:
                query += f"""\n{join_stmt}\n"""

        condition_strs_values = []
        if conditions:
            condition_strs_values = [self._build_condition_string(
                table, k, v) for k, v in conditions.items()]
        if condition_strs_values:
            query += f" WHERE {' AND '.join([condition_str for condition_str, condition_value in condition_strs_values])}"

        if sort:
            sort_strs = [f"{column} {direction}" for column, direction in sort]
            query += f" ORDER BY {', '.join(sort_strs)}"
        query += " LIMIT 1"

        values = sum((condition_value for condition_str,
                     condition_value in condition_strs_values), [])

        rows = self.execute_query(query, tuple(values))
        if not rows:
            return None
        return rows[0]

    def get_insert_if_absent_query(self, table: str, data: Dict[str, Any], conflict_column: str):
        """Returns a single-statement insert that does nothing when conflict_column already exists."""
        columns = ', '.join(data.keys())
        placeholders = ', '.join(['%s'] * len(data))
        query = (
            f"INSERT INTO {table} ({columns}) "
            f"VALUES ({placeholders}) "
            f"ON CONFLICT ({conflict_column}) DO NOTHING "
            f"RETURNING {conflict_column}"
        )
        return query, tuple(data.values())

    def insert_if_absent(self, table: str, data: Dict[str, Any], conflict_column: str) -> bool:
        query, values = self.get_insert_if_absent_query(table, data, conflict_column)
        try:
            self._call_cursor('execute', query, values)
            inserted = self._call_cursor('fetchone') is not None
            self._connection.commit()
        except psycopg2.Error as ex:
            self._connection.rollback()
            logger.error("Insert into %s failed:\n%s", table, ex)
            raise
        if not inserted:
            logger.info("Row for %s already present in %s, insert skipped.", conflict_column, table)
        return inserted
