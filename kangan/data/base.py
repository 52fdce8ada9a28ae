from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple, Optional


class DbAdapter(ABC):
    """Abstract base class for database adapters."""

    @abstractmethod
    def __enter__(self) -> 'DbAdapter':
        """Context manager entry point for preparing DB connection."""
        pass

    @abstractmethod
    def __exit__(self, exc_type, exc_value, traceback):
        """Context manager exit point for closing DB connection."""
        pass

    @abstractmethod
    def execute_query(self, sql: str, _vars: Tuple[Any, ...] = None) -> Any:
        """Executes a raw SQL query against the DB."""
        pass

    @abstractmethod
    def get_one(self, table: str, conditions: Dict[str, Any],
                sort: List[Tuple[str, str]] = None,
                join_statements: list = None) -> Optional[Dict[str, Any]]:
        """Fetches a single record from the specified table based on given conditions."""
        pass

    @abstractmethod
    def insert_if_absent(self, table: str, data: Dict[str, Any],
                         conflict_column: str) -> bool:
        """
        Inserts a record unless a row with the same conflict_column value exists.
        Returns True if this call wrote the row, False if it already existed.
        """
        pass
