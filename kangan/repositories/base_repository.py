"""
base repository for kangan
"""
import logging
from typing import Any, Dict, Type, Union

import psycopg2

from kangan.auth.errors import StoreUnavailableError
from kangan.data.base import DbAdapter
from kangan.models.base_model import BaseModel

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    BaseRepository class
    """

    def __init__(
        self,
        adapter: DbAdapter,
        model: Type[BaseModel]
    ):
        self.adapter = adapter
        self.model = model
        self.table_name = getattr(model, '__table__', model.__name__.lower())

    def _execute_within_context(
        self,
        func,
        *args,
        **kwargs
    ):
        """Run an adapter method inside the adapter's connection context, mapping driver errors."""
        try:
            with self.adapter:
                return func(*args, **kwargs)
        except psycopg2.Error as ex:
            logger.error("Store call on %s failed: %s", self.table_name, type(ex).__name__)
            raise StoreUnavailableError() from ex

    def get_one(
        self,
        conditions: Dict[str, Any]
    ) -> Union[BaseModel, None]:
        """
        Fetches a single record from the repository's table based on given conditions.

        :param conditions: filter conditions
        :return: a model instance if found, None otherwise
        """
        data = self._execute_within_context(
            self.adapter.get_one,
            self.table_name,
            conditions
        )

        if not data:
            return None
        return self.model.from_dict(data)

    def insert_if_absent(
        self,
        instance: BaseModel,
        conflict_column: str
    ) -> bool:
        """
        Inserts the instance unless a row with the same conflict_column value exists.

        :param instance: the model instance to write
        :param conflict_column: unique column used to detect an existing row
        :return: True if the row was written, False if one already existed
        """
        instance.prepare_for_save()
        data = instance.as_dict(convert_datetime_to_iso_string=False)
        return self._execute_within_context(
            self.adapter.insert_if_absent,
            self.table_name,
            data,
            conflict_column
        )
