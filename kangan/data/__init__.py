"""data module"""

from .base import DbAdapter
from .postgresql import PostgreSQLAdapter
