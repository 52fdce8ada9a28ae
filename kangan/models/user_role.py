"""
UserRole model
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .base_model import BaseModel


class Role(str, Enum):
    ADMIN = 'admin'
    CUSTOMER = 'customer'

    def __str__(self):
        return str(self.value)

    @classmethod
    def parse(cls, value) -> "Role":
        """Unknown or missing roles carry no privilege."""
        try:
            return cls(value)
        except ValueError:
            return cls.CUSTOMER


@dataclass(kw_only=True)
class UserRole(BaseModel):
    """A storefront user's role."""

    __table__ = 'user_roles'

    user_id: Optional[str] = field(default=None, metadata={'field_type': 'entity_id'})
    role: Role = Role.CUSTOMER

    def __post_init__(self):
        self.role = Role.parse(self.role)
