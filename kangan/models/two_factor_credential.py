"""
TwoFactorCredential model
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from .base_model import BaseModel

BASE32_SECRET = re.compile(r'^[A-Z2-7]+=*$')


@dataclass(kw_only=True)
class TwoFactorCredential(BaseModel):
    """The TOTP shared secret of one admin account."""

    __table__ = 'admin_twofactor'

    user_id: Optional[str] = field(default=None, metadata={'field_type': 'entity_id'})
    secret: Optional[str] = None

    def __repr__(self) -> str:
        return f"TwoFactorCredential(entity_id={self.entity_id}, user_id={self.user_id})"

    def validate_user_id(self):
        if not self.user_id:
            return "user_id is required"

    def validate_secret(self):
        if not self.secret or not BASE32_SECRET.match(self.secret):
            return "secret must be a base32 string"
