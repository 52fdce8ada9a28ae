"""
Models for kangan
"""

from .base_model import BaseModel, ModelValidationError
from .two_factor_credential import TwoFactorCredential
from .user_role import Role, UserRole
