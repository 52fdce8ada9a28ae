from .base_repository import BaseRepository
from .two_factor_credential_repository import TwoFactorCredentialRepository
from .user_role_repository import UserRoleRepository
