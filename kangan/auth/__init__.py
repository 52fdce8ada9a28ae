from .config import Config, SupabaseConfig, AuthConfig
from .base import AuthSession, PasswordAuthService
from .supabase import SupabaseAuthService
from .factory import auth_factory
from .enums import AuthProvider
from .errors import (
    TwoFactorError, InputError, SecretUnavailableError, StoreUnavailableError,
    AuthServiceUnavailableError, InvalidCredentialsError, AccessDeniedError,
    VerificationFailedError, LoginStateError
)
from .totp import (
    VerificationResult, generate_secret, build_provisioning_uri, compute_code, verify_code
)
from .qr import render_to_image


__all__ = [
    'Config',
    'SupabaseConfig',
    'AuthConfig',
    'AuthSession',
    'PasswordAuthService',
    'SupabaseAuthService',
    'auth_factory',
    'AuthProvider',
    'TwoFactorError',
    'InputError',
    'SecretUnavailableError',
    'StoreUnavailableError',
    'AuthServiceUnavailableError',
    'InvalidCredentialsError',
    'AccessDeniedError',
    'VerificationFailedError',
    'LoginStateError',
    'VerificationResult',
    'generate_secret',
    'build_provisioning_uri',
    'compute_code',
    'verify_code',
    'render_to_image',
]
