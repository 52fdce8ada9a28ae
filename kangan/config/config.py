"""
Config classes that load settings from the environment and an optional .env file.
"""
import os
import logging
from abc import abstractmethod
from dotenv import load_dotenv

from kangan.models.user_role import Role
from kangan.auth.totp import (
    DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_PERIOD, DEFAULT_WINDOW, DIGESTS, MAX_WINDOW
)

logger = logging.getLogger(__name__)


class BaseConfig():
    """
    Config class that uses a .env file on top of the process environment.
    """
    def __init__(self):
        load_dotenv()
        # Get all environment variables and store them in a dictionary
        self.env_vars = {key: os.getenv(key) for key in os.environ}

    def get_env_vars(self) -> dict:
        """
        Return the dictionary containing all environment variables
        """
        return self.env_vars

    def get_env_var(self, var_name: str, default=None):
        """
        Retrieve the value of the specified environment variable
        Args:
            var_name (str) : Name of the env var to fetch
            default : Value returned when the variable is not set
        """
        if var_name in self.env_vars.keys():
            return self.env_vars[var_name]
        if default is None:
            logger.warning("Variable %s not found.", var_name)
        return default

    def get_int_var(self, var_name: str, default: int) -> int:
        """
        Returns an integer env var, raising ValueError when it is not a number
        """
        value = self.get_env_var(var_name, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.error("Error: %s must be an integer, got %r.", var_name, value)
            raise ValueError(f"{var_name} must be an integer")

    @abstractmethod
    def validate_env_vars(self):
        """
        Abstract method for validation of the env vars.
        """


class TwoFactorConfig(BaseConfig):
    """
    Settings for admin TOTP enrollment and verification.

    TOTP_ISSUER, TOTP_DIGITS, TOTP_PERIOD, TOTP_WINDOW, TOTP_ALGORITHM and
    ADMIN_ROLE are read from the environment; unset values use the defaults
    authenticator apps expect (SHA1, 6 digits, 30 seconds).
    """
    def __init__(self, **overrides):
        super().__init__()
        self.issuer = self._setting(overrides, 'issuer', lambda: self.get_env_var('TOTP_ISSUER', 'HarshKanganStore'))
        self.digits = self._setting(overrides, 'digits', lambda: self.get_int_var('TOTP_DIGITS', DEFAULT_DIGITS))
        self.period = self._setting(overrides, 'period', lambda: self.get_int_var('TOTP_PERIOD', DEFAULT_PERIOD))
        self.window = self._setting(overrides, 'window', lambda: self.get_int_var('TOTP_WINDOW', DEFAULT_WINDOW))
        self.algorithm = self._setting(
            overrides, 'algorithm', lambda: self.get_env_var('TOTP_ALGORITHM', DEFAULT_ALGORITHM)).upper()
        self.admin_role = self._setting(overrides, 'admin_role', lambda: self.get_env_var('ADMIN_ROLE', 'admin'))
        self.validate_env_vars()

    @staticmethod
    def _setting(overrides: dict, name: str, load_from_env):
        if name in overrides:
            return overrides[name]
        return load_from_env()

    def validate_env_vars(self):
        if not 0 <= self.window <= MAX_WINDOW:
            raise ValueError(f"TOTP_WINDOW must be between 0 and {MAX_WINDOW}")
        if self.digits not in (6, 7, 8):
            raise ValueError("TOTP_DIGITS must be 6, 7 or 8")
        if self.period <= 0:
            raise ValueError("TOTP_PERIOD must be positive")
        if self.algorithm not in DIGESTS:
            raise ValueError(f"TOTP_ALGORITHM must be one of {', '.join(DIGESTS)}")
        if not self.issuer:
            raise ValueError("TOTP_ISSUER must not be empty")
        try:
            role = Role(self.admin_role)
        except ValueError:
            raise ValueError(f"ADMIN_ROLE {self.admin_role!r} is not a known role") from None
        if role is Role.CUSTOMER:
            raise ValueError("ADMIN_ROLE must not be the customer role")
