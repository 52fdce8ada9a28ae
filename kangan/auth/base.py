from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from .config import Config


@dataclass
class AuthSession:
    """A backend session issued after a successful password check."""

    user_id: str
    email: str
    access_token: str = field(repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)


class PasswordAuthService(ABC):
    """
        Base class for password authentication providers
    """
    config: Config

    @abstractmethod
    def __init__(self):
        pass

    @abstractmethod
    def __call__(self, config: Config, *args, **kwargs):
        self.config = config

    @abstractmethod
    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Verifies the password and returns the issued session.
        Raises InvalidCredentialsError on a wrong e-mail or password.
        """
        raise NotImplementedError

    @abstractmethod
    def sign_out(self, session: AuthSession) -> None:
        """
        Revokes a session issued by sign_in_with_password
        """
        raise NotImplementedError
