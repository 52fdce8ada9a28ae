"""
Admin login flow: password, role check, then TOTP enrollment or verification.

    UNAUTHENTICATED -> PASSWORD_VERIFIED -> NEEDS_ENROLLMENT
                                         -> NEEDS_CODE_VERIFICATION -> FULLY_AUTHENTICATED

An enrollment login never grants access: the backend session is signed out
as soon as the secret is stored, and the admin signs in again to prove
possession of the authenticator with a code.
"""
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from kangan.config import TwoFactorConfig
from kangan.models import Role
from .base import AuthSession, PasswordAuthService
from .errors import (
    AccessDeniedError, LoginStateError, StoreUnavailableError, TwoFactorError,
    VerificationFailedError
)
from .qr import render_to_image
from .totp import build_provisioning_uri, generate_secret, verify_code

logger = logging.getLogger(__name__)


class LoginState(str, Enum):
    UNAUTHENTICATED = 'unauthenticated'
    PASSWORD_VERIFIED = 'password_verified'
    NEEDS_ENROLLMENT = 'needs_enrollment'
    NEEDS_CODE_VERIFICATION = 'needs_code_verification'
    FULLY_AUTHENTICATED = 'fully_authenticated'

    def __str__(self):
        return str(self.value)


@dataclass
class LoginAttempt:
    """State of one admin login, handed back to the caller between steps."""

    state: LoginState = LoginState.UNAUTHENTICATED
    account_id: Optional[str] = None
    email: Optional[str] = None
    provisioning_uri: Optional[str] = field(default=None, repr=False)
    session: Optional[AuthSession] = field(default=None, repr=False)
    matched_offset: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state is LoginState.FULLY_AUTHENTICATED

    @property
    def access_token(self) -> Optional[str]:
        """The backend token, released only once the second factor is proven."""
        if not self.is_authenticated or self.session is None:
            return None
        return self.session.access_token


class LoginController:
    """
    Drives the admin login state machine over injected collaborators.

    auth_service verifies passwords and revokes sessions, credentials stores
    one TOTP secret per account (get_secret / insert_if_absent) and roles
    answers get_role_by_email / has_role.
    """

    def __init__(
        self,
        auth_service: PasswordAuthService,
        credentials,
        roles,
        config: TwoFactorConfig = None,
        renderer: Callable[[str], bytes] = render_to_image,
        clock: Callable[[], float] = time.time
    ):
        self.auth_service = auth_service
        self.credentials = credentials
        self.roles = roles
        self.config = config if config is not None else TwoFactorConfig()
        self.renderer = renderer
        self.clock = clock
        self.admin_role = Role(self.config.admin_role)
        if self.admin_role is Role.CUSTOMER:
            raise ValueError("admin_role must not be the customer role")

    def login(self, email: str, password: str) -> LoginAttempt:
        """
        Check role and password, then start enrollment or code verification.

        Raises AccessDeniedError for non-admins before any session exists,
        InvalidCredentialsError for a wrong password and a retryable error
        when the store or auth service is unavailable.
        """
        email = email.strip()
        attempt = LoginAttempt(email=email)

        if self.roles.get_role_by_email(email) != self.admin_role:
            logger.info("Admin login refused before password check: not an admin.")
            raise AccessDeniedError()

        session = self.auth_service.sign_in_with_password(email, password)
        attempt.session = session
        attempt.account_id = session.user_id
        attempt.email = session.email or email
        attempt.state = LoginState.PASSWORD_VERIFIED

        try:
            if not self.roles.has_role(session.user_id, self.admin_role):
                logger.warning("Account %s passed the e-mail role check but is not an admin.",
                               session.user_id)
                raise AccessDeniedError()

            if self.credentials.get_secret(session.user_id) is None:
                return self._enroll(attempt)
        except Exception:
            self._discard_session(attempt)
            raise

        attempt.state = LoginState.NEEDS_CODE_VERIFICATION
        logger.info("Account %s awaiting two-factor code.", attempt.account_id)
        return attempt

    def _enroll(self, attempt: LoginAttempt) -> LoginAttempt:
        secret = generate_secret()
        if not self.credentials.insert_if_absent(attempt.account_id, secret):
            secret = self.credentials.get_secret(attempt.account_id)
            if secret is None:
                raise StoreUnavailableError()

        provisioning_uri = build_provisioning_uri(
            secret,
            issuer=self.config.issuer,
            account_label=attempt.email,
            algorithm=self.config.algorithm,
            digits=self.config.digits,
            period=self.config.period
        )

        session, attempt.session = attempt.session, None
        try:
            self.auth_service.sign_out(session)
        except TwoFactorError:
            logger.warning("Could not revoke session for account %s after enrollment.",
                           session.user_id)
        attempt.provisioning_uri = provisioning_uri
        attempt.state = LoginState.NEEDS_ENROLLMENT
        logger.info("Account %s enrolled in two-factor authentication.", attempt.account_id)
        return attempt

    def _discard_session(self, attempt: LoginAttempt):
        session, attempt.session = attempt.session, None
        attempt.state = LoginState.UNAUTHENTICATED
        if session is None:
            return
        try:
            self.auth_service.sign_out(session)
        except TwoFactorError:
            logger.warning("Could not revoke session for account %s during failed login.",
                           session.user_id)

    def verify(self, attempt: LoginAttempt, code: str, now: float = None) -> LoginAttempt:
        """
        Accept the login when code matches the stored secret within the drift window.

        A rejected code leaves the attempt waiting for another code and raises
        VerificationFailedError.
        """
        if attempt.state is not LoginState.NEEDS_CODE_VERIFICATION or attempt.session is None:
            raise LoginStateError()

        secret = self.credentials.get_secret(attempt.account_id)
        if secret is None:
            logger.warning("Account %s has no stored credential at verification.",
                           attempt.account_id)
            raise VerificationFailedError()

        result = verify_code(
            secret,
            code,
            for_time=self.clock() if now is None else now,
            window=self.config.window,
            digits=self.config.digits,
            period=self.config.period,
            algorithm=self.config.algorithm
        )
        if not result:
            logger.info("Rejected two-factor code for account %s.", attempt.account_id)
            raise VerificationFailedError()

        attempt.state = LoginState.FULLY_AUTHENTICATED
        attempt.matched_offset = result.offset
        logger.info("Account %s fully authenticated (step offset %d).",
                    attempt.account_id, result.offset)
        return attempt

    def render_enrollment_qr(self, attempt: LoginAttempt) -> bytes:
        """PNG image of the provisioning URI for an attempt that just enrolled."""
        if attempt.state is not LoginState.NEEDS_ENROLLMENT or not attempt.provisioning_uri:
            raise LoginStateError()
        return self.renderer(attempt.provisioning_uri)

    def logout(self, attempt: LoginAttempt) -> LoginAttempt:
        session, attempt.session = attempt.session, None
        attempt.state = LoginState.UNAUTHENTICATED
        attempt.provisioning_uri = None
        attempt.matched_offset = None
        if session is not None:
            self.auth_service.sign_out(session)
            logger.info("Account %s logged out.", session.user_id)
        return attempt
