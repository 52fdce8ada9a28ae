"""
Errors raised by the admin two-factor login.

Every error carries a ``retryable`` flag. Retryable errors come from an
unavailable dependency; the UI boundary shows them as a generic
"try again" and never treats them as permission to proceed.
"""


class TwoFactorError(Exception):
    """Base class for admin login errors."""

    retryable = False
    public_message = "Login failed. Please try again."

    def __init__(self, message: str = None):
        super().__init__(message or self.public_message)


class InputError(TwoFactorError):
    """A submitted code has the wrong length or contains non-digits."""

    public_message = "Verification failed."


class SecretUnavailableError(TwoFactorError):
    """The secure random source could not produce a secret."""

    retryable = True
    public_message = "Could not set up two-factor authentication. Please try again."


class StoreUnavailableError(TwoFactorError):
    """The credential or role store could not be reached or the query failed."""

    retryable = True
    public_message = "Service temporarily unavailable. Please try again."


class AuthServiceUnavailableError(TwoFactorError):
    """The password authentication service timed out or returned a server error."""

    retryable = True
    public_message = "Service temporarily unavailable. Please try again."


class InvalidCredentialsError(TwoFactorError):
    public_message = "Invalid email or password."


class AccessDeniedError(TwoFactorError):
    """The account is not an admin. Shown to the user exactly like a wrong password."""

    public_message = InvalidCredentialsError.public_message


class VerificationFailedError(TwoFactorError):
    """
    A code was rejected. The message is identical for malformed codes,
    mismatches and accounts without a credential.
    """

    public_message = "Invalid 2FA code."


class LoginStateError(TwoFactorError):
    """An operation was attempted from a login state that does not allow it."""

    public_message = "Login session expired. Please sign in again."
