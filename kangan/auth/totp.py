"""
TOTP secret generation, provisioning URIs and code validation.

Codes follow RFC 6238: the counter is floor(unix_time / period) and each
code is the RFC 4226 dynamic truncation of HMAC(secret, counter), reduced
modulo 10**digits and zero padded. Secrets and URIs produced here are
equivalent to the shared secret and must never be logged.
"""
import hashlib
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union
from urllib.parse import quote, urlencode

import pyotp
from pyotp.utils import strings_equal

from .errors import InputError, SecretUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_SECRET_LENGTH = 32
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_ALGORITHM = 'SHA1'
DEFAULT_WINDOW = 1
MAX_WINDOW = 2

DIGESTS = {
    'SHA1': hashlib.sha1,
    'SHA256': hashlib.sha256,
    'SHA512': hashlib.sha512,
}


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a code check. offset is the matched time step relative to now."""

    accepted: bool
    offset: Optional[int] = None

    def __bool__(self):
        return self.accepted


def _digest_for(algorithm: str):
    try:
        return DIGESTS[algorithm.upper()]
    except KeyError:
        raise ValueError(f"Unsupported TOTP algorithm: {algorithm}")


def _timestamp(for_time: Union[int, float, datetime]) -> float:
    if isinstance(for_time, datetime):
        return for_time.timestamp()
    return for_time


def _totp(secret: str, digits: int, period: int, algorithm: str) -> pyotp.TOTP:
    return pyotp.TOTP(secret, digits=digits, digest=_digest_for(algorithm), interval=period)


def generate_secret(length: int = DEFAULT_SECRET_LENGTH) -> str:
    """
    Generate a fresh base32 secret (A-Z, 2-7) of `length` characters.

    The default of 32 characters carries 160 bits. Randomness comes from the
    OS CSPRNG only; if it is unavailable SecretUnavailableError is raised and
    no secret is produced.
    """
    if length < DEFAULT_SECRET_LENGTH:
        raise ValueError(f"Secrets must be at least {DEFAULT_SECRET_LENGTH} base32 characters")
    try:
        return pyotp.random_base32(length=length)
    except (OSError, NotImplementedError) as ex:
        logger.error("Secure random source unavailable: %s", type(ex).__name__)
        raise SecretUnavailableError() from ex


def build_provisioning_uri(
    secret: str,
    issuer: str,
    account_label: str,
    algorithm: str = DEFAULT_ALGORITHM,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD
) -> str:
    """
    Build the otpauth:// key URI for authenticator apps.

    issuer and account_label are percent-encoded, so reserved characters such
    as ':' or '@' in the label are kept. The secret is emitted unchanged.
    """
    label = f"{quote(issuer, safe='')}:{quote(account_label, safe='')}"
    params = urlencode(
        [
            ('secret', secret),
            ('issuer', issuer),
            ('algorithm', algorithm.upper()),
            ('digits', digits),
            ('period', period),
        ],
        quote_via=quote
    )
    return f"otpauth://totp/{label}?{params}"


def time_counter(for_time: Union[int, float, datetime], period: int = DEFAULT_PERIOD) -> int:
    return int(_timestamp(for_time) // period)


def compute_code(
    secret: str,
    for_time: Union[int, float, datetime],
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    algorithm: str = DEFAULT_ALGORITHM,
    counter_offset: int = 0
) -> str:
    """Zero-padded code for the time step containing for_time, shifted by counter_offset steps."""
    counter = time_counter(for_time, period) + counter_offset
    return _totp(secret, digits, period, algorithm).generate_otp(counter)


def check_code_format(code, digits: int = DEFAULT_DIGITS) -> str:
    """Raise InputError unless code is a string of exactly `digits` ASCII digits."""
    if not isinstance(code, str) or len(code) != digits:
        raise InputError()
    if not (code.isascii() and code.isdigit()):
        raise InputError()
    return code


def candidate_offsets(window: int):
    """Offsets 0, -1, +1, -2, +2 ... up to window, nearest first."""
    yield 0
    for distance in range(1, window + 1):
        yield -distance
        yield distance


def verify_code(
    secret: str,
    code,
    for_time: Union[int, float, datetime, None] = None,
    window: int = DEFAULT_WINDOW,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    algorithm: str = DEFAULT_ALGORITHM
) -> VerificationResult:
    """
    Check a submitted code against every time step within `window` of for_time.

    Malformed codes are rejected before any candidate is computed. Codes are
    compared as digit strings in constant time, so leading zeros matter.
    """
    if not 0 <= window <= MAX_WINDOW:
        raise ValueError(f"window must be between 0 and {MAX_WINDOW}")

    try:
        check_code_format(code, digits)
    except InputError:
        logger.info("Rejected malformed verification code.")
        return VerificationResult(accepted=False)

    if for_time is None:
        for_time = time.time()

    totp = _totp(secret, digits, period, algorithm)
    counter = time_counter(for_time, period)
    for offset in candidate_offsets(window):
        if counter + offset < 0:
            continue
        if strings_equal(code, totp.generate_otp(counter + offset)):
            return VerificationResult(accepted=True, offset=offset)
    return VerificationResult(accepted=False)
