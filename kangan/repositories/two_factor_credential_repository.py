import logging
from typing import Optional

from kangan.data.base import DbAdapter
from kangan.models import TwoFactorCredential
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TwoFactorCredentialRepository(BaseRepository):
    """Stores one TOTP secret per admin account. admin_twofactor.user_id is UNIQUE."""

    def __init__(self, adapter: DbAdapter):
        super().__init__(adapter, TwoFactorCredential)

    def get_secret(self, user_id: str) -> Optional[str]:
        """Returns the stored secret for user_id, or None when the account has not enrolled."""
        credential = self.get_one({'user_id': user_id})
        if credential is None:
            return None
        return credential.secret

    def insert_if_absent(self, user_id: str, secret: str) -> bool:
        """
        Writes the secret for user_id unless one is already stored.

        Returns False when another login won the race; the caller must then
        re-read the stored secret with get_secret.
        """
        credential = TwoFactorCredential(user_id=user_id, secret=secret)
        inserted = super().insert_if_absent(credential, conflict_column='user_id')
        if inserted:
            logger.info("Stored two-factor credential for account %s.", user_id)
        else:
            logger.info("Two-factor credential for account %s already existed.", user_id)
        return inserted
