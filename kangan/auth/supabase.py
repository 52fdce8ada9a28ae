import logging

import requests

from .base import AuthSession, PasswordAuthService
from .config import SupabaseConfig
from .errors import AuthServiceUnavailableError, InvalidCredentialsError

logger = logging.getLogger(__name__)


class SupabaseAuthService(PasswordAuthService):
    config: SupabaseConfig

    def __init__(self):
        pass

    def __call__(self, config: SupabaseConfig, *args, **kwargs):
        super().__call__(config)
        self.token_url = f'{self.config.AUTH_BASE_URL}/token'
        self.logout_url = f'{self.config.AUTH_BASE_URL}/logout'
        self.timeout = self.config.AUTH_REQUEST_TIMEOUT
        return self

    def _headers(self, access_token: str = None) -> dict:
        headers = {
            'apikey': self.config.SUPABASE_ANON_KEY,
            'Content-Type': 'application/json',
        }
        if access_token:
            headers['Authorization'] = f'Bearer {access_token}'
        return headers

    def _post(self, url: str, **kwargs) -> requests.Response:
        try:
            response = requests.post(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as ex:
            logger.error("Auth service request to %s failed: %s", url, type(ex).__name__)
            raise AuthServiceUnavailableError() from ex
        if response.status_code >= 500:
            logger.error("Auth service returned %s for %s", response.status_code, url)
            raise AuthServiceUnavailableError()
        return response

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = self._post(
            self.token_url,
            params={'grant_type': 'password'},
            headers=self._headers(),
            json={'email': email.strip(), 'password': password}
        )
        if response.status_code in (400, 401, 422):
            logger.info("Password sign-in rejected.")
            raise InvalidCredentialsError()
        if not response.ok:
            logger.error("Unexpected auth service status %s on sign-in", response.status_code)
            raise AuthServiceUnavailableError()

        data = response.json()
        user = data.get('user') or {}
        if not user.get('id') or not data.get('access_token'):
            logger.error("Auth service sign-in response is missing user or token.")
            raise AuthServiceUnavailableError()

        return AuthSession(
            user_id=user['id'],
            email=user.get('email', email),
            access_token=data['access_token'],
            refresh_token=data.get('refresh_token')
        )

    def sign_out(self, session: AuthSession) -> None:
        response = self._post(self.logout_url, headers=self._headers(session.access_token))
        if not response.ok and response.status_code != 401:
            logger.error("Unexpected auth service status %s on sign-out", response.status_code)
            raise AuthServiceUnavailableError()
        logger.info("Signed out session for account %s.", session.user_id)
