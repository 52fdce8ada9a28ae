"""
In-memory stand-ins for the store, role and auth collaborators of LoginController.
"""
import threading
import uuid

from kangan.auth.base import AuthSession, PasswordAuthService
from kangan.auth.errors import InvalidCredentialsError, StoreUnavailableError
from kangan.models import Role


class InMemoryCredentialStore:
    """Credential store with the same insert-if-absent guarantee as the UNIQUE user_id column."""

    def __init__(self, secrets=None):
        self.secrets = dict(secrets or {})
        self.insert_calls = 0
        self.fail = False
        self._lock = threading.Lock()

    def get_secret(self, user_id):
        if self.fail:
            raise StoreUnavailableError()
        with self._lock:
            return self.secrets.get(user_id)

    def insert_if_absent(self, user_id, secret):
        if self.fail:
            raise StoreUnavailableError()
        with self._lock:
            self.insert_calls += 1
            if user_id in self.secrets:
                return False
            self.secrets[user_id] = secret
            return True


class InMemoryRoles:
    def __init__(self, users):
        # users: {email: (user_id, role)}
        self.users = users
        self.lookups_by_email = []

    def get_role_by_email(self, email):
        self.lookups_by_email.append(email)
        _, role = self.users.get(email, (None, Role.CUSTOMER))
        return Role.parse(role)

    def has_role(self, user_id, role):
        for uid, user_role in self.users.values():
            if uid == user_id:
                return Role.parse(user_role) == Role.parse(role)
        return False


class FakeAuthService(PasswordAuthService):
    def __init__(self, passwords, user_ids):
        # passwords: {email: password}, user_ids: {email: user_id}
        self.passwords = passwords
        self.user_ids = user_ids
        self.sign_in_calls = []
        self.signed_out = []
        self.active_tokens = set()

    def __call__(self, config, *args, **kwargs):
        super().__call__(config)
        return self

    def sign_in_with_password(self, email, password):
        self.sign_in_calls.append(email)
        if self.passwords.get(email) != password:
            raise InvalidCredentialsError()
        token = uuid.uuid4().hex
        self.active_tokens.add(token)
        return AuthSession(user_id=self.user_ids[email], email=email, access_token=token)

    def sign_out(self, session):
        self.signed_out.append(session.user_id)
        self.active_tokens.discard(session.access_token)
