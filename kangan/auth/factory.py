from typing import Type, Dict, Tuple

from .enums import AuthProvider
from .base import PasswordAuthService
from .supabase import SupabaseAuthService
from .config import SupabaseConfig, Config


class PasswordAuthServiceFactory:
    def __init__(self):
        self._services: Dict[str, Tuple[PasswordAuthService, Type[Config]]] = {}

    def register_service(self, key: AuthProvider, service: PasswordAuthService, config: Type[Config]):
        self._services[key] = (service, config)

    def _create(self, key: AuthProvider, **kwargs):
        if key not in self._services:
            raise ValueError(key)
        service_class, config_class = self._services[key]

        config = config_class(**kwargs)
        return service_class(config=config)

    def get(self, **kwargs):
        key = Config(**kwargs).AUTH_PROVIDER
        return self._create(key, **kwargs)


auth_factory = PasswordAuthServiceFactory()

auth_factory.register_service(key=AuthProvider.SUPABASE, service=SupabaseAuthService(), config=SupabaseConfig)
