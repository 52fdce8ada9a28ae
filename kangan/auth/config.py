from pydantic.v1 import BaseSettings, Extra

from .enums import AuthProvider


class Config(BaseSettings):
    AUTH_PROVIDER: AuthProvider
    AUTH_REQUEST_TIMEOUT: float = 10.0

    class Config:
        extra = Extra.ignore


class SupabaseConfig(Config):
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str

    @property
    def AUTH_BASE_URL(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/auth/v1"


config_classes = [
    SupabaseConfig
]


class AuthConfig(*config_classes):
    pass
