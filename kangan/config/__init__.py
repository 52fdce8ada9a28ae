from .config import BaseConfig, TwoFactorConfig
