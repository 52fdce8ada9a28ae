from enum import Enum


class AuthProvider(str, Enum):
    SUPABASE = 'supabase'

    def __str__(self):
        return str(self.value)
