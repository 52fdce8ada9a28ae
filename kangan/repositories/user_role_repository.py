from kangan.data.base import DbAdapter
from kangan.models import Role, UserRole
from .base_repository import BaseRepository


class UserRoleRepository(BaseRepository):
    def __init__(self, adapter: DbAdapter, users_table: str = 'auth.users'):
        super().__init__(adapter, UserRole)
        self.users_table = users_table

    def get_role(self, user_id: str) -> Role:
        """Role of the account, CUSTOMER when no row exists."""
        user_role = self.get_one({'user_id': user_id})
        if user_role is None:
            return Role.CUSTOMER
        return user_role.role

    def has_role(self, user_id: str, role) -> bool:
        return self.get_role(user_id) == Role.parse(role)

    def get_role_by_email(self, email: str) -> Role:
        """
        Looks the role up by e-mail before any password check, joining the
        auth users table. Unknown e-mails resolve to CUSTOMER.
        """
        row = self._execute_within_context(
            self.adapter.get_one,
            self.table_name,
            {f'{self.users_table}.email': email.strip().lower()},
            join_statements=[
                f"JOIN {self.users_table} ON {self.users_table}.id = {self.table_name}.user_id"
            ]
        )
        if not row:
            return Role.CUSTOMER
        return Role.parse(row.get('role'))
