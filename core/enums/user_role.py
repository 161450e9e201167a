"""User role enumeration matching the workforce application's role names."""

from enum import Enum


class UserRole(str, Enum):
    """Roles that decide who receives which scheduled notifications."""

    SUPER_ADMIN = "Super Admin"
    ADMIN = "Admin"
    FOREMAN = "Foreman"
    WAREHOUSE = "Warehouse"
    EMPLOYEE = "Employee"

    @classmethod
    def admin_roles(cls) -> list[str]:
        """Role values that receive administrative digests and alerts."""
        return [cls.ADMIN.value, cls.SUPER_ADMIN.value]
