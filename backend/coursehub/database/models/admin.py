# coursehub/database/models/admin.py
from sqlalchemy import Column, String
from sqlalchemy.orm import validates
from ..base import Base
from .user import IdentityMixin, UserRole, UserType

ADMIN_ROLES = (UserRole.ADMIN.value, UserRole.SUPERADMIN.value)

class Admin(IdentityMixin, Base):
    __tablename__ = "admins"

    user_type = UserType.ADMIN

    role = Column(String, nullable=False, default=UserRole.ADMIN.value)  # "admin" or "superadmin"

    @validates("role")
    def _validate_role(self, key, value):
        value = UserRole(value).value
        if value not in ADMIN_ROLES:
            raise ValueError(f"Invalid admin role: {value}")
        return value

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["role"] = self.role
        return data
