# coursehub/database/models/user.py
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import validates
from datetime import datetime
import uuid
import enum

from ...services.auth.password_service import hash_password, verify_password

class UserRole(str, enum.Enum):
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

class UserType(str, enum.Enum):
    """Which identity table an account lives in"""
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"

    @classmethod
    def from_role(cls, role) -> "UserType":
        role = UserRole(role)
        if role == UserRole.SUPERADMIN:
            return cls.ADMIN
        return cls(role.value)

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

class IdentityMixin:
    """Columns and password handling shared by Student, Staff and Admin"""

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)

    # Password recovery: sha256 of the one-time code
    reset_code = Column(String, nullable=True)
    reset_code_expiry = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, value: str):
        self.password_hash = hash_password(value)

    def check_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.password_hash)

    @validates("email")
    def _normalize_email(self, key, value):
        return normalize_email(value)

    @validates("first_name", "last_name")
    def _strip_name(self, key, value):
        return value.strip() if value else value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def role(self) -> str:
        # overridden by Admin, which stores admin/superadmin
        return self.user_type.value

    def clear_reset_code(self):
        self.reset_code = None
        self.reset_code_expiry = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }
