# coursehub/schemas/admin.py
from pydantic import model_validator
from typing import Optional

from ..database.models.admin import ADMIN_ROLES
from ..database.models.user import UserRole
from .auth import SignupRequest
from .rules import reject_if

class AdminCreateRequest(SignupRequest):
    role: Optional[str] = UserRole.ADMIN.value

    @model_validator(mode="after")
    def validate_fields(self):
        errors = self.identity_errors()
        self.role = self.role or UserRole.ADMIN.value
        if self.role not in ADMIN_ROLES:
            errors.append(f"Role must be one of: {', '.join(ADMIN_ROLES)}")
        reject_if(errors)
        return self
