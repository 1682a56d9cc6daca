# coursehub/middleware/auth_guard.py
from dataclasses import dataclass
from typing import Optional, Union
from fastapi import Depends, Request
from sqlalchemy.orm import Session
import logging

from ..database.models.user import UserRole
from ..database.session import get_db
from ..exceptions import ForbiddenError, InvalidTokenError, NoTokenError
from ..services.auth.credential_service import CredentialService, Identity
from ..services.auth.token_service import TokenService

logger = logging.getLogger(__name__)

@dataclass
class AuthContext:
    user: Identity
    role: UserRole

def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an Authorization header.
    Missing header or non-Bearer scheme -> NoTokenError; "Bearer" with no
    token -> InvalidTokenError.
    """
    if not authorization or not authorization.startswith("Bearer"):
        raise NoTokenError()

    parts = authorization.split()
    if len(parts) != 2 or parts[0] != "Bearer":
        raise InvalidTokenError()
    return parts[1]

def protect(request: Request, db: Session = Depends(get_db)) -> AuthContext:
    """Resolve the bearer token to a live identity and attach it to the request"""
    token = extract_bearer_token(request.headers.get("Authorization"))
    claims = TokenService.verify(token)

    user = CredentialService.resolve(db, claims.role, claims.subject_id)
    if user is None:
        # valid signature, but the account no longer exists
        logger.warning(f"[Guard] Token for missing {claims.role.value} {claims.subject_id}")
        raise InvalidTokenError()

    context = AuthContext(user=user, role=claims.role)
    request.state.auth = context
    return context

# Role predicates: pure functions of the resolved role

def is_admin(role: Optional[Union[UserRole, str]]) -> bool:
    return role in (UserRole.ADMIN, UserRole.SUPERADMIN)

def is_staff(role: Optional[Union[UserRole, str]]) -> bool:
    return role == UserRole.STAFF

def is_student(role: Optional[Union[UserRole, str]]) -> bool:
    return role == UserRole.STUDENT

def is_staff_or_admin(role: Optional[Union[UserRole, str]]) -> bool:
    return is_staff(role) or is_admin(role)

def admin_only(auth: AuthContext = Depends(protect)) -> AuthContext:
    if not is_admin(auth.role):
        raise ForbiddenError("Access denied. Admin only.")
    return auth

def staff_only(auth: AuthContext = Depends(protect)) -> AuthContext:
    if not is_staff(auth.role):
        raise ForbiddenError("Access denied. Staff only.")
    return auth

def student_only(auth: AuthContext = Depends(protect)) -> AuthContext:
    if not is_student(auth.role):
        raise ForbiddenError("Access denied. Student only.")
    return auth

def staff_or_admin(auth: AuthContext = Depends(protect)) -> AuthContext:
    if not is_staff_or_admin(auth.role):
        raise ForbiddenError("Access denied. Staff or Admin only.")
    return auth
