# coursehub/services/auth/credential_service.py
from typing import List, Optional, Type, Union
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from ...database.models.admin import Admin
from ...database.models.staff import Staff
from ...database.models.student import Student
from ...database.models.user import UserRole, UserType, normalize_email
from ...exceptions import DuplicateIdentityError, NotFoundError
from ..enrollment_service import EnrollmentService

logger = logging.getLogger(__name__)

IDENTITY_MODELS = {
    UserType.STUDENT: Student,
    UserType.STAFF: Staff,
    UserType.ADMIN: Admin,
}

Identity = Union[Student, Staff, Admin]

def model_for(kind: Union[UserType, UserRole, str]) -> Type[Identity]:
    """Map a user type or token role onto its identity table"""
    if isinstance(kind, UserRole):
        return IDENTITY_MODELS[UserType.from_role(kind)]
    try:
        return IDENTITY_MODELS[UserType(kind)]
    except ValueError:
        return IDENTITY_MODELS[UserType.from_role(kind)]

class CredentialService:
    """Per-role identity persistence and password verification"""

    @staticmethod
    def find_by_email(db: Session, user_type: Union[UserType, str], email: str) -> Optional[Identity]:
        model = model_for(user_type)
        return db.query(model).filter(model.email == normalize_email(email)).first()

    @staticmethod
    def create(db: Session, user_type: Union[UserType, str], **fields) -> Identity:
        """
        Create an identity; the plaintext `password` field is hashed on assignment.
        Raises DuplicateIdentityError if the email is already registered in that table.
        """
        model = model_for(user_type)
        label = model.user_type.value.capitalize()

        if CredentialService.find_by_email(db, user_type, fields.get("email")):
            raise DuplicateIdentityError(f"{label} already exists with this email")

        identity = model(**fields)
        db.add(identity)
        try:
            db.commit()
        except IntegrityError:
            # concurrent signup with the same email won the race
            db.rollback()
            raise DuplicateIdentityError(f"{label} already exists with this email")

        db.refresh(identity)
        logger.info(f"[Auth] {label} created: {identity.email}")
        return identity

    @staticmethod
    def verify(db: Session, user_type: Union[UserType, str], email: str, password: str) -> Optional[Identity]:
        """Return the identity only when the password matches; None otherwise"""
        identity = CredentialService.find_by_email(db, user_type, email)
        if identity and identity.check_password(password):
            return identity
        return None

    @staticmethod
    def resolve(db: Session, role: Union[UserRole, str], subject_id: str) -> Optional[Identity]:
        """Load the identity a token refers to, dispatching on its role"""
        model = model_for(UserRole(role))
        return db.get(model, subject_id)

    @staticmethod
    def list_all(db: Session, user_type: Union[UserType, str]) -> List[Identity]:
        model = model_for(user_type)
        return db.query(model).order_by(model.created_at.desc()).all()

    @staticmethod
    def delete(db: Session, user_type: Union[UserType, str], identity_id: str) -> None:
        """
        Remove an identity. A student's active enrollments release their seats
        in the same transaction that deletes them.
        """
        model = model_for(user_type)
        label = model.user_type.value.capitalize()

        identity = db.get(model, identity_id)
        if not identity:
            raise NotFoundError(f"{label} not found")

        email = identity.email
        if model.user_type == UserType.STUDENT:
            EnrollmentService.release_student(db, identity.id)
        db.delete(identity)
        db.commit()

        logger.info(f"[Auth] {label} removed: {email}")
