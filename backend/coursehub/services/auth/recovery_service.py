# coursehub/services/auth/recovery_service.py
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union
from sqlalchemy.orm import Session
import hashlib
import hmac
import logging
import secrets

from ...config import settings
from ...database.models.user import UserType
from ...exceptions import InvalidOrExpiredCodeError
from .credential_service import CredentialService, Identity

logger = logging.getLogger(__name__)

RESET_CODE_DIGITS = 6

def generate_reset_code() -> str:
    return f"{secrets.randbelow(10 ** RESET_CODE_DIGITS):0{RESET_CODE_DIGITS}d}"

def hash_reset_code(code: str) -> str:
    return hashlib.sha256(code.encode("utf-8")).hexdigest()

@dataclass
class ResetRequest:
    identity: Identity
    code: str  # plaintext, only ever sent by email
    expires_at: datetime

class RecoveryService:
    """One-time numeric codes for resetting a forgotten password"""

    @staticmethod
    def request_reset(
        db: Session,
        email: str,
        user_type: Union[UserType, str],
        now: Optional[datetime] = None,
    ) -> Optional[ResetRequest]:
        """
        Issue a fresh code for the identity. Returns None when no such account
        exists; callers respond identically in both cases.
        """
        identity = CredentialService.find_by_email(db, user_type, email)
        if not identity:
            logger.info(f"[Recovery] Reset requested for unknown {UserType(user_type).value} email")
            return None

        now = now or datetime.utcnow()
        code = generate_reset_code()
        expires_at = now + timedelta(minutes=settings.RESET_CODE_EXPIRE_MINUTES)

        identity.reset_code = hash_reset_code(code)
        identity.reset_code_expiry = expires_at
        db.commit()

        logger.info(f"[Recovery] Reset code issued for {identity.email}")
        return ResetRequest(identity=identity, code=code, expires_at=expires_at)

    @staticmethod
    def _check(identity: Optional[Identity], code: str, now: datetime) -> bool:
        if not identity or not code:
            return False
        if not identity.reset_code or not identity.reset_code_expiry:
            logger.info("[Recovery] No active reset code")
            return False
        if identity.reset_code_expiry <= now:
            logger.info(f"[Recovery] Reset code expired for {identity.email}")
            return False
        if not hmac.compare_digest(identity.reset_code, hash_reset_code(code)):
            logger.info(f"[Recovery] Wrong reset code for {identity.email}")
            return False
        return True

    @staticmethod
    def verify_reset(
        db: Session,
        email: str,
        user_type: Union[UserType, str],
        code: str,
        now: Optional[datetime] = None,
    ) -> bool:
        """Check a code without consuming it"""
        identity = CredentialService.find_by_email(db, user_type, email)
        return RecoveryService._check(identity, code, now or datetime.utcnow())

    @staticmethod
    def reset_password(
        db: Session,
        email: str,
        user_type: Union[UserType, str],
        code: str,
        new_password: str,
        now: Optional[datetime] = None,
    ) -> Identity:
        identity = CredentialService.find_by_email(db, user_type, email)
        if not RecoveryService._check(identity, code, now or datetime.utcnow()):
            raise InvalidOrExpiredCodeError()

        identity.password = new_password
        identity.clear_reset_code()
        db.commit()

        logger.info(f"[Recovery] Password reset for {identity.email}")
        return identity
