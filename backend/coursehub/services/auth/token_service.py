# coursehub/services/auth/token_service.py
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union
from jose import JWTError, jwt
import logging
import re

from ...config import settings
from ...database.models.user import UserRole
from ...exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

_DURATION_UNITS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 60 * 60 * 24,
    "w": 60 * 60 * 24 * 7,
}
_DURATION_PATTERN = re.compile(r"^\s*(-?\d+)\s*([smhdw]?)\s*$")

def parse_duration(value: Union[str, int, timedelta]) -> timedelta:
    """
    Parse an expiry such as "7d", "12h", "30m", "-1s" or a bare number of seconds
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)

    match = _DURATION_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _DURATION_UNITS[unit or "s"])

@dataclass(frozen=True)
class TokenClaims:
    subject_id: str
    role: UserRole

class TokenService:
    """Signed, time-limited tokens asserting (subject id, role)"""

    @staticmethod
    def issue(
        subject_id: str,
        role: Union[UserRole, str],
        expires_in: Optional[Union[str, int, timedelta]] = None,
    ) -> str:
        role = UserRole(role)
        issued_at = datetime.utcnow()
        expire = issued_at + parse_duration(expires_in if expires_in is not None else settings.JWT_EXPIRES_IN)

        claims = {
            "id": str(subject_id),
            "role": role.value,
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def verify(token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Every failure (bad signature, malformed, expired, missing or unknown
        claims) raises the same InvalidTokenError; the cause is only logged.
        """
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=[settings.JWT_ALGORITHM],
                options={"require_exp": True, "require_iat": True},
            )
        except JWTError as e:
            logger.info(f"[Token] Verification failed: {e}")
            raise InvalidTokenError()

        subject_id = payload.get("id")
        role = payload.get("role")
        if not isinstance(subject_id, str) or not subject_id:
            logger.info("[Token] Verification failed: missing subject")
            raise InvalidTokenError()

        try:
            role = UserRole(role)
        except ValueError:
            logger.info(f"[Token] Verification failed: unknown role {role!r}")
            raise InvalidTokenError()

        return TokenClaims(subject_id=subject_id, role=role)
