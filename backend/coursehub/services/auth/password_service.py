# coursehub/services/auth/password_service.py
import bcrypt

from ...config import settings

# bcrypt ignores everything past this; longer passwords are refused rather than cut
BCRYPT_MAX_BYTES = 72

def hash_password(password: str) -> str:
    """Hash a password with a fresh salt (BCRYPT_ROUNDS cost)"""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode("utf-8")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a plaintext password against a stored hash"""
    if not plain_password or not hashed_password:
        return False
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        # no stored hash can come from a password this long
        return False
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False
