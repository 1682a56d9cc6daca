# coursehub/schemas/rules.py
from pydantic_core import PydanticCustomError
import re

from ..database.models.user import UserType
from ..exceptions import INPUT_ERROR_TYPE
from ..services.auth.password_service import BCRYPT_MAX_BYTES

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6
COURSE_LEVELS = ("Beginner", "Intermediate", "Advanced")

def input_error(messages) -> PydanticCustomError:
    """A validation error whose message is shown to the client as-is"""
    return PydanticCustomError(INPUT_ERROR_TYPE, "{message}", {"message": ", ".join(messages)})

def reject_if(messages):
    if messages:
        raise input_error(messages)

def blank(value) -> bool:
    return value is None or not str(value).strip()

def required(value, message):
    return [message] if blank(value) else []

def password_errors(password, label="Password"):
    if not password:
        return [f"{label} is required"]
    if len(password) < MIN_PASSWORD_LENGTH:
        return [f"{label} must be at least {MIN_PASSWORD_LENGTH} characters"]
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return [f"{label} must be at most {BCRYPT_MAX_BYTES} bytes"]
    return []

def email_errors(email):
    if blank(email):
        return ["Email is required"]
    if not EMAIL_PATTERN.search(email):
        return ["Invalid email format"]
    return []

def parse_user_type(value) -> UserType:
    if isinstance(value, UserType):
        return value
    try:
        return UserType(value or UserType.STUDENT.value)
    except ValueError:
        raise input_error(["Invalid user type"])
