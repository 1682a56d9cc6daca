# coursehub/schemas/auth.py
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional

from ..database.models.user import UserType
from .rules import email_errors, parse_user_type, password_errors, reject_if, required

class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    password: Optional[str] = None
    accept_terms: bool = Field(False, alias="acceptTerms")

    def identity_errors(self):
        return (
            required(self.first_name, "First name is required")
            + required(self.last_name, "Last name is required")
            + email_errors(self.email)
            + password_errors(self.password)
        )

    @model_validator(mode="after")
    def validate_fields(self):
        reject_if(self.identity_errors())
        return self

class StaffSignupRequest(SignupRequest):
    specialization: Optional[str] = None

    @model_validator(mode="after")
    def validate_fields(self):
        reject_if(self.identity_errors() + required(self.specialization, "Specialization is required"))
        return self

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="after")
    def validate_fields(self):
        errors = required(self.email, "Email is required")
        if not self.password:
            errors.append("Password is required")
        reject_if(errors)
        return self

class ForgotPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    user_type: UserType = Field(UserType.STUDENT, alias="userType")

    @field_validator("user_type", mode="before")
    @classmethod
    def validate_user_type(cls, value):
        return parse_user_type(value)

    @model_validator(mode="after")
    def validate_fields(self):
        reject_if(email_errors(self.email))
        return self

class VerifyResetCodeRequest(ForgotPasswordRequest):
    reset_code: Optional[str] = Field(None, alias="resetCode")

    @model_validator(mode="after")
    def validate_fields(self):
        reject_if(email_errors(self.email) + required(self.reset_code, "Reset code is required"))
        return self

class ResetPasswordRequest(VerifyResetCodeRequest):
    new_password: Optional[str] = Field(None, alias="newPassword")

    @model_validator(mode="after")
    def validate_fields(self):
        reject_if(
            email_errors(self.email)
            + required(self.reset_code, "Reset code is required")
            + password_errors(self.new_password, label="New password")
        )
        return self
