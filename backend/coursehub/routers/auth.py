# coursehub/routers/auth.py
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
import logging

from ..config import settings
from ..database.models.user import UserType
from ..database.session import get_db
from ..exceptions import InvalidCredentialsError
from ..middleware.auth_guard import AuthContext, protect
from ..schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    SignupRequest,
    StaffSignupRequest,
    VerifyResetCodeRequest,
)
from ..services.auth.credential_service import CredentialService, Identity
from ..services.auth.recovery_service import RecoveryService
from ..services.auth.token_service import TokenService
from ..services.email.email_service import EmailMessage, EmailSender, dispatch_email, get_email_sender
from ..services.email import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

RESET_REQUESTED_MESSAGE = "If an account with that email exists, a password reset code has been sent."

def auth_response(identity: Identity) -> dict:
    data = identity.to_dict()
    data["token"] = TokenService.issue(identity.id, identity.role)
    return data

def welcome_message(identity: Identity) -> EmailMessage:
    user_type = identity.user_type.value
    return EmailMessage(
        to=identity.email,
        subject=templates.welcome_email_subject(user_type),
        html=templates.welcome_email_template(
            first_name=identity.first_name,
            last_name=identity.last_name,
            email=identity.email,
            user_type=user_type
        )
    )

def login_as(db: Session, user_type: UserType, payload: LoginRequest) -> dict:
    identity = CredentialService.verify(db, user_type, payload.email, payload.password)
    if not identity:
        logger.info(f"[Auth] Failed {user_type.value} login")
        raise InvalidCredentialsError()
    return auth_response(identity)

@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender)
):
    """Register a student"""
    student = CredentialService.create(
        db,
        UserType.STUDENT,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        accept_terms=payload.accept_terms
    )
    background_tasks.add_task(dispatch_email, sender, welcome_message(student))
    return auth_response(student)

@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return login_as(db, UserType.STUDENT, payload)

@router.post("/staff/signup", status_code=status.HTTP_201_CREATED)
def staff_signup(
    payload: StaffSignupRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender)
):
    """Register a staff member (instructor)"""
    staff = CredentialService.create(
        db,
        UserType.STAFF,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        specialization=payload.specialization.strip()
    )
    background_tasks.add_task(dispatch_email, sender, welcome_message(staff))
    return auth_response(staff)

@router.post("/staff/login")
def staff_login(payload: LoginRequest, db: Session = Depends(get_db)):
    return login_as(db, UserType.STAFF, payload)

@router.post("/admin/login")
def admin_login(payload: LoginRequest, db: Session = Depends(get_db)):
    return login_as(db, UserType.ADMIN, payload)

@router.post("/forgot-password")
def forgot_password(
    payload: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender)
):
    """
    Email a 6-digit reset code.
    The response is the same whether or not the account exists.
    """
    user_type = payload.user_type
    reset = RecoveryService.request_reset(db, payload.email, user_type)

    if reset:
        identity = reset.identity
        message = EmailMessage(
            to=identity.email,
            subject=templates.password_reset_email_subject(),
            html=templates.password_reset_email_template(
                first_name=identity.first_name,
                last_name=identity.last_name,
                reset_code=reset.code,
                expiry_minutes=settings.RESET_CODE_EXPIRE_MINUTES,
                user_type=user_type.value
            )
        )
        background_tasks.add_task(dispatch_email, sender, message)

    return {"message": RESET_REQUESTED_MESSAGE}

@router.post("/verify-reset-code")
def verify_reset_code(payload: VerifyResetCodeRequest, db: Session = Depends(get_db)):
    valid = RecoveryService.verify_reset(db, payload.email, payload.user_type, payload.reset_code.strip())
    return {"valid": valid}

@router.post("/reset-password")
def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    RecoveryService.reset_password(
        db,
        payload.email,
        payload.user_type,
        payload.reset_code.strip(),
        payload.new_password
    )
    return {"message": "Password reset successful. You can now log in with your new password."}

@router.get("/me")
def me(auth: AuthContext = Depends(protect)):
    data = auth.user.to_dict()
    data["role"] = auth.role.value
    return data
