"""
Course Hub - Test Configuration and Fixtures
"""
import os
from typing import Generator, List

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret-for-testing-only"
os.environ["JWT_EXPIRES_IN"] = "7d"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from coursehub.main import app
from coursehub.database.base import Base
from coursehub.database.session import get_db
from coursehub.database.models.course import Course
from coursehub.database.models.user import UserRole, UserType
from coursehub.services.auth.credential_service import CredentialService
from coursehub.services.auth.token_service import TokenService
from coursehub.services.email.email_service import EmailMessage, EmailResult, EmailSender, get_email_sender

fake = Faker()

DEFAULT_PASSWORD = "pw123456"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class RecordingEmailSender(EmailSender):
    """Captures outgoing mail instead of talking to SMTP"""

    def __init__(self):
        super().__init__()
        self.sent: List[EmailMessage] = []

    async def send(self, message: EmailMessage) -> EmailResult:
        self.sent.append(message)
        return EmailResult(success=True, message_id=f"<test-{len(self.sent)}@coursehub>")


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh schema for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def client(db_session: Session, email_sender: RecordingEmailSender) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_identity(db_session: Session):
    """Factory: make_identity(UserType.STAFF, email=..., password=...)"""

    def _make(user_type=UserType.STUDENT, email=None, password=DEFAULT_PASSWORD, **extra):
        fields = {
            "first_name": fake.first_name(),
            "last_name": fake.last_name(),
            "email": email or fake.unique.email(),
            "password": password,
        }
        if user_type == UserType.STAFF:
            fields.setdefault("specialization", "Computer Science")
        fields.update(extra)
        return CredentialService.create(db_session, user_type, **fields)

    return _make


@pytest.fixture
def student(make_identity):
    return make_identity(UserType.STUDENT)


@pytest.fixture
def other_student(make_identity):
    return make_identity(UserType.STUDENT)


@pytest.fixture
def staff(make_identity):
    return make_identity(UserType.STAFF)


@pytest.fixture
def admin(make_identity):
    return make_identity(UserType.ADMIN, role=UserRole.ADMIN.value)


@pytest.fixture
def superadmin(make_identity):
    return make_identity(UserType.ADMIN, role=UserRole.SUPERADMIN.value)


@pytest.fixture
def course(db_session: Session, staff) -> Course:
    course = Course(
        title="Intro to Databases",
        description="Relational modelling and SQL",
        instructor=staff.full_name,
        instructor_id=staff.id,
        duration="8 weeks",
        level="Beginner",
        price="49.99",
    )
    db_session.add(course)
    db_session.commit()
    db_session.refresh(course)
    return course


def auth_headers(identity) -> dict:
    token = TokenService.issue(identity.id, identity.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def student_headers(student) -> dict:
    return auth_headers(student)


@pytest.fixture
def staff_headers(staff) -> dict:
    return auth_headers(staff)


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth_headers(admin)
