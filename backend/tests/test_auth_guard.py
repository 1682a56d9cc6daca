import pytest
from jose import jwt

from coursehub.config import settings
from coursehub.database.models.user import UserRole
from coursehub.exceptions import InvalidTokenError, NoTokenError
from coursehub.middleware.auth_guard import (
    extract_bearer_token,
    is_admin,
    is_staff,
    is_staff_or_admin,
    is_student,
)
from coursehub.services.auth.token_service import TokenService

ROLES = ["admin", "superadmin", "staff", "student", None]

PREDICATE_MATRIX = {
    is_admin: {"admin", "superadmin"},
    is_staff: {"staff"},
    is_student: {"student"},
    is_staff_or_admin: {"staff", "admin", "superadmin"},
}


@pytest.mark.parametrize("predicate", list(PREDICATE_MATRIX), ids=lambda p: p.__name__)
@pytest.mark.parametrize("role", ROLES)
def test_role_predicate_matrix(predicate, role):
    assert predicate(role) is (role in PREDICATE_MATRIX[predicate])


@pytest.mark.parametrize("role", [r for r in ROLES if r])
def test_predicates_accept_enum_members(role):
    for predicate, allowed in PREDICATE_MATRIX.items():
        assert predicate(UserRole(role)) is (role in allowed)


@pytest.mark.parametrize("header", [None, "", "Token abc", "Basic dXNlcjpwdw=="])
def test_missing_or_non_bearer_header(header):
    with pytest.raises(NoTokenError):
        extract_bearer_token(header)


@pytest.mark.parametrize("header", ["Bearer", "Bearer ", "Bearer a b", "Bearerabc"])
def test_bearer_without_single_token(header):
    with pytest.raises(InvalidTokenError):
        extract_bearer_token(header)


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"


# Request-level behaviour through /api/auth/me

def test_no_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, no token"}


def test_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, token failed"}


def test_expired_token(client, student):
    token = TokenService.issue(student.id, UserRole.STUDENT, expires_in="-1s")
    response = client.get("/api/enrollments/my-enrollments", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, token failed"}


def test_token_without_expiry(client, student):
    token = jwt.encode({"id": student.id, "role": "student"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, token failed"}


def test_valid_token_attaches_user(client, staff, staff_headers):
    response = client.get("/api/auth/me", headers=staff_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == staff.id
    assert data["role"] == "staff"
    assert data["specialization"] == "Computer Science"
    assert "passwordHash" not in data and "password_hash" not in data


def test_token_for_deleted_user_rejected(client, db_session, student, student_headers):
    db_session.delete(student)
    db_session.commit()

    response = client.get("/api/auth/me", headers=student_headers)

    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, token failed"}


def test_token_role_selects_identity_table(client, student):
    # a student id presented with a staff role must not resolve
    token = TokenService.issue(student.id, UserRole.STAFF)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


@pytest.mark.parametrize("path,method,allowed,message", [
    ("/api/enrollments/my-enrollments", "get", {"student"}, "Access denied. Student only."),
    ("/api/enrollments", "get", {"admin", "superadmin"}, "Access denied. Admin only."),
    ("/api/enrollments/course/some-course", "get", {"staff", "admin", "superadmin"}, "Access denied. Staff or Admin only."),
])
def test_route_role_gates(client, headers_for, student, staff, admin, superadmin, path, method, allowed, message):
    identities = {"student": student, "staff": staff, "admin": admin, "superadmin": superadmin}

    for role, identity in identities.items():
        response = getattr(client, method)(path, headers=headers_for(identity))
        if role in allowed:
            assert response.status_code == 200, role
        else:
            assert response.status_code == 403, role
            assert response.json() == {"message": message}


def test_staff_only_route_rejects_admin(client, admin_headers):
    response = client.post("/api/courses", json={"title": "x"}, headers=admin_headers)

    assert response.status_code == 403
    assert response.json() == {"message": "Access denied. Staff only."}
