import pytest

from coursehub.database.models.course import Course
from coursehub.database.models.enrollment import Enrollment


@pytest.mark.parametrize("method,path", [
    ("get", "/api/admins"),
    ("post", "/api/admins"),
    ("delete", "/api/admins/some-id"),
    ("get", "/api/students"),
    ("delete", "/api/students/some-id"),
    ("get", "/api/staff"),
    ("delete", "/api/staff/some-id"),
])
def test_identity_management_is_admin_only(client, student_headers, staff_headers, method, path):
    anonymous = client.request(method, path)
    as_student = client.request(method, path, headers=student_headers)
    as_staff = client.request(method, path, headers=staff_headers)

    assert anonymous.status_code == 401
    assert as_student.status_code == as_staff.status_code == 403
    assert as_staff.json() == {"message": "Access denied. Admin only."}


def test_admin_creates_admin_who_can_log_in(client, admin_headers):
    response = client.post("/api/admins", headers=admin_headers, json={
        "firstName": "Grace",
        "lastName": "Hopper",
        "email": "Grace@Example.com",
        "password": "pw123456",
    })
    login = client.post("/api/auth/admin/login", json={"email": "grace@example.com", "password": "pw123456"})

    assert response.status_code == 201
    assert response.json()["email"] == "grace@example.com"
    assert response.json()["role"] == "admin"
    assert "password" not in response.json()
    assert login.status_code == 200


def test_create_admin_duplicate_and_invalid(client, admin, admin_headers):
    payload = {"firstName": "A", "lastName": "B", "email": admin.email, "password": "pw123456"}

    duplicate = client.post("/api/admins", headers=admin_headers, json=payload)
    invalid = client.post("/api/admins", headers=admin_headers, json={**payload, "email": "x", "role": "student"})

    assert duplicate.status_code == 400
    assert duplicate.json() == {"message": "Admin already exists with this email"}
    assert invalid.status_code == 400
    assert invalid.json() == {"message": "Invalid email format, Role must be one of: admin, superadmin"}


def test_list_identities(client, admin, superadmin, student, staff, admin_headers):
    admins = client.get("/api/admins", headers=admin_headers).json()
    students = client.get("/api/students", headers=admin_headers).json()
    staff_list = client.get("/api/staff", headers=admin_headers).json()

    assert {a["id"] for a in admins} == {admin.id, superadmin.id}
    assert [s["id"] for s in students] == [student.id]
    assert staff_list[0]["specialization"] == "Computer Science"
    assert all("passwordHash" not in row for row in admins + students + staff_list)


def test_delete_unknown_identity(client, admin_headers):
    for path, label in [("/api/admins", "Admin"), ("/api/students", "Student"), ("/api/staff", "Staff")]:
        response = client.delete(f"{path}/missing", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"message": f"{label} not found"}


def test_deleting_student_keeps_counter_in_step(client, db_session, course, student, other_student,
                                                admin_headers, headers_for):
    student_headers = headers_for(student)
    client.post("/api/enrollments", json={"courseId": course.id}, headers=student_headers)
    client.post("/api/enrollments", json={"courseId": course.id}, headers=headers_for(other_student))

    response = client.delete(f"/api/students/{student.id}", headers=admin_headers)

    assert response.json() == {"message": "Student removed"}
    db_session.expire_all()
    assert db_session.get(Course, course.id).student_count == 1
    assert db_session.query(Enrollment).count() == 1


def test_token_of_deleted_identity_is_rejected(client, student, student_headers, admin_headers):
    assert client.get("/api/auth/me", headers=student_headers).status_code == 200

    client.delete(f"/api/students/{student.id}", headers=admin_headers)
    response = client.get("/api/auth/me", headers=student_headers)

    assert response.status_code == 401
    assert response.json() == {"message": "Not authorized, token failed"}


def test_deleting_staff_keeps_their_courses(client, db_session, course, staff, admin_headers):
    course_id = course.id

    response = client.delete(f"/api/staff/{staff.id}", headers=admin_headers)
    detail = client.get(f"/api/courses/{course_id}")

    assert response.json() == {"message": "Staff removed"}
    assert detail.status_code == 200
    assert detail.json()["instructorId"] is None
    assert detail.json()["instructor"]


def test_admin_can_remove_admin(client, superadmin, admin_headers):
    superadmin_id = superadmin.id
    response = client.delete(f"/api/admins/{superadmin_id}", headers=admin_headers)
    listing = client.get("/api/admins", headers=admin_headers).json()

    assert response.json() == {"message": "Admin removed"}
    assert superadmin_id not in [a["id"] for a in listing]
