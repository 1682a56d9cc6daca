# coursehub/routers/enrollments.py
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from ..database.session import get_db
from ..middleware.auth_guard import AuthContext, admin_only, staff_or_admin, student_only
from ..schemas.enrollment import EnrollmentCreate
from ..services.email.email_service import EmailMessage, EmailSender, dispatch_email, get_email_sender
from ..services.email import templates
from ..services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])

@router.post("", status_code=status.HTTP_201_CREATED)
def create_enrollment(
    payload: EnrollmentCreate,
    background_tasks: BackgroundTasks,
    auth: AuthContext = Depends(student_only),
    db: Session = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender)
):
    enrollment = EnrollmentService.enroll(db, auth.user, payload.course_id.strip())

    message = EmailMessage(
        to=enrollment.student_email,
        subject=templates.enrollment_email_subject(enrollment.course_title),
        html=templates.enrollment_email_template(
            student_name=enrollment.student_name,
            course_title=enrollment.course_title,
            course_instructor=enrollment.course_instructor,
            course_duration=enrollment.course_duration,
            enrolled_at=enrollment.enrolled_at
        )
    )
    background_tasks.add_task(dispatch_email, sender, message)
    return enrollment.to_dict()

@router.get("/my-enrollments")
def my_enrollments(auth: AuthContext = Depends(student_only), db: Session = Depends(get_db)):
    return [e.to_dict() for e in EnrollmentService.list_for_student(db, auth.user.id)]

@router.get("/course/{course_id}")
def course_enrollments(course_id: str, auth: AuthContext = Depends(staff_or_admin), db: Session = Depends(get_db)):
    return [e.to_dict() for e in EnrollmentService.list_for_course(db, course_id)]

@router.post("/course/{course_id}/reconcile")
def reconcile_course(course_id: str, auth: AuthContext = Depends(admin_only), db: Session = Depends(get_db)):
    """Recompute a course's cached student count from the ledger"""
    course = EnrollmentService.reconcile(db, course_id)
    return {"courseId": course.id, "studentCount": course.student_count}

@router.get("")
def all_enrollments(auth: AuthContext = Depends(admin_only), db: Session = Depends(get_db)):
    return [e.to_dict() for e in EnrollmentService.list_all(db)]

@router.put("/{enrollment_id}/cancel")
def cancel_enrollment(enrollment_id: str, auth: AuthContext = Depends(student_only), db: Session = Depends(get_db)):
    enrollment = EnrollmentService.cancel(db, enrollment_id, auth.user.id)
    return {"message": "Enrollment cancelled", "enrollment": enrollment.to_dict()}

@router.delete("/{enrollment_id}")
def delete_enrollment(enrollment_id: str, auth: AuthContext = Depends(student_only), db: Session = Depends(get_db)):
    EnrollmentService.unenroll(db, enrollment_id, auth.user.id)
    return {"message": "Enrollment removed"}
