# coursehub/routers/courses.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database.models.course import Course
from ..database.session import get_db
from ..exceptions import CourseNotFoundError
from ..middleware.auth_guard import AuthContext, staff_only
from ..schemas.course import CourseCreate

router = APIRouter(prefix="/api/courses", tags=["courses"])

@router.get("")
def list_courses(db: Session = Depends(get_db)):
    courses = db.query(Course).order_by(Course.created_at.desc()).all()
    return [c.to_dict() for c in courses]

@router.get("/{course_id}")
def get_course(course_id: str, db: Session = Depends(get_db)):
    course = db.get(Course, course_id)
    if not course:
        raise CourseNotFoundError()
    return course.to_dict()

@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, auth: AuthContext = Depends(staff_only), db: Session = Depends(get_db)):
    """Create a course taught by the calling staff member"""
    course = Course(
        title=payload.title.strip(),
        description=payload.description.strip(),
        instructor=auth.user.full_name,
        instructor_id=auth.user.id,
        duration=payload.duration.strip(),
        level=payload.level or "Beginner",
        price=str(payload.price),
        image=payload.image or ""
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course.to_dict()
