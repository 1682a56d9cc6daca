# coursehub/services/enrollment_service.py
from typing import List
from sqlalchemy import case, func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from ..database.models.course import Course
from ..database.models.enrollment import Enrollment, EnrollmentStatus
from ..database.models.student import Student
from ..exceptions import (
    AlreadyEnrolledError,
    CourseNotFoundError,
    EnrollmentNotFoundError,
    ForbiddenError,
)

logger = logging.getLogger(__name__)

class EnrollmentService:
    """
    Enrollment ledger.

    Keeps course.student_count equal to the number of active enrollments for
    the course. Each ledger write and its counter update are committed in the
    same transaction.
    """

    @staticmethod
    def _increment_count(db: Session, course_id: str):
        db.execute(
            update(Course)
            .where(Course.id == course_id)
            .values(student_count=Course.student_count + 1)
        )

    @staticmethod
    def _decrement_count(db: Session, course_id: str):
        # floored at 0 even if the counter has already drifted
        db.execute(
            update(Course)
            .where(Course.id == course_id)
            .values(student_count=case((Course.student_count > 0, Course.student_count - 1), else_=0))
        )

    @staticmethod
    def get_active(db: Session, student_id: str, course_id: str) -> Enrollment:
        return db.query(Enrollment).filter(
            Enrollment.student_id == student_id,
            Enrollment.course_id == course_id,
            Enrollment.status == EnrollmentStatus.ACTIVE
        ).first()

    @staticmethod
    def enroll(db: Session, student: Student, course_id: str) -> Enrollment:
        course = db.get(Course, course_id) if course_id else None
        if not course:
            raise CourseNotFoundError()

        if EnrollmentService.get_active(db, student.id, course.id):
            raise AlreadyEnrolledError()

        enrollment = Enrollment(
            course_id=course.id,
            course_title=course.title,
            course_instructor=course.instructor,
            course_price=course.price,
            course_duration=course.duration,
            course_level=course.level,
            student_id=student.id,
            student_name=student.full_name,
            student_email=student.email,
            status=EnrollmentStatus.ACTIVE
        )
        db.add(enrollment)

        try:
            db.flush()
            EnrollmentService._increment_count(db, course.id)
            db.commit()
        except IntegrityError:
            # a concurrent enroll for the same pair landed first
            db.rollback()
            raise AlreadyEnrolledError()

        db.refresh(enrollment)
        db.refresh(course)
        logger.info(f"[Enrollment] {student.email} enrolled in {course.id} (count={course.student_count})")
        return enrollment

    @staticmethod
    def _get_owned(db: Session, enrollment_id: str, student_id: str) -> Enrollment:
        enrollment = db.get(Enrollment, enrollment_id)
        if not enrollment:
            raise EnrollmentNotFoundError()
        if enrollment.student_id != student_id:
            logger.warning(f"[Enrollment] Student {student_id} tried to modify enrollment {enrollment_id}")
            raise ForbiddenError("Not authorized to modify this enrollment")
        return enrollment

    @staticmethod
    def unenroll(db: Session, enrollment_id: str, student_id: str) -> None:
        enrollment = EnrollmentService._get_owned(db, enrollment_id, student_id)
        course_id = enrollment.course_id
        was_active = enrollment.is_active

        db.delete(enrollment)
        if was_active:
            EnrollmentService._decrement_count(db, course_id)
        db.commit()

        logger.info(f"[Enrollment] Enrollment {enrollment_id} removed by {student_id}")

    @staticmethod
    def cancel(db: Session, enrollment_id: str, student_id: str) -> Enrollment:
        """Soft-cancel: keep the record, release the seat"""
        enrollment = EnrollmentService._get_owned(db, enrollment_id, student_id)
        if not enrollment.is_active:
            return enrollment

        enrollment.status = EnrollmentStatus.CANCELLED
        EnrollmentService._decrement_count(db, enrollment.course_id)
        db.commit()
        db.refresh(enrollment)

        logger.info(f"[Enrollment] Enrollment {enrollment_id} cancelled by {student_id}")
        return enrollment

    @staticmethod
    def release_student(db: Session, student_id: str) -> int:
        """Decrement the counters for a student's active enrollments; the caller commits"""
        active = db.query(Enrollment).filter(
            Enrollment.student_id == student_id,
            Enrollment.status == EnrollmentStatus.ACTIVE
        ).all()
        for enrollment in active:
            EnrollmentService._decrement_count(db, enrollment.course_id)
        return len(active)

    @staticmethod
    def list_for_student(db: Session, student_id: str) -> List[Enrollment]:
        return db.query(Enrollment).filter(
            Enrollment.student_id == student_id
        ).order_by(Enrollment.enrolled_at.desc()).all()

    @staticmethod
    def list_for_course(db: Session, course_id: str) -> List[Enrollment]:
        return db.query(Enrollment).filter(
            Enrollment.course_id == course_id
        ).order_by(Enrollment.enrolled_at.desc()).all()

    @staticmethod
    def list_all(db: Session) -> List[Enrollment]:
        return db.query(Enrollment).order_by(Enrollment.enrolled_at.desc()).all()

    @staticmethod
    def active_count(db: Session, course_id: str) -> int:
        return db.query(func.count(Enrollment.id)).filter(
            Enrollment.course_id == course_id,
            Enrollment.status == EnrollmentStatus.ACTIVE
        ).scalar()

    @staticmethod
    def reconcile(db: Session, course_id: str) -> Course:
        """Recompute the cached counter from the ledger"""
        course = db.get(Course, course_id)
        if not course:
            raise CourseNotFoundError()

        actual = EnrollmentService.active_count(db, course_id)
        if course.student_count != actual:
            logger.warning(
                f"[Enrollment] Counter drift on course {course_id}: cached={course.student_count} actual={actual}"
            )
            course.student_count = actual
            db.commit()
            db.refresh(course)
        return course
