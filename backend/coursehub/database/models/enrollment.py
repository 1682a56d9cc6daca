# coursehub/database/models/enrollment.py
from sqlalchemy import Column, String, ForeignKey, DateTime, Enum, Index, text
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum
from ..base import Base

class EnrollmentStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class Enrollment(Base):
    __tablename__ = "enrollments"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id = Column(String, ForeignKey("courses.id"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)

    # Snapshot of the course at enrollment time (a receipt, not kept in sync)
    course_title = Column(String, nullable=False)
    course_instructor = Column(String, nullable=False)
    course_price = Column(String, nullable=False)
    course_duration = Column(String, nullable=False)
    course_level = Column(String, nullable=False, default="Beginner")

    student_name = Column(String, nullable=False)
    student_email = Column(String, nullable=False)

    status = Column(
        Enum(EnrollmentStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=EnrollmentStatus.ACTIVE,
    )
    enrolled_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # At most one active enrollment per (student, course)
    __table_args__ = (
        Index(
            "uq_enrollments_active_student_course",
            "student_id",
            "course_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    # Relationships
    course = relationship("Course", back_populates="enrollments")
    student = relationship("Student", back_populates="enrollments")

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "courseId": self.course_id,
            "courseTitle": self.course_title,
            "courseInstructor": self.course_instructor,
            "coursePrice": self.course_price,
            "courseDuration": self.course_duration,
            "courseLevel": self.course_level,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "studentEmail": self.student_email,
            "status": self.status.value if self.status else None,
            "enrolledAt": self.enrolled_at.isoformat() if self.enrolled_at else None,
        }
