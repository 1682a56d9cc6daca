# coursehub/database/models/course.py
from sqlalchemy import Column, Integer, String, Float, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
from ..base import Base

class Course(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    instructor = Column(String, nullable=False)  # display name
    instructor_id = Column(String, ForeignKey("staff.id"), nullable=True, index=True)
    duration = Column(String, nullable=False)  # e.g. "8 weeks"
    level = Column(String, nullable=False, default="Beginner")
    price = Column(String, nullable=False)
    image = Column(String, nullable=False, default="")

    # Denormalized: number of active enrollments, kept in sync by EnrollmentService
    student_count = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    instructor_account = relationship("Staff", back_populates="courses")
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete-orphan")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "instructor": self.instructor,
            "instructorId": self.instructor_id,
            "duration": self.duration,
            "level": self.level,
            "price": self.price,
            "image": self.image,
            "studentCount": self.student_count,
            "rating": self.rating,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
