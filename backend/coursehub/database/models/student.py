# coursehub/database/models/student.py
from sqlalchemy import Column, Boolean
from sqlalchemy.orm import relationship
from ..base import Base
from .user import IdentityMixin, UserType

class Student(IdentityMixin, Base):
    __tablename__ = "students"

    user_type = UserType.STUDENT

    accept_terms = Column(Boolean, nullable=False, default=False)

    # Relationships
    enrollments = relationship("Enrollment", back_populates="student", cascade="all, delete-orphan")
