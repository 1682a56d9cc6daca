# coursehub/database/models/staff.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from ..base import Base
from .user import IdentityMixin, UserType

class Staff(IdentityMixin, Base):
    __tablename__ = "staff"

    user_type = UserType.STAFF

    specialization = Column(String, nullable=False)

    # Relationships
    courses = relationship("Course", back_populates="instructor_account")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["specialization"] = self.specialization
        return data
