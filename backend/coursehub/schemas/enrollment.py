# coursehub/schemas/enrollment.py
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional

from .rules import reject_if, required

class EnrollmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_id: Optional[str] = Field(None, alias="courseId")

    @model_validator(mode="after")
    def validate_fields(self):
        reject_if(required(self.course_id, "Course ID is required"))
        return self
