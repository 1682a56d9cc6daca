# coursehub/schemas/course.py
from pydantic import BaseModel, model_validator
from typing import Optional, Union

from .rules import COURSE_LEVELS, reject_if, required

class CourseCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    level: Optional[str] = "Beginner"
    price: Optional[Union[str, int, float]] = None
    image: Optional[str] = ""

    @model_validator(mode="after")
    def validate_fields(self):
        errors = (
            required(self.title, "Course title is required")
            + required(self.description, "Course description is required")
            + required(self.duration, "Course duration is required")
            + required(self.price, "Course price is required")
        )
        if self.level and self.level not in COURSE_LEVELS:
            errors.append(f"Course level must be one of: {', '.join(COURSE_LEVELS)}")
        reject_if(errors)
        return self
