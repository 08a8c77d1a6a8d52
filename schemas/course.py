"""
schemas/course.py
-----------------
Request body for AddCourse / UpdateCourse.
"""

from typing import Optional

from models.course import Course
from schemas.base import Day, RequestBody


class CourseIn(RequestBody):
    course_id: Optional[int] = None
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    start_date: Optional[Day] = None
    finish_date: Optional[Day] = None
    teacher_id: Optional[int] = None

    def to_model(self) -> Course:
        return Course(
            course_id=self.course_id,
            course_code=self.course_code,
            course_name=self.course_name,
            start_date=self.start_date,
            finish_date=self.finish_date,
            teacher_id=self.teacher_id,
        )
