"""
models/course.py
----------------
Domain model for courses.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from models.student import Student


@dataclass
class Course:
    """
    Represents a course offered by the school.

    Attributes:
        course_id: Database primary key (None for new records).
        course_code: Natural key (e.g., 'http5101'), unique case-insensitively.
        course_name: Human-readable title.
        start_date: First day of the course.
        finish_date: Last day of the course.
        teacher_id: The teacher who owns the course (existence is not checked).
        students: Students enrolled through the bridge table.
    """
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    start_date: Optional[date] = None
    finish_date: Optional[date] = None
    teacher_id: Optional[int] = None
    course_id: Optional[int] = None
    students: list["Student"] = field(default_factory=list)

    def to_dict(self, nested: bool = True) -> dict:
        """Serialize to the API's camelCase JSON shape."""
        return {
            "courseId": self.course_id,
            "courseCode": self.course_code,
            "teacherId": self.teacher_id,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "finishDate": self.finish_date.isoformat() if self.finish_date else None,
            "courseName": self.course_name,
            "students": [s.to_dict(nested=False) for s in self.students] if nested else [],
        }

    def __str__(self) -> str:
        return f"{self.course_code} | {self.course_name} | {self.start_date} -> {self.finish_date}"
