"""
models/student.py
-----------------
Domain model for students.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from models.course import Course


@dataclass
class Student:
    """
    Represents a student enrolled at the school.

    Attributes:
        student_id: Database primary key (None for new records).
        student_fname: First name.
        student_lname: Last name.
        student_number: Natural key, 'N' followed by four digits.
        enrol_date: Date the student enrolled.
        courses: Courses the student is enrolled in (through the bridge table).
    """
    student_fname: Optional[str] = None
    student_lname: Optional[str] = None
    student_number: Optional[str] = None
    enrol_date: Optional[date] = None
    student_id: Optional[int] = None
    courses: list["Course"] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.student_fname or ''} {self.student_lname or ''}".strip()

    def to_dict(self, nested: bool = True) -> dict:
        """Serialize to the API's camelCase JSON shape."""
        return {
            "studentId": self.student_id,
            "studentFname": self.student_fname,
            "studentLname": self.student_lname,
            "studentNumber": self.student_number,
            "enrolDate": self.enrol_date.isoformat() if self.enrol_date else None,
            "courses": [c.to_dict(nested=False) for c in self.courses] if nested else [],
        }

    def __str__(self) -> str:
        return f"{self.student_number} | {self.full_name} | enrolled {self.enrol_date}"
