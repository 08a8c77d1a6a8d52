"""
models/teacher.py
-----------------
Domain model for teachers.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from models.course import Course


@dataclass
class Teacher:
    """
    Represents a member of the teaching staff.

    Attributes:
        teacher_id: Database primary key (None for new records).
        teacher_fname: First name.
        teacher_lname: Last name.
        employee_number: Natural key, 'T' followed by three digits.
        hire_date: Date the teacher was hired.
        salary: Non-negative salary.
        teacher_work_phone: Optional work phone number.
        courses: Courses taught by this teacher.
    """
    teacher_fname: Optional[str] = None
    teacher_lname: Optional[str] = None
    employee_number: Optional[str] = None
    hire_date: Optional[date] = None
    salary: Decimal = Decimal("0")
    teacher_work_phone: Optional[str] = None
    teacher_id: Optional[int] = None
    courses: list["Course"] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.teacher_fname or ''} {self.teacher_lname or ''}".strip()

    def to_dict(self, nested: bool = True) -> dict:
        """Serialize to the API's camelCase JSON shape."""
        return {
            "teacherId": self.teacher_id,
            "teacherFname": self.teacher_fname,
            "teacherLname": self.teacher_lname,
            "employeeNumber": self.employee_number,
            "hireDate": self.hire_date.isoformat() if self.hire_date else None,
            "salary": float(self.salary) if self.salary is not None else None,
            "teacherWorkPhone": self.teacher_work_phone,
            "courses": [c.to_dict(nested=False) for c in self.courses] if nested else [],
        }

    def __str__(self) -> str:
        return f"{self.employee_number} | {self.full_name} | hired {self.hire_date}"
