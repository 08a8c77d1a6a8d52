"""
schemas/teacher.py
------------------
Request body for AddTeacher / UpdateTeacher. The id comes from the URL.
"""

from decimal import Decimal
from typing import Optional

from models.teacher import Teacher
from schemas.base import Day, RequestBody


class TeacherIn(RequestBody):
    teacher_fname: Optional[str] = None
    teacher_lname: Optional[str] = None
    employee_number: Optional[str] = None
    hire_date: Optional[Day] = None
    salary: Optional[Decimal] = Decimal("0")
    teacher_work_phone: Optional[str] = None

    def to_model(self, teacher_id: Optional[int] = None) -> Teacher:
        return Teacher(
            teacher_id=teacher_id,
            teacher_fname=self.teacher_fname,
            teacher_lname=self.teacher_lname,
            employee_number=self.employee_number,
            hire_date=self.hire_date,
            salary=self.salary if self.salary is not None else Decimal("0"),
            teacher_work_phone=self.teacher_work_phone,
        )
