"""
schemas/student.py
------------------
Request body for AddStudent / UpdateStudent.
"""

from typing import Optional

from models.student import Student
from schemas.base import Day, RequestBody


class CourseRef(RequestBody):
    course_id: int


class StudentIn(RequestBody):
    student_id: Optional[int] = None
    student_fname: Optional[str] = None
    student_lname: Optional[str] = None
    student_number: Optional[str] = None
    enrol_date: Optional[Day] = None
    # null and [] both mean "no pre-selected courses"
    courses: Optional[list[CourseRef]] = None
    selected_course_ids: Optional[list[int]] = None

    def to_model(self) -> Student:
        return Student(
            student_id=self.student_id,
            student_fname=self.student_fname,
            student_lname=self.student_lname,
            student_number=self.student_number,
            enrol_date=self.enrol_date,
        )

    def course_ids(self) -> list[int]:
        """Pre-selected courses, from either `Courses` or `SelectedCourseIds`."""
        ids = [c.course_id for c in self.courses or []]
        return ids + list(self.selected_course_ids or [])
