"""
repositories/rows.py
--------------------
Column lists and row-to-model converters shared by the repositories.
Each converter expects a row selected with the matching column list.
"""

from decimal import Decimal

from models.course import Course
from models.student import Student
from models.teacher import Teacher

STUDENT_COLUMNS = ["studentid", "studentfname", "studentlname", "studentnumber", "enroldate"]
TEACHER_COLUMNS = [
    "teacherid", "teacherfname", "teacherlname", "employeenumber",
    "hiredate", "salary", "teacherworkphone",
]
COURSE_COLUMNS = ["courseid", "coursecode", "teacherid", "startdate", "finishdate", "coursename"]


def select_list(columns: list[str], alias: str = "") -> str:
    """Render a column list for SELECT, optionally prefixed by a table alias."""
    prefix = f"{alias}." if alias else ""
    return ", ".join(prefix + c for c in columns)


def row_to_student(row: tuple) -> Student:
    return Student(
        student_id=row[0],
        student_fname=row[1],
        student_lname=row[2],
        student_number=row[3],
        enrol_date=row[4],
    )


def row_to_teacher(row: tuple) -> Teacher:
    return Teacher(
        teacher_id=row[0],
        teacher_fname=row[1],
        teacher_lname=row[2],
        employee_number=row[3],
        hire_date=row[4],
        salary=Decimal(row[5]) if row[5] is not None else Decimal("0"),
        teacher_work_phone=row[6],
    )


def row_to_course(row: tuple) -> Course:
    return Course(
        course_id=row[0],
        course_code=row[1],
        teacher_id=row[2],
        start_date=row[3],
        finish_date=row[4],
        course_name=row[5],
    )
