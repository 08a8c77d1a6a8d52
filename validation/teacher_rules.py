"""
validation/teacher_rules.py
---------------------------
Validation for Teacher records (add and update).
"""

import re
from datetime import datetime
from typing import Optional

from models.teacher import Teacher
from validation.rules import ValidationResult, is_blank, is_future, matches

EMPLOYEE_NUMBER_PATTERN = re.compile(r"T[0-9]{3}")


def validate_teacher(teacher: Teacher, now: Optional[datetime] = None) -> ValidationResult:
    """
    Check a teacher before it is written.

    Rules:
        - first name, last name and work phone are required
        - employee number is 'T' + exactly three digits
        - hire date is present and not in the future
        - salary is not negative
    """
    result = ValidationResult()
    result.require(teacher.teacher_fname, "First name is required.")
    result.require(teacher.teacher_lname, "Last name is required.")

    if not matches(EMPLOYEE_NUMBER_PATTERN, teacher.employee_number):
        result.add("Employee number must start with 'T' followed by exactly three digits.")

    if teacher.hire_date is None or is_future(teacher.hire_date, now):
        result.add("Hire date is invalid or in the future.")

    if teacher.salary is not None and teacher.salary < 0:
        result.add("Salary must be a positive number.")

    if is_blank(teacher.teacher_work_phone):
        result.add("Work phone is required.")

    return result
