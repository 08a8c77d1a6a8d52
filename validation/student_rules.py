"""
validation/student_rules.py
---------------------------
Validation for Student records (add and update).
"""

import re
from datetime import datetime
from typing import Optional

from models.student import Student
from validation.rules import ValidationResult, is_future, matches

STUDENT_NUMBER_PATTERN = re.compile(r"N[0-9]{4}")


def validate_student(student: Student, now: Optional[datetime] = None) -> ValidationResult:
    """
    Check required fields, the student number format and the enrolment date.

    Args:
        student: The record to check.
        now: Reference time for the future-date check (defaults to now).

    Returns:
        A ValidationResult with every violation found.
    """
    result = ValidationResult()
    result.require(student.student_fname, "First name is required.")
    result.require(student.student_lname, "Last name is required.")

    if result.require(student.student_number, "Student number is required."):
        if not matches(STUDENT_NUMBER_PATTERN, student.student_number):
            result.add("Student number must start with 'N' followed by 4 digits.")

    if student.enrol_date is None:
        result.add("Enrollment date is required.")
    elif is_future(student.enrol_date, now):
        result.add("Enrollment date cannot be in the future.")

    return result
