"""
validation/course_rules.py
--------------------------
Validation for Course records (add and update).
"""

from models.course import Course
from validation.rules import ValidationResult


def validate_course(course: Course) -> ValidationResult:
    """Check required fields and the teacher reference of a course."""
    result = ValidationResult()
    result.require(course.course_code, "Course code is required.")
    result.require(course.course_name, "Course name is required.")
    if course.start_date is None:
        result.add("Start date is required.")
    if course.finish_date is None:
        result.add("Finish date is required.")
    # Only the id is checked; the teacher row itself may not exist
    if course.teacher_id is None or course.teacher_id <= 0:
        result.add("Teacher ID is required.")
    return result
