"""
services/student_service.py
----------------------------
Business logic for students.
Validates input, calls the StudentRepository and turns the result
into an Outcome for the presentation layer.
"""

from datetime import date
from typing import Iterable, Optional

from models.outcome import Outcome
from models.student import Student
from repositories.enrollment_repo import EnrollmentRepository
from repositories.student_repo import StudentRepository
from utils.errors import ConflictError, StorageError, ValidationError
from utils.logger import get_logger
from validation.student_rules import validate_student

logger = get_logger(__name__)


class StudentService:
    """
    Handles all business logic related to students.

    Workflow for writes:
        1. Validate every field, collecting all violations.
        2. Persist via the repository (which runs the uniqueness check).
        3. Map the result to an Outcome.
    """

    def __init__(self, repo: Optional[StudentRepository] = None,
                 enrollments: Optional[EnrollmentRepository] = None):
        self.repo = repo or StudentRepository()
        self.enrollments = enrollments or EnrollmentRepository()

    def list_students(self, search_key: Optional[str] = None,
                      start: Optional[date] = None, end: Optional[date] = None) -> Outcome:
        """List students; an empty list is still OK."""
        return Outcome.ok(self.repo.get_all(search_key, start, end))

    def find_student(self, student_id: int) -> Outcome:
        """Fetch a student together with the courses they are enrolled in."""
        student = self.repo.get_by_id(student_id)
        if student is None:
            return Outcome.not_found("Student not found.")
        student.courses = self.enrollments.get_courses_by_student(student_id)
        return Outcome.ok(student)

    def add_student(self, student: Student, course_ids: Iterable[int] = ()) -> Outcome:
        """
        Validate and insert a student, enrolling them in `course_ids`.

        Returns:
            OK with the saved Student, INVALID, CONFLICT or INTERNAL_ERROR.
        """
        try:
            validate_student(student).raise_if_invalid()
            saved = self.repo.add(student, list(course_ids))
        except ValidationError as e:
            return Outcome.invalid(e.errors)
        except ConflictError as e:
            logger.warning(f"Rejected student {student.student_number}: {e.message}")
            return Outcome.conflict(e.message)
        except StorageError as e:
            return Outcome.internal_error(e.message)
        return Outcome.ok(saved, "Student added successfully.")

    def update_student(self, student: Student) -> Outcome:
        """
        Validate and overwrite a student.

        An unknown id is not reported: the update affects zero rows and
        still returns OK.
        """
        try:
            validate_student(student).raise_if_invalid()
            updated = self.repo.update(student)
        except ValidationError as e:
            return Outcome.invalid(e.errors)
        except ConflictError as e:
            logger.warning(f"Rejected update of student #{student.student_id}: {e.message}")
            return Outcome.conflict(e.message)
        except StorageError as e:
            return Outcome.internal_error(e.message)

        if not updated:
            logger.warning(f"Update of student #{student.student_id} affected no rows")
        return Outcome.ok(student, "Student updated successfully.")

    def delete_student(self, student_id: int) -> Outcome:
        """Delete a student; NOT_FOUND if the id does not exist."""
        try:
            deleted = self.repo.delete(student_id)
        except StorageError as e:
            return Outcome.internal_error(e.message)
        if not deleted:
            return Outcome.not_found("Student not found.")
        return Outcome.ok(student_id, "Student deleted successfully.")

    def get_courses_by_student(self, student_id: int) -> Outcome:
        """Courses joined to a student through the bridge table."""
        return Outcome.ok(self.enrollments.get_courses_by_student(student_id))
