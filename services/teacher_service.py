"""
services/teacher_service.py
----------------------------
Business logic for teachers.
"""

from datetime import date
from typing import Optional

from models.outcome import Outcome
from models.teacher import Teacher
from repositories.enrollment_repo import EnrollmentRepository
from repositories.teacher_repo import TeacherRepository
from utils.errors import ConflictError, NotFoundError, StorageError, ValidationError
from utils.logger import get_logger
from validation.teacher_rules import validate_teacher

logger = get_logger(__name__)


class TeacherService:
    """Manages teachers. Unlike the other entities, listing nothing is NOT_FOUND."""

    def __init__(self, repo: Optional[TeacherRepository] = None,
                 enrollments: Optional[EnrollmentRepository] = None):
        self.repo = repo or TeacherRepository()
        self.enrollments = enrollments or EnrollmentRepository()

    def list_teachers(self, search_key: Optional[str] = None,
                      start: Optional[date] = None, end: Optional[date] = None) -> Outcome:
        """
        List teachers matching the search key and/or hire-date range.

        Returns:
            OK with the teachers, or NOT_FOUND when none match.
        """
        teachers = self.repo.get_all(search_key, start, end)
        if not teachers:
            return Outcome.not_found("No teachers found.")
        return Outcome.ok(teachers)

    def find_teacher(self, teacher_id: int) -> Outcome:
        """Fetch a teacher together with the courses they teach."""
        teacher = self.repo.get_by_id(teacher_id)
        if teacher is None:
            return Outcome.not_found("Teacher not found.")
        teacher.courses = self.enrollments.get_courses_by_teacher(teacher_id)
        return Outcome.ok(teacher)

    def add_teacher(self, teacher: Teacher) -> Outcome:
        """Validate and insert a teacher."""
        try:
            validate_teacher(teacher).raise_if_invalid()
            saved = self.repo.add(teacher)
        except ValidationError as e:
            return Outcome.invalid(e.errors)
        except ConflictError as e:
            logger.warning(f"Rejected teacher {teacher.employee_number}: {e.message}")
            return Outcome.conflict(e.message)
        except StorageError as e:
            return Outcome.internal_error(e.message)
        return Outcome.ok(saved, "Teacher added successfully.")

    def update_teacher(self, teacher_id: int, teacher: Teacher) -> Outcome:
        """
        Validate and overwrite teacher `teacher_id`.

        Returns:
            OK, INVALID, NOT_FOUND (unknown id), CONFLICT or INTERNAL_ERROR.
        """
        teacher.teacher_id = teacher_id
        try:
            validate_teacher(teacher).raise_if_invalid()
            self.repo.update(teacher)
        except ValidationError as e:
            return Outcome.invalid(e.errors)
        except NotFoundError as e:
            return Outcome.not_found(e.message)
        except ConflictError as e:
            logger.warning(f"Rejected update of teacher #{teacher_id}: {e.message}")
            return Outcome.conflict(e.message)
        except StorageError as e:
            return Outcome.internal_error(e.message, "An error occurred while updating the teacher.")
        return Outcome.ok(teacher, "Teacher updated successfully.")

    def delete_teacher(self, teacher_id: int) -> Outcome:
        """Delete a teacher; NOT_FOUND if the id does not exist."""
        try:
            deleted = self.repo.delete(teacher_id)
        except StorageError as e:
            return Outcome.internal_error(e.message)
        if not deleted:
            return Outcome.not_found("Teacher not found.")
        return Outcome.ok(teacher_id, "Teacher deleted successfully.")
