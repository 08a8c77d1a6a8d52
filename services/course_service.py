"""
services/course_service.py
---------------------------
Business logic for courses, including the relationship queries
that start from a course or a teacher.
"""

from datetime import date
from typing import Optional

from models.course import Course
from models.outcome import Outcome
from repositories.course_repo import CourseRepository
from repositories.enrollment_repo import EnrollmentRepository
from utils.errors import ConflictError, StorageError, ValidationError
from utils.logger import get_logger
from validation.course_rules import validate_course

logger = get_logger(__name__)


class CourseService:
    """Manages courses and their enrolments."""

    def __init__(self, repo: Optional[CourseRepository] = None,
                 enrollments: Optional[EnrollmentRepository] = None):
        self.repo = repo or CourseRepository()
        self.enrollments = enrollments or EnrollmentRepository()

    def list_courses(self, search_key: Optional[str] = None,
                     start: Optional[date] = None, end: Optional[date] = None) -> Outcome:
        return Outcome.ok(self.repo.get_all(search_key, start, end))

    def find_course(self, course_id: int) -> Outcome:
        """Fetch a course together with its enrolled students."""
        course = self.repo.get_by_id(course_id)
        if course is None:
            return Outcome.not_found("Course not found.")
        course.students = self.enrollments.get_students_by_course(course_id)
        return Outcome.ok(course)

    def add_course(self, course: Course) -> Outcome:
        """Validate and insert a course. The teacher id is not checked for existence."""
        try:
            validate_course(course).raise_if_invalid()
            saved = self.repo.add(course)
        except ValidationError as e:
            return Outcome.invalid(e.errors)
        except ConflictError as e:
            logger.warning(f"Rejected course {course.course_code}: {e.message}")
            return Outcome.conflict(e.message)
        except StorageError as e:
            return Outcome.internal_error(e.message)
        return Outcome.ok(saved, "Course added successfully.")

    def update_course(self, course: Course) -> Outcome:
        """
        Validate and overwrite a course.

        An unknown id is not reported: the update affects zero rows and
        still returns OK.
        """
        try:
            validate_course(course).raise_if_invalid()
            updated = self.repo.update(course)
        except ValidationError as e:
            return Outcome.invalid(e.errors)
        except ConflictError as e:
            logger.warning(f"Rejected update of course #{course.course_id}: {e.message}")
            return Outcome.conflict(e.message)
        except StorageError as e:
            return Outcome.internal_error(e.message)

        if not updated:
            logger.warning(f"Update of course #{course.course_id} affected no rows")
        return Outcome.ok(course, "Course updated successfully.")

    def delete_course(self, course_id: int) -> Outcome:
        """Delete a course; NOT_FOUND if the id does not exist."""
        try:
            deleted = self.repo.delete(course_id)
        except StorageError as e:
            return Outcome.internal_error(e.message)
        if not deleted:
            return Outcome.not_found("Course not found.")
        return Outcome.ok(course_id, "Course deleted successfully.")

    def get_students_by_course(self, course_id: int) -> Outcome:
        """Students joined to a course through the bridge table."""
        return Outcome.ok(self.enrollments.get_students_by_course(course_id))

    def list_courses_by_teacher(self, teacher_id: int) -> Outcome:
        """Courses owned by a teacher."""
        return Outcome.ok(self.enrollments.get_courses_by_teacher(teacher_id))
