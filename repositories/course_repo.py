"""
repositories/course_repo.py
----------------------------
Data access layer for courses.
All SQL queries related to the `courses` table live here.
"""

from datetime import date
from typing import Optional

import psycopg2
from psycopg2 import errors

from db.connection import get_connection, release_connection
from models.course import Course
from repositories.filters import build_filters
from repositories.rows import COURSE_COLUMNS, row_to_course, select_list
from utils.errors import ConflictError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_CODE = "Course code must be unique."


class CourseRepository:
    """Repository for CRUD operations on the courses table."""

    # ── READ ──────────────────────────────────────────────

    def get_all(
        self,
        search_key: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Course]:
        """
        List courses, optionally filtered by code/name substring and
        an inclusive start-date range.
        """
        where, params = build_filters(
            search_key, ["coursecode", "coursename"], "startdate", start, end
        )
        sql = f"SELECT {select_list(COURSE_COLUMNS)} FROM courses{where} ORDER BY courseid;"

        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return [row_to_course(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, course_id: int) -> Optional[Course]:
        """Fetch a single course, or None if the id does not exist."""
        sql = f"SELECT {select_list(COURSE_COLUMNS)} FROM courses WHERE courseid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (course_id,))
                row = cur.fetchone()
                return row_to_course(row) if row else None
        finally:
            release_connection(conn)

    # ── CREATE ────────────────────────────────────────────

    def add(self, course: Course) -> Course:
        """
        Insert a new course after checking the course code is free.

        Returns:
            The same Course with `course_id` populated.

        Raises:
            ConflictError: The course code is already taken.
            StorageError: Any other database failure.
        """
        check_sql = "SELECT COUNT(*) FROM courses WHERE LOWER(coursecode) = LOWER(%s);"
        insert_sql = """
            INSERT INTO courses (coursecode, coursename, startdate, finishdate, teacherid)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING courseid;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(check_sql, (course.course_code,))
                if cur.fetchone()[0] > 0:
                    raise ConflictError(DUPLICATE_CODE)

                cur.execute(insert_sql, (
                    course.course_code, course.course_name,
                    course.start_date, course.finish_date, course.teacher_id,
                ))
                course.course_id = cur.fetchone()[0]
            conn.commit()
            logger.info(f"Added course #{course.course_id} ({course.course_code})")
            return course
        except ConflictError:
            conn.rollback()
            raise
        except errors.UniqueViolation as e:
            conn.rollback()
            raise ConflictError(DUPLICATE_CODE) from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add course: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, course: Course) -> bool:
        """
        Overwrite every field of a course.

        The id is not checked for existence: an unknown id updates nothing.

        Returns:
            True if a row was updated, False otherwise.
        """
        check_sql = """
            SELECT COUNT(*) FROM courses
            WHERE LOWER(coursecode) = LOWER(%s) AND courseid <> %s;
        """
        update_sql = """
            UPDATE courses
            SET coursecode = %s, coursename = %s, startdate = %s, finishdate = %s, teacherid = %s
            WHERE courseid = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(check_sql, (course.course_code, course.course_id))
                if cur.fetchone()[0] > 0:
                    raise ConflictError(DUPLICATE_CODE)

                cur.execute(update_sql, (
                    course.course_code, course.course_name, course.start_date,
                    course.finish_date, course.teacher_id, course.course_id,
                ))
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except ConflictError:
            conn.rollback()
            raise
        except errors.UniqueViolation as e:
            conn.rollback()
            raise ConflictError(DUPLICATE_CODE) from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update course #{course.course_id}: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, course_id: int) -> bool:
        """
        Delete a course by ID. Enrolments go with it (ON DELETE CASCADE).

        Returns:
            True if the course existed and was deleted, False otherwise.
        """
        check_sql = "SELECT COUNT(*) FROM courses WHERE courseid = %s;"
        delete_sql = "DELETE FROM courses WHERE courseid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(check_sql, (course_id,))
                if cur.fetchone()[0] == 0:
                    conn.rollback()
                    return False
                cur.execute(delete_sql, (course_id,))
            conn.commit()
            logger.info(f"Deleted course #{course_id}")
            return True
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete course #{course_id}: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)
