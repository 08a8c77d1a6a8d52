"""
repositories/student_repo.py
-----------------------------
Data access layer for students.
All SQL queries related to the `students` table live here.
"""

from datetime import date
from typing import Iterable, Optional

import psycopg2
from psycopg2 import errors

from db.connection import get_connection, release_connection
from models.student import Student
from repositories.enrollment_repo import insert_enrollments
from repositories.filters import build_filters
from repositories.rows import STUDENT_COLUMNS, row_to_student, select_list
from utils.errors import ConflictError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

DUPLICATE_NUMBER = "Student number must be unique."


class StudentRepository:
    """Repository for CRUD operations on the students table."""

    # ── READ ──────────────────────────────────────────────

    def get_all(
        self,
        search_key: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Student]:
        """
        List students, optionally filtered.

        Args:
            search_key: Case-insensitive substring of first, last or
                full name, or of the student number.
            start: Enrolment date lower bound (inclusive, needs `end`).
            end: Enrolment date upper bound (inclusive, needs `start`).

        Returns:
            Students ordered by id; empty if nothing matches.
        """
        where, params = build_filters(
            search_key,
            [
                "studentfname",
                "studentlname",
                "CONCAT(studentfname, ' ', studentlname)",
                "studentnumber",
            ],
            "enroldate",
            start,
            end,
        )
        sql = f"SELECT {select_list(STUDENT_COLUMNS)} FROM students{where} ORDER BY studentid;"

        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return [row_to_student(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, student_id: int) -> Optional[Student]:
        """Fetch a single student, or None if the id does not exist."""
        sql = f"SELECT {select_list(STUDENT_COLUMNS)} FROM students WHERE studentid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (student_id,))
                row = cur.fetchone()
                return row_to_student(row) if row else None
        finally:
            release_connection(conn)

    # ── CREATE ────────────────────────────────────────────

    def add(self, student: Student, course_ids: Iterable[int] = ()) -> Student:
        """
        Insert a student and enrol them in the given courses.

        The uniqueness check, the insert and the bridge rows run on one
        connection inside one transaction.

        Args:
            student: The Student to persist.
            course_ids: Courses to enrol the new student in.

        Returns:
            The same Student with `student_id` populated.

        Raises:
            ConflictError: The student number is already taken.
            StorageError: Any other database failure.
        """
        check_sql = "SELECT COUNT(*) FROM students WHERE LOWER(studentnumber) = LOWER(%s);"
        insert_sql = """
            INSERT INTO students (studentfname, studentlname, studentnumber, enroldate)
            VALUES (%s, %s, %s, %s)
            RETURNING studentid;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(check_sql, (student.student_number,))
                if cur.fetchone()[0] > 0:
                    raise ConflictError(DUPLICATE_NUMBER)

                cur.execute(insert_sql, (
                    student.student_fname, student.student_lname,
                    student.student_number, student.enrol_date,
                ))
                student.student_id = cur.fetchone()[0]
                insert_enrollments(cur, student.student_id, course_ids)
            conn.commit()
            logger.info(f"Added student #{student.student_id} ({student.student_number})")
            return student
        except ConflictError:
            conn.rollback()
            raise
        except errors.UniqueViolation as e:
            # Lost the race against a concurrent insert of the same number
            conn.rollback()
            raise ConflictError(DUPLICATE_NUMBER) from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add student: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, student: Student) -> bool:
        """
        Overwrite every field of an existing student.

        The id is not checked for existence: an unknown id updates nothing.

        Returns:
            True if a row was updated, False otherwise.

        Raises:
            ConflictError: Another student already has this number.
            StorageError: Any other database failure.
        """
        check_sql = """
            SELECT COUNT(*) FROM students
            WHERE LOWER(studentnumber) = LOWER(%s) AND studentid <> %s;
        """
        update_sql = """
            UPDATE students
            SET studentfname = %s, studentlname = %s, studentnumber = %s, enroldate = %s
            WHERE studentid = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(check_sql, (student.student_number, student.student_id))
                if cur.fetchone()[0] > 0:
                    raise ConflictError(DUPLICATE_NUMBER)

                cur.execute(update_sql, (
                    student.student_fname, student.student_lname,
                    student.student_number, student.enrol_date, student.student_id,
                ))
                updated = cur.rowcount > 0
            conn.commit()
            return updated
        except ConflictError:
            conn.rollback()
            raise
        except errors.UniqueViolation as e:
            conn.rollback()
            raise ConflictError(DUPLICATE_NUMBER) from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update student #{student.student_id}: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, student_id: int) -> bool:
        """
        Delete a student by ID. Enrolments go with it (ON DELETE CASCADE).

        Returns:
            True if the student existed and was deleted, False otherwise.
        """
        check_sql = "SELECT COUNT(*) FROM students WHERE studentid = %s;"
        delete_sql = "DELETE FROM students WHERE studentid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(check_sql, (student_id,))
                if cur.fetchone()[0] == 0:
                    conn.rollback()
                    return False
                cur.execute(delete_sql, (student_id,))
            conn.commit()
            logger.info(f"Deleted student #{student_id}")
            return True
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete student #{student_id}: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)
