"""
repositories/teacher_repo.py
-----------------------------
Data access layer for teachers.
All SQL queries related to the `teachers` table live here.
"""

from datetime import date
from typing import Optional

import psycopg2
from psycopg2 import errors

from db.connection import get_connection, release_connection
from models.teacher import Teacher
from repositories.filters import build_filters
from repositories.rows import TEACHER_COLUMNS, row_to_teacher, select_list
from utils.errors import ConflictError, NotFoundError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

EMPLOYEE_NUMBER_TAKEN = "Error: Employee number is already taken by another teacher."
TEACHER_NOT_FOUND = "Teacher not found."


def employee_number_exists_message(employee_number: str) -> str:
    return f"Employee number '{employee_number}' already exists for another teacher."


class TeacherRepository:
    """Repository for CRUD operations on the teachers table."""

    # ── READ ──────────────────────────────────────────────

    def get_all(
        self,
        search_key: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[Teacher]:
        """
        List teachers, optionally filtered.

        Args:
            search_key: Case-insensitive substring of first, last or full name.
            start: Hire date lower bound (inclusive, needs `end`).
            end: Hire date upper bound (inclusive, needs `start`).

        Returns:
            Teachers ordered by id; empty if nothing matches.
        """
        where, params = build_filters(
            search_key,
            [
                "teacherfname",
                "teacherlname",
                "CONCAT(teacherfname, ' ', teacherlname)",
            ],
            "hiredate",
            start,
            end,
        )
        sql = f"SELECT {select_list(TEACHER_COLUMNS)} FROM teachers{where} ORDER BY teacherid;"

        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return [row_to_teacher(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        """Fetch a single teacher, or None if the id does not exist."""
        sql = f"SELECT {select_list(TEACHER_COLUMNS)} FROM teachers WHERE teacherid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (teacher_id,))
                row = cur.fetchone()
                return row_to_teacher(row) if row else None
        finally:
            release_connection(conn)

    # ── CREATE ────────────────────────────────────────────

    def add(self, teacher: Teacher) -> Teacher:
        """
        Insert a new teacher after checking the employee number is free.

        Returns:
            The same Teacher with `teacher_id` populated.

        Raises:
            ConflictError: The employee number is already taken.
            StorageError: Any other database failure.
        """
        check_sql = "SELECT COUNT(*) FROM teachers WHERE LOWER(employeenumber) = LOWER(%s);"
        insert_sql = """
            INSERT INTO teachers
                (teacherfname, teacherlname, employeenumber, hiredate, salary, teacherworkphone)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING teacherid;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(check_sql, (teacher.employee_number,))
                if cur.fetchone()[0] > 0:
                    raise ConflictError(EMPLOYEE_NUMBER_TAKEN)

                cur.execute(insert_sql, (
                    teacher.teacher_fname, teacher.teacher_lname,
                    teacher.employee_number, teacher.hire_date,
                    teacher.salary, teacher.teacher_work_phone,
                ))
                teacher.teacher_id = cur.fetchone()[0]
            conn.commit()
            logger.info(f"Added teacher #{teacher.teacher_id} ({teacher.employee_number})")
            return teacher
        except ConflictError:
            conn.rollback()
            raise
        except errors.UniqueViolation as e:
            conn.rollback()
            raise ConflictError(EMPLOYEE_NUMBER_TAKEN) from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add teacher: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, teacher: Teacher) -> bool:
        """
        Overwrite every field of an existing teacher.

        Unlike students and courses, the id must exist.

        Returns:
            True once the row is updated.

        Raises:
            NotFoundError: No teacher has this id.
            ConflictError: Another teacher already has this employee number.
            StorageError: Any other database failure.
        """
        exists_sql = "SELECT COUNT(*) FROM teachers WHERE teacherid = %s;"
        check_sql = """
            SELECT COUNT(*) FROM teachers
            WHERE LOWER(employeenumber) = LOWER(%s) AND teacherid <> %s;
        """
        update_sql = """
            UPDATE teachers
            SET teacherfname = %s, teacherlname = %s, employeenumber = %s,
                hiredate = %s, salary = %s, teacherworkphone = %s
            WHERE teacherid = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(exists_sql, (teacher.teacher_id,))
                if cur.fetchone()[0] == 0:
                    raise NotFoundError(TEACHER_NOT_FOUND)

                cur.execute(check_sql, (teacher.employee_number, teacher.teacher_id))
                if cur.fetchone()[0] > 0:
                    raise ConflictError(employee_number_exists_message(teacher.employee_number))

                cur.execute(update_sql, (
                    teacher.teacher_fname, teacher.teacher_lname,
                    teacher.employee_number, teacher.hire_date,
                    teacher.salary, teacher.teacher_work_phone, teacher.teacher_id,
                ))
            conn.commit()
            logger.info(f"Updated teacher #{teacher.teacher_id}")
            return True
        except (NotFoundError, ConflictError):
            conn.rollback()
            raise
        except errors.UniqueViolation as e:
            conn.rollback()
            raise ConflictError(employee_number_exists_message(teacher.employee_number)) from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update teacher #{teacher.teacher_id}: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, teacher_id: int) -> bool:
        """
        Delete a teacher by ID.

        Courses keep their teacherid; there is no foreign key to cascade.

        Returns:
            True if the teacher existed and was deleted, False otherwise.
        """
        check_sql = "SELECT COUNT(*) FROM teachers WHERE teacherid = %s;"
        delete_sql = "DELETE FROM teachers WHERE teacherid = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(check_sql, (teacher_id,))
                if cur.fetchone()[0] == 0:
                    conn.rollback()
                    return False
                cur.execute(delete_sql, (teacher_id,))
            conn.commit()
            logger.info(f"Deleted teacher #{teacher_id}")
            return True
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete teacher #{teacher_id}: {e}")
            raise StorageError(str(e)) from e
        finally:
            release_connection(conn)
