"""
repositories/enrollment_repo.py
--------------------------------
Relationship queries: the student x course bridge table
(`studentsxcourses`) and the teacher -> course foreign key.

All queries are plain read-only joins; an empty list is a valid result.
"""

from typing import Iterable

from db.connection import get_connection, release_connection
from models.course import Course
from models.student import Student
from repositories.rows import (
    COURSE_COLUMNS,
    STUDENT_COLUMNS,
    row_to_course,
    row_to_student,
    select_list,
)
from utils.logger import get_logger

logger = get_logger(__name__)


def insert_enrollments(cur, student_id: int, course_ids: Iterable[int]) -> int:
    """
    Insert one bridge row per course id using an open cursor.

    Runs inside the caller's transaction; duplicate ids are skipped.

    Returns:
        Number of bridge rows inserted.
    """
    sql = "INSERT INTO studentsxcourses (studentid, courseid) VALUES (%s, %s);"
    count = 0
    for course_id in dict.fromkeys(course_ids):
        cur.execute(sql, (student_id, course_id))
        count += 1
    if count:
        logger.info(f"Enrolled student #{student_id} in {count} course(s)")
    return count


class EnrollmentRepository:
    """Join queries across the bridge table and the courses.teacherid column."""

    def get_students_by_course(self, course_id: int) -> list[Student]:
        """Students enrolled in a course, through the bridge table."""
        sql = f"""
            SELECT {select_list(STUDENT_COLUMNS, "s")}
            FROM studentsxcourses sc
            JOIN students s ON sc.studentid = s.studentid
            WHERE sc.courseid = %s
            ORDER BY s.studentid;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (course_id,))
                return [row_to_student(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_courses_by_student(self, student_id: int) -> list[Course]:
        """Courses a student is enrolled in, through the bridge table."""
        sql = f"""
            SELECT {select_list(COURSE_COLUMNS, "c")}
            FROM studentsxcourses sc
            JOIN courses c ON sc.courseid = c.courseid
            WHERE sc.studentid = %s
            ORDER BY c.courseid;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (student_id,))
                return [row_to_course(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_courses_by_teacher(self, teacher_id: int) -> list[Course]:
        """Courses owned by a teacher."""
        sql = f"""
            SELECT {select_list(COURSE_COLUMNS)}
            FROM courses
            WHERE teacherid = %s
            ORDER BY courseid;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (teacher_id,))
                return [row_to_course(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)
