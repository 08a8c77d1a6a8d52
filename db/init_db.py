"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import psycopg2

from db.connection import get_connection, release_connection
from utils.errors import StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Teachers: one teacher owns zero or more courses
CREATE TABLE IF NOT EXISTS teachers (
    teacherid           SERIAL PRIMARY KEY,
    teacherfname        VARCHAR(100) NOT NULL,
    teacherlname        VARCHAR(100) NOT NULL,
    employeenumber      VARCHAR(20) NOT NULL,
    hiredate            DATE NOT NULL,
    salary              NUMERIC(10,2) NOT NULL DEFAULT 0,
    teacherworkphone    VARCHAR(30)
);

-- Courses: teacherid is a plain column, the referenced teacher is not enforced
CREATE TABLE IF NOT EXISTS courses (
    courseid            SERIAL PRIMARY KEY,
    coursecode          VARCHAR(20) NOT NULL,
    teacherid           INT NOT NULL,
    startdate           DATE NOT NULL,
    finishdate          DATE NOT NULL,
    coursename          VARCHAR(255) NOT NULL
);

-- Students
CREATE TABLE IF NOT EXISTS students (
    studentid           SERIAL PRIMARY KEY,
    studentfname        VARCHAR(100) NOT NULL,
    studentlname        VARCHAR(100) NOT NULL,
    studentnumber       VARCHAR(20) NOT NULL,
    enroldate           DATE NOT NULL
);

-- Bridge table: student x course enrolments, removed with either parent
CREATE TABLE IF NOT EXISTS studentsxcourses (
    studentid           INT NOT NULL REFERENCES students(studentid) ON DELETE CASCADE,
    courseid            INT NOT NULL REFERENCES courses(courseid) ON DELETE CASCADE,
    PRIMARY KEY (studentid, courseid)
);

-- Natural keys are unique case-insensitively
CREATE UNIQUE INDEX IF NOT EXISTS uq_students_number ON students (LOWER(studentnumber));
CREATE UNIQUE INDEX IF NOT EXISTS uq_teachers_employee_number ON teachers (LOWER(employeenumber));
CREATE UNIQUE INDEX IF NOT EXISTS uq_courses_code ON courses (LOWER(coursecode));

-- Indexes for the relationship queries
CREATE INDEX IF NOT EXISTS idx_courses_teacher ON courses(teacherid);
CREATE INDEX IF NOT EXISTS idx_studentsxcourses_course ON studentsxcourses(courseid);
"""

SCHOOL_TABLES = ("teachers", "courses", "students", "studentsxcourses")


def create_tables() -> list[str]:
    """
    Run SCHEMA_SQL, then report which school tables exist.

    Idempotent: every statement uses IF NOT EXISTS.

    Returns:
        Names of the tables found afterwards, sorted.

    Raises:
        StorageError: The DDL failed or a table is still missing.
    """
    present_sql = """
        SELECT table_name FROM information_schema.tables
        WHERE table_schema = current_schema() AND table_name = ANY(%s);
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
            cur.execute(present_sql, (list(SCHOOL_TABLES),))
            present = sorted(row[0] for row in cur.fetchall())
        missing = sorted(set(SCHOOL_TABLES) - set(present))
        if missing:
            raise StorageError(f"Tables missing after schema creation: {', '.join(missing)}")
        conn.commit()
        logger.info(f"Schema ready: {', '.join(present)}")
        return present
    except StorageError:
        conn.rollback()
        raise
    except psycopg2.Error as e:
        conn.rollback()
        logger.error(f"Schema creation failed: {e}")
        raise StorageError(str(e)) from e
    finally:
        release_connection(conn)


if __name__ == "__main__":
    tables = create_tables()
    print(f"School schema ready ({len(tables)} tables).")
