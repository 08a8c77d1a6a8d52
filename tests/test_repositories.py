from datetime import date
from decimal import Decimal

import psycopg2
import pytest
from psycopg2 import errors

from conftest import Step, make_course, make_student, make_teacher
from repositories.course_repo import CourseRepository
from repositories.enrollment_repo import EnrollmentRepository
from repositories.filters import build_filters, like_pattern
from repositories.student_repo import StudentRepository
from repositories.teacher_repo import TeacherRepository
from utils.errors import ConflictError, NotFoundError, StorageError

TEACHER_ROW = (15, "John", "Doe", "T123", date(2023, 1, 1), Decimal("120.00"), None)
COURSE_ROW = (3, "http5103", 5, date(2018, 9, 4), date(2018, 12, 14), "Web Programming")


def assert_released(fake_db):
    assert fake_db.connections, "no connection was opened"
    assert all(c.closed for c in fake_db.connections)


class TestStudentRepository:
    def test_add_inserts_student_and_bridge_rows_in_one_transaction(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]), Step(rows=[(42,)]))
        student = StudentRepository().add(make_student(), [3, 5, 3])

        assert student.student_id == 42
        assert fake_db.sql[0].startswith(
            "SELECT COUNT(*) FROM students WHERE LOWER(studentnumber) = LOWER(%s)"
        )
        assert fake_db.sql[1].startswith("INSERT INTO students")
        assert fake_db.sql[2:] == [
            "INSERT INTO studentsxcourses (studentid, courseid) VALUES (%s, %s);",
        ] * 2
        assert fake_db.params[2:] == [(42, 3), (42, 5)]
        assert len(fake_db.connections) == 1
        assert fake_db.connections[0].commits == 1
        assert_released(fake_db)

    def test_add_duplicate_number_is_rejected_before_insert(self, fake_db):
        fake_db.queue(Step(rows=[(1,)]))
        with pytest.raises(ConflictError) as exc:
            StudentRepository().add(make_student(student_number="n1678"))

        assert exc.value.message == "Student number must be unique."
        assert len(fake_db.executed) == 1
        conn = fake_db.connections[0]
        assert conn.commits == 0 and conn.rollbacks == 1
        assert_released(fake_db)

    def test_unique_index_violation_becomes_conflict(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]), errors.UniqueViolation("duplicate key value"))
        with pytest.raises(ConflictError):
            StudentRepository().add(make_student())
        assert fake_db.connections[0].rollbacks == 1
        assert_released(fake_db)

    def test_driver_failure_becomes_storage_error(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]), psycopg2.OperationalError("server closed the connection"))
        with pytest.raises(StorageError) as exc:
            StudentRepository().add(make_student())
        assert "server closed the connection" in exc.value.message
        assert_released(fake_db)

    def test_update_excludes_self_from_uniqueness_check(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]), Step(rowcount=1))
        updated = StudentRepository().update(make_student(student_id=7))

        assert updated is True
        assert "studentid <> %s" in fake_db.sql[0]
        assert fake_db.params[0] == ("N1678", 7)
        assert fake_db.sql[1].startswith("UPDATE students")

    def test_update_of_unknown_id_affects_no_rows(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]), Step(rowcount=0))
        assert StudentRepository().update(make_student(student_id=999)) is False
        assert fake_db.connections[0].commits == 1

    def test_delete_absent_id_performs_no_delete(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]))
        assert StudentRepository().delete(404) is False
        assert not any(s.startswith("DELETE") for s in fake_db.sql)
        assert_released(fake_db)

    def test_delete_existing(self, fake_db):
        fake_db.queue(Step(rows=[(1,)]), Step(rowcount=1))
        assert StudentRepository().delete(5) is True
        assert fake_db.sql[1] == "DELETE FROM students WHERE studentid = %s;"
        assert fake_db.connections[0].commits == 1

    def test_get_by_id_missing_returns_none(self, fake_db):
        fake_db.queue(Step(rows=[]))
        assert StudentRepository().get_by_id(1) is None
        assert_released(fake_db)

    def test_read_failure_propagates_and_still_releases(self, fake_db):
        fake_db.queue(psycopg2.OperationalError("gone"))
        with pytest.raises(psycopg2.OperationalError):
            StudentRepository().get_all()
        assert_released(fake_db)


class TestTeacherRepository:
    def test_list_with_search_key_and_date_range(self, fake_db):
        fake_db.queue(Step(rows=[TEACHER_ROW]))
        teachers = TeacherRepository().get_all("john", date(2023, 1, 1), date(2023, 1, 31))

        sql = fake_db.sql[0]
        assert "LOWER(teacherfname) LIKE LOWER(%s)" in sql
        assert "LOWER(CONCAT(teacherfname, ' ', teacherlname)) LIKE LOWER(%s)" in sql
        assert "hiredate BETWEEN %s AND %s" in sql
        assert fake_db.params[0] == ["%john%"] * 3 + [date(2023, 1, 1), date(2023, 1, 31)]

        teacher = teachers[0]
        assert teacher.teacher_id == 15
        assert teacher.salary == Decimal("120.00")
        assert teacher.teacher_work_phone is None

    def test_list_without_filters_has_no_where_clause(self, fake_db):
        fake_db.queue(Step(rows=[]))
        assert TeacherRepository().get_all() == []
        assert "WHERE" not in fake_db.sql[0]
        assert fake_db.params[0] == []

    def test_update_unknown_teacher_is_not_found(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]))
        with pytest.raises(NotFoundError):
            TeacherRepository().update(make_teacher(teacher_id=77))
        assert not any(s.startswith("UPDATE") for s in fake_db.sql)
        assert fake_db.connections[0].rollbacks == 1
        assert_released(fake_db)

    def test_update_duplicate_employee_number(self, fake_db):
        fake_db.queue(Step(rows=[(1,)]), Step(rows=[(1,)]))
        with pytest.raises(ConflictError) as exc:
            TeacherRepository().update(make_teacher(teacher_id=1, employee_number="T378"))
        assert exc.value.message == "Employee number 'T378' already exists for another teacher."

    def test_update_runs_checks_and_write_on_one_connection(self, fake_db):
        fake_db.queue(Step(rows=[(1,)]), Step(rows=[(0,)]), Step(rowcount=1))
        assert TeacherRepository().update(make_teacher(teacher_id=1)) is True
        assert len(fake_db.connections) == 1
        assert fake_db.sql[2].startswith("UPDATE teachers")
        assert fake_db.params[2][-1] == 1

    def test_add_conflict_message(self, fake_db):
        fake_db.queue(Step(rows=[(1,)]))
        with pytest.raises(ConflictError) as exc:
            TeacherRepository().add(make_teacher())
        assert exc.value.message == "Error: Employee number is already taken by another teacher."


class TestCourseRepository:
    def test_add_returns_generated_id(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]), Step(rows=[(17,)]))
        course = CourseRepository().add(make_course())
        assert course.course_id == 17
        assert fake_db.params[1] == (
            "http5101", "Web Application Development",
            date(2018, 9, 4), date(2018, 12, 14), 1,
        )

    def test_update_of_unknown_id_completes_without_error(self, fake_db):
        fake_db.queue(Step(rows=[(0,)]), Step(rowcount=0))
        assert CourseRepository().update(make_course(course_id=12345)) is False
        assert fake_db.connections[0].commits == 1
        assert_released(fake_db)

    def test_delete_failure_is_storage_error(self, fake_db):
        fake_db.queue(Step(rows=[(1,)]), psycopg2.DatabaseError("deadlock detected"))
        with pytest.raises(StorageError):
            CourseRepository().delete(3)
        assert fake_db.connections[0].rollbacks == 1
        assert_released(fake_db)


class TestEnrollmentRepository:
    def test_courses_by_student_joins_bridge_table(self, fake_db):
        fake_db.queue(Step(rows=[COURSE_ROW]))
        courses = EnrollmentRepository().get_courses_by_student(36)

        assert "JOIN courses c ON sc.courseid = c.courseid" in fake_db.sql[0]
        assert "WHERE sc.studentid = %s" in fake_db.sql[0]
        assert fake_db.params[0] == (36,)
        assert [c.course_code for c in courses] == ["http5103"]

    def test_students_by_course_empty_is_valid(self, fake_db):
        fake_db.queue(Step(rows=[]))
        assert EnrollmentRepository().get_students_by_course(5) == []
        assert "JOIN students s ON sc.studentid = s.studentid" in fake_db.sql[0]

    def test_courses_by_teacher(self, fake_db):
        fake_db.queue(Step(rows=[COURSE_ROW]))
        courses = EnrollmentRepository().get_courses_by_teacher(5)
        assert "WHERE teacherid = %s" in fake_db.sql[0]
        assert courses[0].teacher_id == 5


class TestFilters:
    def test_like_pattern_escapes_wildcards(self):
        assert like_pattern("50%_off") == "%50\\%\\_off%"

    def test_date_range_needs_both_ends(self):
        assert build_filters(None, ["a"], "d", date(2020, 1, 1), None) == ("", [])

    def test_blank_search_key_is_ignored(self):
        assert build_filters("   ", ["a"], "d") == ("", [])
