"""
Shared fixtures.

Two kinds of doubles stand in for PostgreSQL:

* FakeConnection / FakeCursor: a scripted DB-API connection. Each
  execute() pops the next Step from the script, so repository tests
  can assert on SQL order, commit/rollback and connection release.
* InMemory*Repository: dict-backed repositories with the same interface
  as the real ones, used by the service and API tests.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

import pytest
from fastapi.testclient import TestClient

from db import init_db
from models.course import Course
from models.student import Student
from models.teacher import Teacher
from repositories import course_repo, enrollment_repo, student_repo, teacher_repo
from repositories.course_repo import DUPLICATE_CODE
from repositories.student_repo import DUPLICATE_NUMBER
from repositories.teacher_repo import (
    EMPLOYEE_NUMBER_TAKEN,
    TEACHER_NOT_FOUND,
    employee_number_exists_message,
)
from services.course_service import CourseService
from services.student_service import StudentService
from services.teacher_service import TeacherService
from utils.errors import ConflictError, NotFoundError


# ── Scripted DB-API connection ───────────────────────────


@dataclass
class Step:
    rows: list = field(default_factory=list)
    rowcount: int = 1


class FakeCursor:
    def __init__(self, conn: "FakeConnection"):
        self.conn = conn
        self.rowcount = -1
        self._rows: list = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((" ".join(sql.split()), params))
        step = self.conn.script.pop(0) if self.conn.script else Step()
        if isinstance(step, Exception):
            raise step
        self._rows = list(step.rows)
        self.rowcount = step.rowcount

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, script: list, executed: list):
        self.script = script
        self.executed = executed
        self.commits = 0
        self.rollbacks = 0
        self.closed = 0

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = 1


class FakeDatabase:
    """Hands out FakeConnections that share one script and one SQL log."""

    def __init__(self):
        self.script: list = []
        self.executed: list = []
        self.connections: list[FakeConnection] = []

    def queue(self, *steps) -> None:
        self.script.extend(steps)

    def connect(self) -> FakeConnection:
        conn = FakeConnection(self.script, self.executed)
        self.connections.append(conn)
        return conn

    @property
    def sql(self) -> list[str]:
        return [s for s, _ in self.executed]

    @property
    def params(self) -> list:
        return [p for _, p in self.executed]


@pytest.fixture
def fake_db(monkeypatch) -> FakeDatabase:
    db = FakeDatabase()
    for module in (student_repo, teacher_repo, course_repo, enrollment_repo, init_db):
        monkeypatch.setattr(module, "get_connection", db.connect)
    return db


# ── In-memory repositories ───────────────────────────────


class InMemoryStore:
    def __init__(self):
        self.students: dict[int, Student] = {}
        self.teachers: dict[int, Teacher] = {}
        self.courses: dict[int, Course] = {}
        self.enrollments: set[tuple[int, int]] = set()
        self._next_id = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id


def _copy(record, **changes):
    data = {k: v for k, v in vars(record).items() if k not in ("courses", "students")}
    data.update(changes)
    return type(record)(**data)


def _matches(key: Optional[str], *values) -> bool:
    if not key:
        return True
    return any(key.lower() in (v or "").lower() for v in values)


def _in_range(value: date, start: Optional[date], end: Optional[date]) -> bool:
    if start is None or end is None:
        return True
    return start <= value <= end


class InMemoryStudentRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    def get_all(self, search_key=None, start=None, end=None):
        return [
            _copy(s) for s in self.store.students.values()
            if _matches(search_key, s.student_fname, s.student_lname, s.full_name, s.student_number)
            and _in_range(s.enrol_date, start, end)
        ]

    def get_by_id(self, student_id):
        s = self.store.students.get(student_id)
        return _copy(s) if s else None

    def _taken(self, number, exclude_id=None):
        return any(
            s.student_number.lower() == number.lower() and s.student_id != exclude_id
            for s in self.store.students.values()
        )

    def add(self, student, course_ids: Iterable[int] = ()):
        if self._taken(student.student_number):
            raise ConflictError(DUPLICATE_NUMBER)
        student.student_id = self.store.next_id()
        self.store.students[student.student_id] = _copy(student)
        for course_id in course_ids:
            self.store.enrollments.add((student.student_id, course_id))
        return student

    def update(self, student):
        if self._taken(student.student_number, student.student_id):
            raise ConflictError(DUPLICATE_NUMBER)
        if student.student_id not in self.store.students:
            return False
        self.store.students[student.student_id] = _copy(student)
        return True

    def delete(self, student_id):
        if self.store.students.pop(student_id, None) is None:
            return False
        self.store.enrollments = {e for e in self.store.enrollments if e[0] != student_id}
        return True


class InMemoryTeacherRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    def get_all(self, search_key=None, start=None, end=None):
        return [
            _copy(t) for t in self.store.teachers.values()
            if _matches(search_key, t.teacher_fname, t.teacher_lname, t.full_name)
            and _in_range(t.hire_date, start, end)
        ]

    def get_by_id(self, teacher_id):
        t = self.store.teachers.get(teacher_id)
        return _copy(t) if t else None

    def _taken(self, number, exclude_id=None):
        return any(
            t.employee_number.lower() == number.lower() and t.teacher_id != exclude_id
            for t in self.store.teachers.values()
        )

    def add(self, teacher):
        if self._taken(teacher.employee_number):
            raise ConflictError(EMPLOYEE_NUMBER_TAKEN)
        teacher.teacher_id = self.store.next_id()
        self.store.teachers[teacher.teacher_id] = _copy(teacher)
        return teacher

    def update(self, teacher):
        if teacher.teacher_id not in self.store.teachers:
            raise NotFoundError(TEACHER_NOT_FOUND)
        if self._taken(teacher.employee_number, teacher.teacher_id):
            raise ConflictError(employee_number_exists_message(teacher.employee_number))
        self.store.teachers[teacher.teacher_id] = _copy(teacher)
        return True

    def delete(self, teacher_id):
        return self.store.teachers.pop(teacher_id, None) is not None


class InMemoryCourseRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    def get_all(self, search_key=None, start=None, end=None):
        return [
            _copy(c) for c in self.store.courses.values()
            if _matches(search_key, c.course_code, c.course_name)
            and _in_range(c.start_date, start, end)
        ]

    def get_by_id(self, course_id):
        c = self.store.courses.get(course_id)
        return _copy(c) if c else None

    def _taken(self, code, exclude_id=None):
        return any(
            c.course_code.lower() == code.lower() and c.course_id != exclude_id
            for c in self.store.courses.values()
        )

    def add(self, course):
        if self._taken(course.course_code):
            raise ConflictError(DUPLICATE_CODE)
        course.course_id = self.store.next_id()
        self.store.courses[course.course_id] = _copy(course)
        return course

    def update(self, course):
        if self._taken(course.course_code, course.course_id):
            raise ConflictError(DUPLICATE_CODE)
        if course.course_id not in self.store.courses:
            return False
        self.store.courses[course.course_id] = _copy(course)
        return True

    def delete(self, course_id):
        if self.store.courses.pop(course_id, None) is None:
            return False
        self.store.enrollments = {e for e in self.store.enrollments if e[1] != course_id}
        return True


class InMemoryEnrollmentRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    def get_students_by_course(self, course_id):
        return [
            _copy(self.store.students[s]) for s, c in sorted(self.store.enrollments)
            if c == course_id and s in self.store.students
        ]

    def get_courses_by_student(self, student_id):
        return [
            _copy(self.store.courses[c]) for s, c in sorted(self.store.enrollments)
            if s == student_id and c in self.store.courses
        ]

    def get_courses_by_teacher(self, teacher_id):
        return [_copy(c) for c in self.store.courses.values() if c.teacher_id == teacher_id]


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def student_service(store) -> StudentService:
    return StudentService(InMemoryStudentRepository(store), InMemoryEnrollmentRepository(store))


@pytest.fixture
def teacher_service(store) -> TeacherService:
    return TeacherService(InMemoryTeacherRepository(store), InMemoryEnrollmentRepository(store))


@pytest.fixture
def course_service(store) -> CourseService:
    return CourseService(InMemoryCourseRepository(store), InMemoryEnrollmentRepository(store))


@pytest.fixture
def client(student_service, teacher_service, course_service):
    from handlers import course_handler, student_handler, teacher_handler
    from main import create_app

    app = create_app()
    app.dependency_overrides[student_handler.get_student_service] = lambda: student_service
    app.dependency_overrides[teacher_handler.get_teacher_service] = lambda: teacher_service
    app.dependency_overrides[course_handler.get_course_service] = lambda: course_service
    return TestClient(app)


# ── Sample records ───────────────────────────────────────


def make_student(**overrides) -> Student:
    data = dict(
        student_fname="Sarah",
        student_lname="Valdez",
        student_number="N1678",
        enrol_date=date(2018, 6, 18),
    )
    data.update(overrides)
    return Student(**data)


def make_teacher(**overrides) -> Teacher:
    from decimal import Decimal

    data = dict(
        teacher_fname="Alexander",
        teacher_lname="Bennet",
        employee_number="T378",
        hire_date=date(2016, 8, 5),
        salary=Decimal("55.30"),
        teacher_work_phone="555-987-6543",
    )
    data.update(overrides)
    return Teacher(**data)


def make_course(**overrides) -> Course:
    data = dict(
        course_code="http5101",
        course_name="Web Application Development",
        start_date=date(2018, 9, 4),
        finish_date=date(2018, 12, 14),
        teacher_id=1,
    )
    data.update(overrides)
    return Course(**data)
