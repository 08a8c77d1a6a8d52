"""
handlers/student_handler.py
----------------------------
JSON endpoints under /api/StudentAPI.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from handlers.responses import created_response, list_response, record_response, to_response
from schemas.student import StudentIn
from services.student_service import StudentService

router = APIRouter(prefix="/api/StudentAPI", tags=["Students"])
student_service = StudentService()


def get_student_service() -> StudentService:
    return student_service


@router.get("/ListStudents")
def list_students(
    search_key: Optional[str] = Query(None, alias="searchKey"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    service: StudentService = Depends(get_student_service),
):
    """All students, optionally filtered by name/number and enrolment date range."""
    return list_response(service.list_students(search_key, start_date, end_date))


@router.get("/FindStudent/{student_id}")
def find_student(student_id: int, service: StudentService = Depends(get_student_service)):
    return record_response(service.find_student(student_id))


@router.post("/AddStudent")
def add_student(payload: StudentIn, service: StudentService = Depends(get_student_service)):
    """
    Create a student and enrol them in the pre-selected courses.

    Example body:
        {"StudentFname": "Folake", "StudentLname": "Bamidele",
         "StudentNumber": "N1234", "EnrolDate": "2023-09-01",
         "Courses": [{"CourseId": 3}]}
    """
    outcome = service.add_student(payload.to_model(), payload.course_ids())
    return created_response(outcome, "student_id")


@router.put("/UpdateStudent")
def update_student(payload: StudentIn, service: StudentService = Depends(get_student_service)):
    return to_response(service.update_student(payload.to_model()))


@router.post("/DeleteStudent/{student_id}")
def delete_student(student_id: int, service: StudentService = Depends(get_student_service)):
    return to_response(service.delete_student(student_id))


@router.get("/GetCoursesByStudent/{student_id}")
def get_courses_by_student(student_id: int, service: StudentService = Depends(get_student_service)):
    return list_response(service.get_courses_by_student(student_id))
