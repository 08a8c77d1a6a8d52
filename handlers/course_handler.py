"""
handlers/course_handler.py
---------------------------
JSON endpoints under /api/CourseAPI.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from handlers.responses import created_response, list_response, record_response, to_response
from schemas.course import CourseIn
from services.course_service import CourseService

router = APIRouter(prefix="/api/CourseAPI", tags=["Courses"])
course_service = CourseService()


def get_course_service() -> CourseService:
    return course_service


@router.get("/ListCourses")
def list_courses(
    search_key: Optional[str] = Query(None, alias="searchKey"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    service: CourseService = Depends(get_course_service),
):
    return list_response(service.list_courses(search_key, start_date, end_date))


@router.get("/ListCoursesByTeacher/{teacher_id}")
def list_courses_by_teacher(teacher_id: int, service: CourseService = Depends(get_course_service)):
    return list_response(service.list_courses_by_teacher(teacher_id))


@router.get("/FindCourse/{course_id}")
def find_course(course_id: int, service: CourseService = Depends(get_course_service)):
    return record_response(service.find_course(course_id))


@router.post("/AddCourse")
def add_course(payload: CourseIn, service: CourseService = Depends(get_course_service)):
    """
    Create a course.

    Example body:
        {"CourseCode": "http1001", "CourseName": "Intro",
         "StartDate": "2024-01-01", "FinishDate": "2024-06-01", "TeacherId": 3}
    """
    return created_response(service.add_course(payload.to_model()), "course_id")


@router.put("/UpdateCourse")
def update_course(payload: CourseIn, service: CourseService = Depends(get_course_service)):
    return to_response(service.update_course(payload.to_model()))


@router.post("/DeleteCourse/{course_id}")
def delete_course(course_id: int, service: CourseService = Depends(get_course_service)):
    return to_response(service.delete_course(course_id))


@router.get("/GetStudentsByCourse/{course_id}")
def get_students_by_course(course_id: int, service: CourseService = Depends(get_course_service)):
    return list_response(service.get_students_by_course(course_id))
