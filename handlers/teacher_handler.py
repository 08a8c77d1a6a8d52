"""
handlers/teacher_handler.py
----------------------------
JSON endpoints under /api/TeacherAPI.

ListTeachers answers 404 when nothing matches, unlike the student
and course listings.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from handlers.responses import created_response, list_response, record_response, to_response
from schemas.teacher import TeacherIn
from services.teacher_service import TeacherService
from utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/TeacherAPI", tags=["Teachers"])
teacher_service = TeacherService()


def get_teacher_service() -> TeacherService:
    return teacher_service


@router.get("/ListTeachers")
def list_teachers(
    search_key: Optional[str] = Query(None, alias="searchKey"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    service: TeacherService = Depends(get_teacher_service),
):
    """
    Teachers whose first, last or full name contains `searchKey`,
    hired between `startDate` and `endDate` when both are given.
    """
    return list_response(service.list_teachers(search_key, start_date, end_date))


@router.get("/ListTeachers/{search_key}")
def list_teachers_by_key(
    search_key: str,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    service: TeacherService = Depends(get_teacher_service),
):
    return list_response(service.list_teachers(search_key, start_date, end_date))


@router.get("/FindTeacher/{teacher_id}")
def find_teacher(teacher_id: int, service: TeacherService = Depends(get_teacher_service)):
    return record_response(service.find_teacher(teacher_id))


@router.post("/AddTeacher")
def add_teacher(payload: TeacherIn, service: TeacherService = Depends(get_teacher_service)):
    return created_response(service.add_teacher(payload.to_model()), "teacher_id")


@router.put("/UpdateTeacher/{teacher_id}")
def update_teacher(
    teacher_id: int,
    payload: TeacherIn,
    service: TeacherService = Depends(get_teacher_service),
):
    logger.info(f"UpdateTeacher called for teacher #{teacher_id}")
    return to_response(service.update_teacher(teacher_id, payload.to_model(teacher_id)))


@router.post("/DeleteTeacher/{teacher_id}")
def delete_teacher(teacher_id: int, service: TeacherService = Depends(get_teacher_service)):
    return to_response(service.delete_teacher(teacher_id))
