"""
Student API - Students Route Handlers
=====================================

What:  The five `/students` endpoints.
How:   Each handler parses the path id (when there is one), lets FastAPI parse
       the JSON body, delegates to StudentService, and picks the status code.
       Failures are raised as application exceptions and rendered by the
       handlers registered in main.py.

    GET    /students        → 200 [Student, ...]
    GET    /students/{id}   → 200 Student | 400 Invalid ID | 404 Student not found
    POST   /students        → 201 echoed body | 400 malformed body | 500 storage error
    PUT    /students/{id}   → 200 echoed body | 400 | 500
    DELETE /students/{id}   → 204 empty | 400 | 500
"""

import logging
import re
from typing import List

from fastapi import APIRouter, Depends, Response, status

from student_api.exceptions import ValidationError
from student_api.models.student import ID_MAX, ID_MIN
from student_api.schemas.student import ErrorResponse, Student, StudentUpdate
from student_api.services.student_service import StudentService, get_student_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["Students"])

_INTEGER_ID = re.compile(r"[+-]?[0-9]+")


def parse_student_id(raw: str) -> int:
    """
    Parse a path segment as an ASCII decimal integer id.

    Runs before any storage access, so a bad id never reaches the database.

    Raises:
        ValidationError: the segment is not an integer, or does not fit the
            `id` column (→ 400 "Invalid ID")
    """
    if _INTEGER_ID.fullmatch(raw):
        student_id = int(raw)
        if ID_MIN <= student_id <= ID_MAX:
            return student_id
    raise ValidationError(message="Invalid ID", field="id", context={"value": raw})


@router.get(
    "",
    response_model=List[Student],
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="List all students",
)
async def list_students(
    service: StudentService = Depends(get_student_service),
) -> List[Student]:
    return await service.list_students()


@router.get(
    "/{student_id}",
    response_model=Student,
    responses={
        400: {"description": "Invalid ID", "model": ErrorResponse},
        404: {"description": "Student not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Get a student by id",
)
async def get_student(
    student_id: str,
    service: StudentService = Depends(get_student_service),
) -> Student:
    return await service.get_student(parse_student_id(student_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Student,
    responses={
        400: {"description": "Malformed body", "model": ErrorResponse},
        500: {"description": "Storage error, including duplicate id", "model": ErrorResponse},
    },
    summary="Create a student",
    description="Inserts all six fields. The response echoes the request body.",
)
async def create_student(
    student: Student,
    service: StudentService = Depends(get_student_service),
) -> Student:
    return await service.create_student(student)


@router.put(
    "/{student_id}",
    response_model=StudentUpdate,
    response_model_exclude_unset=True,
    responses={
        400: {"description": "Invalid ID or malformed body", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Replace a student's fields",
    description=(
        "Overwrites name, email, address, birth_date and gender of the row "
        "matching the path id. A missing id is not an error; the body is echoed "
        "either way."
    ),
)
async def update_student(
    student_id: str,
    student: StudentUpdate,
    service: StudentService = Depends(get_student_service),
) -> StudentUpdate:
    return await service.update_student(parse_student_id(student_id), student)


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Invalid ID", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Delete a student",
    description="Deleting an id that does not exist also returns 204.",
)
async def delete_student(
    student_id: str,
    service: StudentService = Depends(get_student_service),
) -> Response:
    await service.delete_student(parse_student_id(student_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
