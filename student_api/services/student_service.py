"""
Student API - Student Service
=============================

What:  The five CRUD operations over `mst_student`, one SQL statement each.
How:   Builds parameterized Core statements against the table mapping and runs
       them through the injected DatabaseGateway.
Who:   Called by the `/students` route handlers.

Behaviour worth knowing:
    - list/get scan rows positionally (id, name, email, address, birth_date, gender)
    - get distinguishes "no row" (NotFoundError) from a failed query (DatabaseError)
    - create/update return the caller's input, not a re-read of the stored row
    - update/delete ignore the affected-row count: a missing id is a silent no-op
    - duplicate ids on create are not checked here; the table's constraint
      rejects them and the raw driver message surfaces as DatabaseError
"""

import logging
from datetime import timezone
from typing import List

from fastapi import Depends
from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Row

from student_api.database import DatabaseGateway, get_gateway
from student_api.exceptions import NotFoundError
from student_api.models.student import STUDENT_COLUMNS, StudentRecord
from student_api.schemas.student import Student, StudentUpdate

logger = logging.getLogger(__name__)

students_table = StudentRecord.__table__


def _scan(row: Row) -> Student:
    """
    Map a positional `mst_student` row onto a Student.

    Backends without time zone support (SQLite) return naive timestamps;
    those are read as UTC.
    """
    fields = dict(zip(STUDENT_COLUMNS, row))
    birth_date = fields["birth_date"]
    if birth_date is not None and birth_date.tzinfo is None:
        fields["birth_date"] = birth_date.replace(tzinfo=timezone.utc)
    return Student(**fields)


class StudentService:
    """
    CRUD operations for students.

    Stateless apart from the gateway it is constructed with, so a fresh
    instance per request costs nothing and tests can pass any stand-in.
    """

    def __init__(self, gateway: DatabaseGateway):
        self.gateway = gateway

    async def list_students(self) -> List[Student]:
        """
        Return every stored student.

        Order is whatever the database iterates in; no ORDER BY is applied.
        An empty table yields an empty list.
        """
        rows = await self.gateway.fetch_all(select(students_table))
        return [_scan(row) for row in rows]

    async def get_student(self, student_id: int) -> Student:
        """
        Fetch one student by id.

        Raises:
            NotFoundError: no row has this id (→ 404)
            DatabaseError: the query itself failed (→ 500)
        """
        row = await self.gateway.fetch_one(
            select(students_table).where(students_table.c.id == student_id)
        )
        if row is None:
            raise NotFoundError(resource="Student", resource_id=student_id)
        return _scan(row)

    async def create_student(self, student: Student) -> Student:
        await self.gateway.execute(
            insert(students_table).values(**student.model_dump())
        )
        logger.info("Created student %s", student.id)
        return student

    async def update_student(self, student_id: int, student: StudentUpdate) -> StudentUpdate:
        """Replace the five non-id fields of the row matching `student_id`."""
        affected = await self.gateway.execute(
            update(students_table)
            .where(students_table.c.id == student_id)
            .values(**student.model_dump(exclude={"id"}))
        )
        logger.info("Updated student %s (%s row(s))", student_id, affected)
        return student

    async def delete_student(self, student_id: int) -> None:
        affected = await self.gateway.execute(
            delete(students_table).where(students_table.c.id == student_id)
        )
        logger.info("Deleted student %s (%s row(s))", student_id, affected)


def get_student_service(
    gateway: DatabaseGateway = Depends(get_gateway),
) -> StudentService:
    """FastAPI dependency wiring the process gateway into a StudentService."""
    return StudentService(gateway)
