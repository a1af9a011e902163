"""
Student API - Student Table Mapping
===================================

What:  SQLAlchemy mapping of the pre-existing `mst_student` table.
How:   Used only to build typed, parameterized Core statements
       (select / insert / update / delete). The service never creates or
       migrates the table.

Column order matters: `SELECT *` rows are scanned positionally as
id, name, email, address, birth_date, gender.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from student_api.database import Base

# Signed 32-bit range of the INTEGER id column
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1

STUDENT_COLUMNS = ("id", "name", "email", "address", "birth_date", "gender")


class StudentRecord(Base):
    """
    One row of `mst_student`.

    `id` is supplied by the caller on create, never generated. Uniqueness is
    whatever the table's own constraint enforces.
    """

    __tablename__ = "mst_student"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(Text)
    email: Mapped[str] = mapped_column(Text)
    address: Mapped[str] = mapped_column(Text)
    birth_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    gender: Mapped[str] = mapped_column(Text)
