"""
Student API - Pydantic Request/Response Schemas
===============================================

What:  The JSON contract for the `/students` endpoints.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. Field names match the table columns.

    Student        → create body, get/list response (all six fields required)
    StudentUpdate  → update body; `id` optional and never used for the lookup
    ErrorResponse  → `{"error": "..."}` body of every failure
"""

from typing import Optional

from pydantic import AwareDatetime, BaseModel, Field

from student_api.models.student import ID_MAX, ID_MIN


class Student(BaseModel):
    """
    Full student record.

    `birth_date` is an ISO-8601 date-time with an explicit offset, e.g.
    "2000-01-01T00:00:00Z". A date-time without one is rejected.
    """
    id: int = Field(
        ge=ID_MIN, le=ID_MAX, description="Caller-supplied identifier, unique in storage"
    )
    name: str = Field(description="Full name")
    email: str = Field(description="Email address")
    address: str = Field(description="Postal address")
    birth_date: AwareDatetime = Field(description="Date of birth (ISO 8601 date-time)")
    gender: str = Field(description="Gender")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": 1,
                "name": "Ann",
                "email": "a@x.com",
                "address": "1 Main St",
                "birth_date": "2000-01-01T00:00:00Z",
                "gender": "F",
            }
        },
    }


class StudentUpdate(BaseModel):
    """
    Body of PUT /students/{id}.

    All five non-id fields are replaced. `id` may be sent and is echoed back,
    but the row is always located by the path id.
    """
    id: Optional[int] = Field(
        default=None, ge=ID_MIN, le=ID_MAX, description="Ignored for the lookup; echoed"
    )
    name: str
    email: str
    address: str
    birth_date: AwareDatetime
    gender: str


class ErrorResponse(BaseModel):
    """Error body returned by every failing request."""
    error: str = Field(description="Error message (raw driver text for storage failures)")
