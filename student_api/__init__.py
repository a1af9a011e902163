"""
Student API - Application Package
=================================

What:  A small FastAPI service exposing CRUD endpoints over the `mst_student` table.
How:   Requests flow through a thin layered stack:

    ┌─────────────────────────────────────┐
    │      Routes (students handlers)     │  ← path parsing, status codes
    ├─────────────────────────────────────┤
    │          StudentService             │  ← one SQL statement per operation
    ├─────────────────────────────────────┤
    │    Models (table) & Schemas (JSON)  │  ← SQLAlchemy mapping + Pydantic
    ├─────────────────────────────────────┤
    │   DatabaseGateway (persistence)     │  ← pooled async engine, ping, execute
    └─────────────────────────────────────┘

The gateway is created once by the application lifespan and handed to the
handlers through FastAPI dependencies; nothing else is shared between requests.
"""

__version__ = "1.0.0"
