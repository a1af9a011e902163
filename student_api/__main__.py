"""
Student API - Process Entry Point
=================================

Usage:
    python -m student_api        (or the `student-api` console script)

Serves `student_api.main:app` with uvicorn on HOST:PORT (PORT defaults to 8080).
"""

import uvicorn

from student_api.config import settings


def main() -> None:
    uvicorn.run(
        "student_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
