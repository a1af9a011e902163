"""
Student API - Routes Package
============================

What:  FastAPI routers mounted by the app factory.

    students.py → GET/POST /students, GET/PUT/DELETE /students/{id}
"""
