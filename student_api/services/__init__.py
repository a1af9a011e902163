"""
Student API - Services Package
==============================

What:  Business operations kept apart from HTTP concerns.

    student_service.py → StudentService, the CRUD operations over mst_student
"""
