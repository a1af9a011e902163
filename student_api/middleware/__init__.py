"""
Student API - Middleware Package
================================

What:  Cross-cutting request handling shared by every route.

Middleware Chain:
    Request → [Request ID] → [Access Log] → Route Handler

The request id is set first so the access log line carries it.
"""
