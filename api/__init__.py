"""
FastAPI REST API for the Book Directory.

This package provides:
- CRUD endpoints for books under /api
- MongoDB persistence through Motor
- Generated OpenAPI documentation served at /
"""
