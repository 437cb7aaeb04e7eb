"""
FastAPI dependencies for dependency injection.

The database service is built by the application lifespan and kept on
``app.state``; handlers receive it through ``Depends(get_db_service)``.
"""

from fastapi import Request

from api.database import BookDatabaseService
from api.errors import StoreError


def get_db_service(request: Request) -> BookDatabaseService:
    """Provide the database service owned by the running application."""
    db_service = getattr(request.app.state, "db_service", None)
    if db_service is None:
        raise StoreError("Database service not available")
    return db_service
