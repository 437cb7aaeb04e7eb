"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from bson import ObjectId
from bson.errors import InvalidId
from fastapi.testclient import TestClient

from api.dependencies import get_db_service
from api.main import create_app
from api.models import BookPayload, BookResponse
from utilities.config import BookDirectoryConfig


class InMemoryBookService:
    """Dict-backed stand-in for BookDatabaseService."""

    def __init__(self):
        self.books: Dict[str, Dict] = {}

    @staticmethod
    def _valid(book_id: str) -> bool:
        try:
            ObjectId(book_id)
            return True
        except (InvalidId, TypeError):
            return False

    async def list_books(self) -> List[BookResponse]:
        return [BookResponse(**doc) for doc in self.books.values()]

    async def get_book_by_id(self, book_id: str) -> Optional[BookResponse]:
        doc = self.books.get(book_id)
        return BookResponse(**doc) if doc else None

    async def create_book(self, payload: BookPayload) -> BookResponse:
        book_id = str(ObjectId())
        doc = {
            "id": book_id,
            **payload.to_document(),
            "dateCreated": datetime.now(timezone.utc),
        }
        self.books[book_id] = doc
        return BookResponse(**doc)

    async def update_book(self, book_id: str, payload: BookPayload) -> Optional[BookResponse]:
        if not self._valid(book_id) or book_id not in self.books:
            return None
        self.books[book_id].update(payload.to_update())
        return BookResponse(**self.books[book_id])

    async def delete_book(self, book_id: str) -> int:
        return 1 if self.books.pop(book_id, None) else 0

    async def health_check(self) -> Dict:
        return {"status": "healthy"}


@pytest.fixture
def app_config():
    """Configuration with debug output disabled."""
    return BookDirectoryConfig(port=3000, debug=False)


@pytest.fixture
def book_service():
    """Fresh in-memory book store."""
    return InMemoryBookService()


@pytest.fixture
def app(app_config, book_service):
    """Application wired to the in-memory store."""
    application = create_app(app_config)
    application.dependency_overrides[get_db_service] = lambda: book_service
    return application


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sample_book():
    """A valid create payload."""
    return {"name": "Half Girlfriend", "author": "Chetan Bhagat"}
