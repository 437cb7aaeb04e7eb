"""
Database service layer for the Book Directory API.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from api.errors import StoreError
from api.models import BookPayload, BookResponse
from utilities.logger import get_logger

logger = get_logger(__name__)


def _to_object_id(book_id: str) -> Optional[ObjectId]:
    """Parse a path id; ids that are not ObjectIds cannot match any book."""
    try:
        return ObjectId(book_id)
    except (InvalidId, TypeError):
        return None


def _store_timestamp() -> datetime:
    """Current UTC time at BSON precision, so what we return is what a read returns."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _to_response(book_doc: Dict) -> BookResponse:
    book_doc = dict(book_doc)
    book_doc["id"] = str(book_doc.pop("_id"))
    return BookResponse(**book_doc)


class BookDatabaseService:
    """Database service for book CRUD operations."""

    def __init__(self, database: AsyncIOMotorDatabase, collection_name: str = "books"):
        self.database = database
        self.books_collection = database[collection_name]

    async def list_books(self) -> List[BookResponse]:
        """
        Get every stored book, hidden ones included.

        Returns:
            List of BookResponse, possibly empty
        """
        try:
            cursor = self.books_collection.find({})
            books_docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to list books", error=str(e))
            raise StoreError(f"Failed to list books: {e}") from e

        return [_to_response(book_doc) for book_doc in books_docs]

    async def get_book_by_id(self, book_id: str) -> Optional[BookResponse]:
        """
        Get a single book by ID.

        Args:
            book_id: Book identifier (MongoDB ObjectId string)

        Returns:
            BookResponse if found, None otherwise
        """
        object_id = _to_object_id(book_id)
        if object_id is None:
            return None

        try:
            book_doc = await self.books_collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error("Failed to get book by ID", book_id=book_id, error=str(e))
            raise StoreError(f"Failed to retrieve book: {e}") from e

        if book_doc:
            return _to_response(book_doc)
        return None

    async def create_book(self, payload: BookPayload) -> BookResponse:
        """
        Insert a new book; the store assigns ``_id`` and the creation time is
        stamped here.

        Args:
            payload: Validated book payload

        Returns:
            The created BookResponse
        """
        book_doc = payload.to_document()
        book_doc["dateCreated"] = _store_timestamp()

        try:
            result = await self.books_collection.insert_one(book_doc)
        except PyMongoError as e:
            logger.error("Failed to insert book", book_name=payload.name, error=str(e))
            raise StoreError(f"Failed to create book: {e}") from e

        book_doc["_id"] = result.inserted_id
        logger.info("Book created", book_id=str(result.inserted_id), book_name=payload.name)
        return _to_response(book_doc)

    async def update_book(self, book_id: str, payload: BookPayload) -> Optional[BookResponse]:
        """
        Replace ``name``/``author`` (and ``hidden`` when sent) of an existing book.

        Lookup and write happen in one ``find_one_and_update`` call; ``_id``
        and ``dateCreated`` are never part of the update.

        Returns:
            The persisted BookResponse, or None if no such book exists
        """
        object_id = _to_object_id(book_id)
        if object_id is None:
            return None

        try:
            book_doc = await self.books_collection.find_one_and_update(
                {"_id": object_id},
                {"$set": payload.to_update()},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update book", book_id=book_id, error=str(e))
            raise StoreError(f"Failed to update book: {e}") from e

        if book_doc is None:
            return None

        logger.info("Book updated", book_id=book_id)
        return _to_response(book_doc)

    async def delete_book(self, book_id: str) -> int:
        """
        Delete a book by ID. Missing or malformed ids are a no-op.

        Returns:
            Number of deleted documents (0 or 1)
        """
        object_id = _to_object_id(book_id)
        if object_id is None:
            return 0

        try:
            result = await self.books_collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error("Failed to delete book", book_id=book_id, error=str(e))
            raise StoreError(f"Failed to delete book: {e}") from e

        logger.info("Book deleted", book_id=book_id, deleted=result.deleted_count)
        return result.deleted_count

    async def health_check(self) -> Dict:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            await self.database.command("ping")
            return {"status": "healthy"}
        except PyMongoError as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }
