"""
Book routes, mounted under ``/api`` by ``api.main``.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.database import BookDatabaseService
from api.dependencies import get_db_service
from api.errors import BookNotFoundError
from api.models import BookPayload, BookResponse, ErrorResponse, MessageResponse
from utilities.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Books"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Book not found"}}
INVALID_BODY = {400: {"model": ErrorResponse, "description": "Invalid book payload"}}


@router.get("/books", response_model=List[BookResponse], summary="Retrieve a list of books.")
async def list_books(db_service: BookDatabaseService = Depends(get_db_service)):
    """Retrieve every book from the database. Hidden books are included."""
    return await db_service.list_books()


@router.get(
    "/book/{book_id}",
    response_model=BookResponse,
    responses=NOT_FOUND,
    summary="Retrieve a single book.",
)
async def get_book(book_id: str, db_service: BookDatabaseService = Depends(get_db_service)):
    """
    Retrieve a single book from the database.

    - **book_id**: ObjectId of the book to retrieve
    """
    book = await db_service.get_book_by_id(book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


@router.post(
    "/books",
    response_model=BookResponse,
    responses=INVALID_BODY,
    summary="Create a book.",
)
async def create_book(
    payload: BookPayload,
    db_service: BookDatabaseService = Depends(get_db_service)
):
    """Create a book. The id and creation date are assigned by the server."""
    return await db_service.create_book(payload)


@router.put(
    "/book/{book_id}",
    response_model=BookResponse,
    responses={**NOT_FOUND, **INVALID_BODY},
    summary="Update a book.",
)
async def update_book(
    book_id: str,
    payload: BookPayload,
    db_service: BookDatabaseService = Depends(get_db_service)
):
    """
    Replace the name and author of a book, and its visibility when given.
    Returns the stored book after the update.

    - **book_id**: ObjectId of the book to update
    """
    book = await db_service.update_book(book_id, payload)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


@router.delete("/book/{book_id}", response_model=MessageResponse, summary="Delete a book.")
async def delete_book(book_id: str, db_service: BookDatabaseService = Depends(get_db_service)):
    """
    Delete a book. Succeeds whether or not the book exists.

    - **book_id**: ObjectId of the book to delete
    """
    deleted = await db_service.delete_book(book_id)
    if not deleted:
        logger.debug("Delete matched no book", book_id=book_id)
    return MessageResponse(message="Success")
