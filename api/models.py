"""
API models and schemas for the Book Directory API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class BookPayload(BaseModel):
    """
    Request body for creating or updating a book.

    Unknown keys are rejected, so a validated payload carries exactly
    ``name``, ``author`` and optionally ``hidden``.
    """
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {"name": "Half Girlfriend", "author": "Chetan Bhagat"}
        },
    )

    name: str = Field(..., min_length=1, description="The book's name")
    author: str = Field(..., min_length=1, description="The author's name")
    hidden: StrictBool = Field(False, description="Visibility of the book")

    def to_document(self) -> dict:
        """Fields to insert for a new book."""
        return self.model_dump()

    def to_update(self) -> dict:
        """Fields to ``$set`` on an existing book; ``hidden`` only when sent."""
        return self.model_dump(exclude_unset=True)


class BookResponse(BaseModel):
    """Book response model for API."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="The book ID")
    name: str = Field(..., description="The book's name")
    author: str = Field(..., description="The author's name")
    hidden: bool = Field(False, description="Visibility of the book")
    date_created: datetime = Field(
        ..., alias="dateCreated", description="When the book was created"
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""
    message: str = Field(..., description="Outcome of the operation")


class ErrorResponse(BaseModel):
    """Error response model."""
    message: str = Field(..., description="Error message")
    stack: Optional[str] = Field(None, description="Traceback, only in debug mode")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    database_status: str = Field(..., description="Database connection status")
