# app/schemas/review_schema.py
"""
Review schemas for request/response models.

Request fields are optional at the schema level: presence, emptiness
and range checks live in the review service so each failure gets its
own error message.
"""

from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)


class ReviewCreate(BaseModel):
    """Schema for creating a review."""

    comment: Optional[str] = Field(
        default=None,
        description="Review text",
        examples=["Great book! Highly recommended."],
    )
    # Strict members keep the raw JSON type so the service can reject
    # booleans and fractional numbers with the rating message.
    rating: Optional[Union[StrictInt, StrictFloat, StrictStr, StrictBool]] = Field(
        default=None,
        description="Rating from 1 to 5 stars",
        examples=[5],
    )


class ReviewResponse(BaseModel):
    """Review as returned to clients, without the book back-reference."""

    id: int
    comment: str
    rating: int

    model_config = ConfigDict(from_attributes=True)
