"""
Q&A API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

SortDirection = Literal["asc", "desc"]


class QnaCreateRequest(BaseModel):
    """
    Body of the legacy `POST /qna` endpoint. `product_id` was never sent by
    the first clients, so it stays optional here.
    """

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)
    secret: bool = False
    product_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("product_id", "productId"),
    )


class QnaSaveRequest(BaseModel):
    product_id: int = Field(..., validation_alias=AliasChoices("product_id", "productId"))
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)
    secret: bool = False


class QnaUpdateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)


class QnaAnswerRequest(BaseModel):
    # Nullable so a missing answer reaches the handler and gets a 400, not a 422.
    answer: str | None = Field(default=None, max_length=5000)


class QnaView(BaseModel):
    id: int
    user_name: str
    title: str
    content: str
    answer: str | None
    secret: bool
    created_at: str
    is_author: bool


class QnaDetail(BaseModel):
    id: int
    user_id: str | None
    product_id: int
    title: str
    content: str
    answer: str | None
    secret: bool
    created_at: datetime
    updated_at: datetime | None
    answered_at: datetime | None
    answered_by: str | None
    is_author: bool


class QnaPage(BaseModel):
    items: list[QnaView]
    page: int
    size: int
    total: int
    total_pages: int
    direction: SortDirection
    query: str
