"""
Q&A business logic.

Scope:
- questions: create (current and legacy paths), read, edit, delete
- answers: sellers attach an answer to a question
- listing: paginated search and per-product lists, masked per caller

The answer and save paths report outcomes as plain-text messages with a
status code (`TextResult`); the other paths raise `HTTPException`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from fastapi import HTTPException, status

from auth import service as auth_service
from auth.identity import Caller, Role
from catalog import repository as catalog_repository
from core import db, settings

from . import repository, schemas, views

logger = logging.getLogger(__name__)

QUESTION_REGISTERED = "Question registered."
ANSWER_REGISTERED = "Answer registered."
ANSWER_MISSING = "Answer content is missing."
NO_SELLER_ACCOUNT = "No seller account is allowed to answer."
NO_USER_ACCOUNT = "No user account is linked to this login."
PRODUCT_NOT_FOUND = "Product not found."


@dataclass(frozen=True)
class TextResult:
    status_code: int
    message: str


class ProductNotFoundError(LookupError):
    pass


def _reader_name(caller: Caller | None) -> str | None:
    """
    Username the caller reads as when matching question owners.

    Owners live in the user store, so only USER-role callers can match one;
    a seller sharing a username with a user is a different identity.
    """
    if caller is None or not caller.has_role(Role.USER.value):
        return None
    return caller.username


async def _is_seller(caller: Caller | None) -> bool:
    if caller is None or not caller.may_moderate:
        return False
    return await auth_service.resolve_identity(caller.username, Role.SELLER) is not None


async def _get_qna_or_404(qna_id: int) -> dict:
    row = await repository.get_qna(qna_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found.")
    return row


async def list_qnas(
    *,
    search_query: str | None = None,
    page: int = 0,
    size: int | None = None,
    direction: schemas.SortDirection = "desc",
    caller: Caller | None = None,
) -> schemas.QnaPage:
    page = max(0, page)
    size = max(1, min(size or settings.default_page_size(), settings.max_page_size()))
    query = (search_query or "").strip()
    caller_username = _reader_name(caller)

    total = await repository.count_qnas(search_query=query, caller_username=caller_username)
    rows = await repository.list_qnas(
        search_query=query,
        caller_username=caller_username,
        limit=size,
        offset=page * size,
        direction=direction,
    )
    return schemas.QnaPage(
        items=[views.render_view(row, caller_username) for row in rows],
        page=page,
        size=size,
        total=total,
        total_pages=math.ceil(total / size) if total else 0,
        direction=direction,
        query=query,
    )


async def list_by_product(product_id: int, *, caller: Caller | None = None) -> list[schemas.QnaView]:
    rows = await repository.list_qnas_by_product(product_id)
    caller_username = _reader_name(caller)
    return [views.render_view(row, caller_username) for row in rows]


async def get_detail(qna_id: int, *, caller: Caller | None = None) -> schemas.QnaDetail:
    row = await _get_qna_or_404(qna_id)
    privileged = bool(row["secret"]) and await _is_seller(caller)
    return views.render_detail(row, _reader_name(caller), privileged=privileged)


async def create_legacy(payload: schemas.QnaCreateRequest, *, caller: Caller) -> None:
    """
    Older create path: nothing is reported back, failures are only logged.
    """
    user = await auth_service.resolve_identity(caller.username, Role.USER)
    if user is None:
        logger.warning("legacy_create_skipped reason=no_user username=%s", caller.username)
        return None

    product_id = payload.product_id
    if product_id is None:
        product_id = settings.legacy_product_id()
        logger.warning(
            "legacy_create_placeholder_product username=%s product_id=%s",
            user.username,
            product_id,
        )

    async with db.transaction():
        if await catalog_repository.get_product_by_id(product_id) is None:
            logger.warning("legacy_create_skipped reason=no_product product_id=%s", product_id)
            return None
        row = await repository.insert_qna(
            title=payload.title,
            content=payload.content,
            secret=payload.secret,
            user_id=user.username,
            product_id=product_id,
        )
    logger.info("qna_created id=%s product_id=%s path=legacy", row["id"], product_id)
    return None


async def save_question(payload: schemas.QnaSaveRequest, *, caller: Caller) -> TextResult:
    try:
        async with db.transaction():
            product = await catalog_repository.get_product_by_id(payload.product_id)
            if product is None:
                raise ProductNotFoundError(PRODUCT_NOT_FOUND)

            user = await auth_service.resolve_identity(caller.username, Role.USER)
            if user is None:
                return TextResult(status.HTTP_403_FORBIDDEN, NO_USER_ACCOUNT)

            row = await repository.insert_qna(
                title=payload.title,
                content=payload.content,
                secret=payload.secret,
                user_id=user.username,
                product_id=int(product["id"]),
            )
    except ProductNotFoundError as exc:
        logger.warning("qna_save_failed product_id=%s error=%s", payload.product_id, exc)
        return TextResult(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to register question: {exc}")
    except Exception as exc:
        logger.exception("qna_save_failed product_id=%s username=%s", payload.product_id, caller.username)
        return TextResult(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to register question: {exc}")

    logger.info("qna_created id=%s product_id=%s secret=%s", row["id"], row["product_id"], row["secret"])
    return TextResult(status.HTTP_201_CREATED, QUESTION_REGISTERED)


async def update_question(qna_id: int, payload: schemas.QnaUpdateRequest, *, caller: Caller) -> None:
    title = payload.title.strip()
    content = payload.content.strip()
    if not title or not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title and content are required.")

    async with db.transaction():
        row = await _get_qna_or_404(qna_id)
        if not views.is_author(row, _reader_name(caller)):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the author can edit this question.",
            )
        await repository.update_qna(qna_id, title=title, content=content)
    logger.info("qna_updated id=%s", qna_id)


async def delete_question(qna_id: int, *, caller: Caller) -> None:
    async with db.transaction():
        row = await _get_qna_or_404(qna_id)
        owner = views.is_author(row, _reader_name(caller))
        if not owner and not await _is_seller(caller):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the author or a seller can delete this question.",
            )
        await repository.delete_qna(qna_id)
    logger.info("qna_deleted id=%s by=%s", qna_id, caller.username)


async def answer_question(qna_id: int, payload: schemas.QnaAnswerRequest, *, caller: Caller) -> TextResult:
    answer = payload.answer
    if answer is None or not answer.strip():
        return TextResult(status.HTTP_400_BAD_REQUEST, ANSWER_MISSING)

    # Route access is already limited to seller/admin tokens upstream; the
    # account itself must still exist in the seller store.
    seller = await auth_service.resolve_identity(caller.username, Role.SELLER)
    if seller is None:
        return TextResult(status.HTTP_403_FORBIDDEN, NO_SELLER_ACCOUNT)

    try:
        await repository.update_answer(qna_id, answer=answer, seller_username=seller.username)
    except Exception as exc:
        # Unknown ids land here too and are reported as a server error.
        logger.exception("qna_answer_failed id=%s seller=%s", qna_id, seller.username)
        return TextResult(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Failed to register answer: {exc}")

    logger.info("qna_answered id=%s seller=%s", qna_id, seller.username)
    return TextResult(status.HTTP_200_OK, ANSWER_REGISTERED)
