"""
Q&A API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from auth import dependencies as auth_dependencies
from auth.identity import ADMIN_ROLE, Caller, Role

from . import schemas, service

router = APIRouter(prefix="/qna")


def _text(result: service.TextResult) -> PlainTextResponse:
    return PlainTextResponse(result.message, status_code=result.status_code)


@router.get("/list", response_model=schemas.QnaPage)
async def list_qnas(
    q: str | None = Query(default=None, max_length=200),
    page: int = Query(0, ge=0),
    size: int | None = Query(default=None, ge=1),
    direction: schemas.SortDirection = Query("desc"),
    caller: Caller | None = Depends(auth_dependencies.get_optional_caller),
) -> schemas.QnaPage:
    return await service.list_qnas(
        search_query=q,
        page=page,
        size=size,
        direction=direction,
        caller=caller,
    )


@router.get("/product/{product_id}", response_model=list[schemas.QnaView])
async def list_by_product(
    product_id: int,
    caller: Caller | None = Depends(auth_dependencies.get_optional_caller),
) -> list[schemas.QnaView]:
    return await service.list_by_product(product_id, caller=caller)


@router.post("/save", response_class=PlainTextResponse)
async def save_question(
    payload: schemas.QnaSaveRequest,
    caller: Caller = Depends(auth_dependencies.get_current_caller),
) -> PlainTextResponse:
    return _text(await service.save_question(payload, caller=caller))


@router.post("")
async def create_qna(
    payload: schemas.QnaCreateRequest,
    caller: Caller = Depends(auth_dependencies.get_current_caller),
) -> None:
    """
    Legacy create endpoint. Prefer `POST /qna/save`, which reports failures.
    """
    await service.create_legacy(payload, caller=caller)


@router.put("/answer/{qna_id}", response_class=PlainTextResponse)
async def answer_question(
    qna_id: int,
    payload: schemas.QnaAnswerRequest,
    caller: Caller = Depends(auth_dependencies.require_any_role(Role.SELLER.value, ADMIN_ROLE)),
) -> PlainTextResponse:
    return _text(await service.answer_question(qna_id, payload, caller=caller))


@router.get("/{qna_id}", response_model=schemas.QnaDetail)
async def get_qna(
    qna_id: int,
    caller: Caller | None = Depends(auth_dependencies.get_optional_caller),
) -> schemas.QnaDetail:
    return await service.get_detail(qna_id, caller=caller)


@router.put("/{qna_id}")
async def update_qna(
    qna_id: int,
    payload: schemas.QnaUpdateRequest,
    caller: Caller = Depends(auth_dependencies.get_current_caller),
) -> None:
    await service.update_question(qna_id, payload, caller=caller)


@router.delete("/{qna_id}")
async def delete_qna(
    qna_id: int,
    caller: Caller = Depends(auth_dependencies.get_current_caller),
) -> None:
    await service.delete_question(qna_id, caller=caller)
