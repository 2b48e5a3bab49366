"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from . import dependencies, schemas, service
from .identity import Caller

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=schemas.TokenResponse)
async def login(payload: schemas.LoginRequest) -> schemas.TokenResponse:
    return await service.login(payload)


@router.get("/me", response_model=schemas.CallerResponse)
async def me(caller: Caller = Depends(dependencies.get_current_caller)) -> schemas.CallerResponse:
    return service.me(caller)
