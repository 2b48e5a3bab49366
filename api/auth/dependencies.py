"""
Auth dependencies for FastAPI routes.

`get_current_caller` rejects anonymous requests; `get_optional_caller` lets
them through as None. Both reject a header that is present but invalid.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import service
from .identity import Caller


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header.",
        )

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format.",
        )

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_caller(access_token: str = Depends(get_bearer_token)) -> Caller:
    return service.caller_from_access_token(access_token)


async def get_optional_caller(authorization: str | None = Header(default=None)) -> Caller | None:
    if not (authorization or "").strip():
        return None
    return service.caller_from_access_token(_extract_bearer_token(authorization))


def require_any_role(*roles: str):
    """
    Dependency factory: the caller's token must carry at least one of `roles`.
    """
    wanted = {r.upper() for r in roles}

    async def _check(caller: Caller = Depends(get_current_caller)) -> Caller:
        if not wanted.intersection(caller.roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role.",
            )
        return caller

    return _check
