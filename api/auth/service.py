"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import repository, schemas, security
from .identity import Caller, Identity, Role

logger = logging.getLogger(__name__)


def _to_identity(row: dict, *, role: Role) -> Identity:
    return Identity(
        username=str(row["username"]),
        role=role,
        is_admin=bool(row.get("is_admin", False)),
    )


async def resolve_identity(username: str | None, role: Role) -> Identity | None:
    """
    Look the username up in the store that backs `role`.

    Missing or inactive accounts resolve to None.
    """
    name = repository.normalize_username(username or "")
    if not name:
        return None

    row = await repository.get_account(name, role=role)
    if row is None or not bool(row.get("is_active", False)):
        return None
    return _to_identity(row, role=role)


async def login(payload: schemas.LoginRequest) -> schemas.TokenResponse:
    row = await repository.get_account(payload.username, role=payload.role)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    if not bool(row.get("is_active", False)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive.",
        )

    if not security.verify_password(payload.password, str(row.get("password_hash") or "")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    identity = _to_identity(row, role=payload.role)
    roles = identity.roles()
    logger.info("login_ok username=%s roles=%s", identity.username, ",".join(roles))
    return schemas.TokenResponse(
        access_token=security.build_access_token(username=identity.username, roles=roles),
        username=identity.username,
        roles=roles,
    )


def caller_from_access_token(access_token: str) -> Caller:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
        )

    raw_roles = payload.get("roles")
    roles = tuple(str(r).upper() for r in raw_roles) if isinstance(raw_roles, list) else ()
    return Caller(username=subject, roles=roles)


def me(caller: Caller) -> schemas.CallerResponse:
    return schemas.CallerResponse(username=caller.username, roles=list(caller.roles))
