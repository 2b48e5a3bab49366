"""
Read-time shaping of question rows.

Secret questions are masked here, on every read, and never in storage:
only the author sees the real title and content. The answer stays public.
"""

from __future__ import annotations

from datetime import datetime

from . import schemas

SECRET_TITLE = "비밀글입니다"
SECRET_CONTENT = "🔒 비밀글입니다. 작성자만 열람할 수 있습니다."
ANONYMOUS_NAME = "익명"
CREATED_AT_FORMAT = "%Y-%m-%d %H:%M"


def format_created_at(value: datetime) -> str:
    return value.strftime(CREATED_AT_FORMAT)


def is_author(row: dict, caller_username: str | None) -> bool:
    # `caller_username` must come from a USER-role caller; sellers never own questions.
    owner = row.get("user_id")
    return bool(caller_username) and owner is not None and caller_username == owner


def render_view(row: dict, caller_username: str | None) -> schemas.QnaView:
    author = is_author(row, caller_username)
    secret = bool(row["secret"])
    hidden = secret and not author

    owner = row.get("user_id")
    return schemas.QnaView(
        id=int(row["id"]),
        user_name=str(owner) if owner is not None else ANONYMOUS_NAME,
        title=SECRET_TITLE if hidden else str(row["title"]),
        content=SECRET_CONTENT if hidden else str(row["content"]),
        answer=row.get("answer"),
        secret=secret,
        created_at=format_created_at(row["created_at"]),
        is_author=author,
    )


def render_detail(row: dict, caller_username: str | None, *, privileged: bool = False) -> schemas.QnaDetail:
    """
    Full record for the detail page.

    `privileged` callers (sellers, admins) read secret questions unmasked so
    they can answer them.
    """
    author = is_author(row, caller_username)
    hidden = bool(row["secret"]) and not author and not privileged
    return schemas.QnaDetail(
        id=int(row["id"]),
        user_id=row.get("user_id"),
        product_id=int(row["product_id"]),
        title=SECRET_TITLE if hidden else str(row["title"]),
        content=SECRET_CONTENT if hidden else str(row["content"]),
        answer=row.get("answer"),
        secret=bool(row["secret"]),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
        answered_at=row.get("answered_at"),
        answered_by=row.get("answered_by"),
        is_author=author,
    )
