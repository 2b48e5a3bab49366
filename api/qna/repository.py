"""
Q&A persistence helpers (raw SQL).
"""

from __future__ import annotations

from core import db

_QNA_COLUMNS = """
    q.id, q.title, q.content, q.answer, q.secret, q.created_at, q.updated_at,
    q.answered_at, q.answered_by, q.user_id, q.product_id
"""

# Order direction cannot be a bind parameter; only these two strings are ever interpolated.
_ORDER_BY = {
    "asc": "q.created_at ASC, q.id ASC",
    "desc": "q.created_at DESC, q.id DESC",
}


def _search_filter(first_param: int) -> str:
    """
    Search matches title or content, only on rows the caller may read.

    Uses ${first_param} as the lowered search text and ${first_param + 1}
    as the owner username the caller reads as (NULL for anonymous callers
    and sellers).
    """
    q, caller = f"${first_param}", f"${first_param + 1}"
    return f"""
        ({q} = ''
         OR ((NOT q.secret OR q.user_id = {caller})
             AND (strpos(lower(q.title), {q}) > 0 OR strpos(lower(q.content), {q}) > 0)))
    """


async def count_qnas(*, search_query: str = "", caller_username: str | None = None) -> int:
    q = (search_query or "").strip().lower()
    total = await db.fetch_value(
        f"""
        SELECT count(*)::int
        FROM qna q
        WHERE {_search_filter(1)}
        """,
        q,
        caller_username,
    )
    return int(total or 0)


async def list_qnas(
    *,
    search_query: str = "",
    caller_username: str | None = None,
    limit: int = 10,
    offset: int = 0,
    direction: str = "desc",
) -> list[dict]:
    q = (search_query or "").strip().lower()
    order_by = _ORDER_BY.get(direction, _ORDER_BY["desc"])
    return await db.fetch_all(
        f"""
        SELECT {_QNA_COLUMNS}
        FROM qna q
        WHERE {_search_filter(1)}
        ORDER BY {order_by}
        LIMIT $3
        OFFSET $4
        """,
        q,
        caller_username,
        limit,
        offset,
    )


async def list_qnas_by_product(product_id: int) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_QNA_COLUMNS}
        FROM qna q
        WHERE q.product_id = $1
        ORDER BY q.created_at DESC, q.id DESC
        """,
        product_id,
    )


async def get_qna(qna_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_QNA_COLUMNS}
        FROM qna q
        WHERE q.id = $1
        """,
        qna_id,
    )


async def insert_qna(
    *,
    title: str,
    content: str,
    secret: bool,
    user_id: str,
    product_id: int,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO qna (title, content, secret, user_id, product_id)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id, title, content, answer, secret, created_at, updated_at,
                  answered_at, answered_by, user_id, product_id
        """,
        title,
        content,
        secret,
        user_id,
        product_id,
    )
    if row is None:
        raise RuntimeError("Failed to insert question.")
    return row


async def update_qna(qna_id: int, *, title: str, content: str) -> bool:
    status = await db.execute(
        """
        UPDATE qna
        SET title = $2,
            content = $3,
            updated_at = now()
        WHERE id = $1
        """,
        qna_id,
        title,
        content,
    )
    return db.affected_rows(status) > 0


async def update_answer(qna_id: int, *, answer: str, seller_username: str) -> dict:
    row = await db.fetch_one(
        """
        UPDATE qna
        SET answer = $2,
            answered_by = $3,
            answered_at = now(),
            updated_at = now()
        WHERE id = $1
        RETURNING id, answer, answered_by, answered_at
        """,
        qna_id,
        answer,
        seller_username,
    )
    if row is None:
        raise LookupError(f"Question {qna_id} does not exist.")
    return row


async def delete_qna(qna_id: int) -> bool:
    status = await db.execute("DELETE FROM qna WHERE id = $1", qna_id)
    return db.affected_rows(status) > 0
