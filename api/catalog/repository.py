"""
Product catalog lookups (raw SQL).

Only what the Q&A feature needs: products are referenced, never edited here.
"""

from __future__ import annotations

from core import db


async def get_product_by_id(product_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, created_at
        FROM products
        WHERE id = $1
        """,
        product_id,
    )
