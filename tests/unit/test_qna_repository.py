"""SQL issued by the Q&A repository, checked against a patched `core.db`."""

from __future__ import annotations

import re
from unittest.mock import AsyncMock, patch

import pytest

from qna import repository

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


def _squash(sql: str) -> str:
    return re.sub(r"\s+", " ", sql).strip()


class TestSearchFilter:
    async def test_title_and_content_sit_behind_readability_check(self):
        with patch("core.db.fetch_value", AsyncMock(return_value=0)) as mock_value:
            await repository.count_qnas(search_query="Gift", caller_username=None)

        sql = _squash(mock_value.await_args.args[0])
        assert (
            "($1 = '' OR ((NOT q.secret OR q.user_id = $2) "
            "AND (strpos(lower(q.title), $1) > 0 OR strpos(lower(q.content), $1) > 0)))"
        ) in sql
        assert mock_value.await_args.args[1:] == ("gift", None)

    async def test_title_is_never_matched_outside_readability_check(self):
        with patch("core.db.fetch_all", AsyncMock(return_value=[])) as mock_all:
            await repository.list_qnas(search_query="x")

        sql = _squash(mock_all.await_args.args[0])
        assert sql.count("strpos(lower(q.title)") == 1
        assert sql.index("NOT q.secret") < sql.index("strpos(lower(q.title)")

    async def test_blank_query_binds_empty_string(self):
        with patch("core.db.fetch_value", AsyncMock(return_value=None)) as mock_value:
            total = await repository.count_qnas(search_query="   ", caller_username="alice")

        assert total == 0
        assert mock_value.await_args.args[1:] == ("", "alice")


class TestListQnas:
    async def test_binds_search_caller_limit_offset_in_order(self):
        with patch("core.db.fetch_all", AsyncMock(return_value=[])) as mock_all:
            await repository.list_qnas(
                search_query=" Size ",
                caller_username="alice",
                limit=5,
                offset=10,
                direction="asc",
            )

        sql = _squash(mock_all.await_args.args[0])
        assert mock_all.await_args.args[1:] == ("size", "alice", 5, 10)
        assert "ORDER BY q.created_at ASC, q.id ASC LIMIT $3 OFFSET $4" in sql

    @pytest.mark.parametrize("direction", ["desc", "sideways"])
    async def test_other_directions_sort_newest_first(self, direction):
        with patch("core.db.fetch_all", AsyncMock(return_value=[])) as mock_all:
            await repository.list_qnas(direction=direction)

        assert "ORDER BY q.created_at DESC, q.id DESC" in _squash(mock_all.await_args.args[0])


class TestWrites:
    async def test_update_answer_on_unknown_id_raises_lookup_error(self):
        with patch("core.db.fetch_one", AsyncMock(return_value=None)):
            with pytest.raises(LookupError):
                await repository.update_answer(99, answer="ok", seller_username="shop")

    async def test_delete_reports_affected_rows(self):
        with patch("core.db.execute", AsyncMock(side_effect=["DELETE 1", "DELETE 0"])):
            assert await repository.delete_qna(1) is True
            assert await repository.delete_qna(2) is False
