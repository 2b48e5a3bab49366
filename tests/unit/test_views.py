"""Visibility masking of question rows."""

from __future__ import annotations

from datetime import datetime

import pytest

from qna import views
from tests.support.factories import make_qna_row

pytestmark = [pytest.mark.unit]


class TestRenderViewPublic:
    @pytest.mark.parametrize("caller", [None, "alice", "bob"])
    def test_public_question_is_shown_verbatim_to_everyone(self, caller):
        row = make_qna_row(answer="Yes, it runs true to size.")

        view = views.render_view(row, caller)

        assert view.title == "Size?"
        assert view.content == "Is this true to size?"
        assert view.answer == "Yes, it runs true to size."
        assert view.secret is False

    def test_is_author_reflects_ownership_on_public_question(self):
        row = make_qna_row()

        assert views.render_view(row, "alice").is_author is True
        assert views.render_view(row, "bob").is_author is False
        assert views.render_view(row, None).is_author is False


class TestRenderViewSecret:
    def test_author_sees_secret_question(self):
        row = make_qna_row(title="Private Q", content="My order number is 123", secret=True)

        view = views.render_view(row, "alice")

        assert view.title == "Private Q"
        assert view.content == "My order number is 123"
        assert view.is_author is True
        assert view.secret is True

    @pytest.mark.parametrize("caller", [None, "bob", ""])
    def test_other_callers_get_placeholders(self, caller):
        row = make_qna_row(title="Private Q", content="My order number is 123", secret=True)

        view = views.render_view(row, caller)

        assert view.title == "비밀글입니다"
        assert view.title == views.SECRET_TITLE
        assert view.content == views.SECRET_CONTENT
        assert view.is_author is False

    def test_answer_stays_visible_on_masked_question(self):
        row = make_qna_row(secret=True, answer="We have shipped it today.")

        view = views.render_view(row, "bob")

        assert view.title == views.SECRET_TITLE
        assert view.answer == "We have shipped it today."

    def test_render_does_not_modify_row(self):
        row = make_qna_row(title="Private Q", secret=True)

        views.render_view(row, "bob")

        assert row["title"] == "Private Q"


class TestRenderViewFields:
    def test_created_at_is_formatted_to_minutes(self):
        view = views.render_view(make_qna_row(created_at=datetime(2024, 12, 31, 23, 59, 59)), None)

        assert view.created_at == "2024-12-31 23:59"

    def test_missing_owner_is_shown_as_anonymous(self):
        view = views.render_view(make_qna_row(user_id=None, secret=True), None)

        assert view.user_name == views.ANONYMOUS_NAME
        assert view.is_author is False
        assert view.title == views.SECRET_TITLE

    def test_owner_name_is_username(self):
        assert views.render_view(make_qna_row(), None).user_name == "alice"


class TestRenderDetail:
    def test_privileged_reader_sees_secret_content(self):
        row = make_qna_row(title="Private Q", secret=True)

        detail = views.render_detail(row, "seller1", privileged=True)

        assert detail.title == "Private Q"
        assert detail.is_author is False

    def test_non_privileged_reader_gets_placeholders(self):
        row = make_qna_row(title="Private Q", secret=True, answer="ok")

        detail = views.render_detail(row, "bob")

        assert detail.title == views.SECRET_TITLE
        assert detail.content == views.SECRET_CONTENT
        assert detail.answer == "ok"
        assert detail.user_id == "alice"
