# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 PullPoet
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, see <https://www.gnu.org/licenses/>.
#  */
# -----------------------------------------------------------------------------

import httpx
import pytest

from pullpoet.core.exceptions import IssueTrackerError
from pullpoet.core.issues.clickup_client import ClickUpClient, ClickUpComment

TASK = {
    "id": "abc123",
    "name": "Add export",
    "description": "",
    "text_content": "Export reports as CSV",
    "status": {"status": "in review"},
    "creator": {"username": "dana"},
    "url": "https://app.clickup.com/t/abc123",
}

COMMENTS = {
    "comments": [
        {
            "id": "c1",
            "user": {"username": "erin"},
            "date_created": "1700000000000",
            "comment": [{"text": "Needs tests"}, {"text": " please"}],
            "reply_count": 1,
        },
        {
            "id": "c2",
            "user": {"username": "finn"},
            "date_created": "1700000001000",
            "comment": [{"text": "Done"}],
            "reply_count": 0,
        },
    ]
}

REPLIES = {
    "comments": [
        {
            "id": "r1",
            "user": {"username": "dana"},
            "date_created": "1700000002000",
            "comment": [{"text": "Added"}],
        }
    ]
}


def _client(handler) -> ClickUpClient:
    return ClickUpClient(
        "pk_token", client=httpx.Client(transport=httpx.MockTransport(handler))
    )


def _routes(overrides=None):
    routes = {
        "/api/v2/task/abc123": httpx.Response(200, json=TASK),
        "/api/v2/task/abc123/comment": httpx.Response(200, json=COMMENTS),
        "/api/v2/comment/c1/reply": httpx.Response(200, json=REPLIES),
    }
    routes.update(overrides or {})
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return routes.get(request.url.path, httpx.Response(404))

    return handler, seen


def test_comment_from_json_defaults():
    comment = ClickUpComment.from_json({"id": 5})
    assert comment.id == "5"
    assert comment.user == ""
    assert comment.text_blocks == []
    assert comment.reply_count == 0


def test_get_task_with_comments_and_replies():
    handler, seen = _routes()

    task = _client(handler).get_task("abc123")

    assert task.name == "Add export"
    assert task.description == "Export reports as CSV"
    assert task.status == "in review"
    assert [c.id for c in task.comments] == ["c1", "c2"]
    assert task.comments[0].replies[0].text_blocks == ["Added"]
    assert task.comments[1].replies == []
    # replies are only requested for comments that have them
    assert [r.url.path for r in seen].count("/api/v2/comment/c2/reply") == 0
    assert seen[0].headers["Authorization"] == "pk_token"

    text = task.format_description()
    assert text.startswith("**ClickUp Task: Add export**")
    assert "**Comment 1** (by erin on 1700000000000):\nNeeds tests\n please\n" in text
    assert "  **Reply 1** (by dana on 1700000002000):\n    Added\n" in text


def test_reply_failure_is_not_fatal():
    handler, _ = _routes({"/api/v2/comment/c1/reply": httpx.Response(500)})

    task = _client(handler).get_task("abc123")

    assert len(task.comments) == 2
    assert task.comments[0].replies == []


def test_comment_failure_is_not_fatal():
    handler, _ = _routes({"/api/v2/task/abc123/comment": httpx.Response(403)})

    task = _client(handler).get_task("abc123")

    assert task.comments == []
    assert "**Comments:**" not in task.format_description()


def test_task_not_found():
    handler, _ = _routes()

    with pytest.raises(IssueTrackerError) as exc:
        _client(handler).get_task("missing")
    assert "404" in exc.value.message
