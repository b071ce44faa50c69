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

from dataclasses import dataclass, field

import httpx
from loguru import logger

from pullpoet.core.exceptions import IssueTrackerError

CLICKUP_API_URL = "https://api.clickup.com/api/v2"
REQUEST_TIMEOUT = 30.0


@dataclass
class ClickUpComment:
    id: str
    user: str
    date_created: str
    text_blocks: list[str]
    reply_count: int = 0
    replies: list["ClickUpComment"] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> "ClickUpComment":
        return cls(
            id=str(data.get("id", "")),
            user=(data.get("user") or {}).get("username") or "",
            date_created=str(data.get("date_created", "")),
            text_blocks=[
                block.get("text", "")
                for block in data.get("comment") or []
                if isinstance(block, dict)
            ],
            reply_count=int(data.get("reply_count") or 0),
        )


@dataclass
class ClickUpTask:
    id: str
    name: str
    description: str
    status: str
    creator: str
    url: str
    comments: list[ClickUpComment] = field(default_factory=list)

    def format_description(self) -> str:
        text = (
            f"**ClickUp Task: {self.name}**\n\n"
            f"**Task ID:** {self.id}\n"
            f"**Status:** {self.status}\n"
            f"**Creator:** {self.creator}\n"
            f"**Task URL:** {self.url}\n\n"
            f"**Description:**\n{self.description}"
        )
        if not self.comments:
            return text

        text += "\n\n**Comments:**\n"
        for i, comment in enumerate(self.comments, start=1):
            text += "\n---\n"
            text += f"**Comment {i}** (by {comment.user} on {comment.date_created}):\n"
            for block in comment.text_blocks:
                text += f"{block}\n"
            if comment.replies:
                text += "\n  **Replies:**\n"
                for j, reply in enumerate(comment.replies, start=1):
                    text += f"  **Reply {j}** (by {reply.user} on {reply.date_created}):\n"
                    for block in reply.text_blocks:
                        text += f"    {block}\n"
                    text += "\n"
        return text


class ClickUpClient:
    """Reads tasks, comments and comment replies from the ClickUp API v2."""

    def __init__(
        self,
        pat: str,
        client: httpx.Client | None = None,
        base_url: str = CLICKUP_API_URL,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=REQUEST_TIMEOUT)
        self.headers = {"Authorization": pat, "Content-Type": "application/json"}

    def close(self) -> None:
        self.client.close()

    def _get(self, path: str) -> dict:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url}")
        try:
            response = self.client.get(url, headers=self.headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise IssueTrackerError(
                f"ClickUp API error (status {e.response.status_code})",
                e.response.text,
            ) from e
        except httpx.RequestError as e:
            raise IssueTrackerError(f"Failed to reach ClickUp at {url}", str(e)) from e
        except ValueError as e:
            raise IssueTrackerError("ClickUp returned invalid JSON", str(e)) from e

    def get_comment_replies(self, comment_id: str) -> list[ClickUpComment]:
        data = self._get(f"/comment/{comment_id}/reply")
        return [ClickUpComment.from_json(c) for c in data.get("comments", [])]

    def get_task_comments(self, task_id: str) -> list[ClickUpComment]:
        data = self._get(f"/task/{task_id}/comment")
        comments = [ClickUpComment.from_json(c) for c in data.get("comments", [])]

        for comment in comments:
            if comment.reply_count <= 0:
                continue
            try:
                comment.replies = self.get_comment_replies(comment.id)
            except IssueTrackerError as e:
                logger.warning(
                    f"Failed to fetch replies for comment {comment.id}: {e.message}"
                )

        return comments

    def get_task(self, task_id: str) -> ClickUpTask:
        data = self._get(f"/task/{task_id}")

        description = data.get("description") or data.get("text_content") or ""
        task = ClickUpTask(
            id=str(data.get("id") or task_id),
            name=data.get("name") or "",
            description=description,
            status=(data.get("status") or {}).get("status") or "",
            creator=(data.get("creator") or {}).get("username") or "",
            url=data.get("url") or "",
        )

        try:
            task.comments = self.get_task_comments(task_id)
        except IssueTrackerError as e:
            logger.warning(f"Failed to fetch comments for task {task_id}: {e.message}")

        return task
