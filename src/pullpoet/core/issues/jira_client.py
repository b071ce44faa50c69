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
from typing import Any

import httpx
from loguru import logger

from pullpoet.core.exceptions import IssueTrackerError

REQUEST_TIMEOUT = 30.0

# ADF block nodes that end a line of text
_LINE_NODES = {"paragraph", "heading"}


def extract_text(data: Any) -> str:
    """Flatten a Jira description (plain string or ADF document) into text."""
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        parts: list[str] = []
        _extract_adf(data, parts)
        return "".join(parts)
    return ""


def _extract_adf(node: dict, parts: list[str]) -> None:
    text = node.get("text")
    if isinstance(text, str):
        parts.append(text)

    for child in node.get("content") or []:
        if not isinstance(child, dict):
            continue
        _extract_adf(child, parts)
        if child.get("type") in _LINE_NODES:
            parts.append("\n")


@dataclass
class JiraComment:
    author: str
    created: str
    body: str


@dataclass
class JiraIssue:
    key: str
    summary: str
    description: str
    status: str
    issue_type: str
    creator: str
    reporter: str
    url: str
    comments: list[JiraComment] = field(default_factory=list)

    def format_description(self) -> str:
        text = (
            f"**Jira Issue: {self.summary} - {self.key}**\n\n"
            f"**Issue Key:** {self.key}\n"
            f"**Issue Type:** {self.issue_type}\n"
            f"**Status:** {self.status}\n"
            f"**Creator:** {self.creator}\n"
            f"**Reporter:** {self.reporter}\n"
            f"**Issue URL:** {self.url}\n\n"
            f"**Description:**\n{self.description}"
        )
        if self.comments:
            text += "\n\n**Comments:**\n"
            for i, comment in enumerate(self.comments, start=1):
                text += "\n---\n"
                text += f"**Comment {i}** (by {comment.author} on {comment.created}):\n"
                text += f"{comment.body}\n"
        return text


def _name(data: dict | None, key: str = "displayName") -> str:
    return (data or {}).get(key) or ""


class JiraClient:
    """Reads issues and their comments from the Jira Cloud REST API v3."""

    def __init__(
        self,
        base_url: str,
        username: str,
        api_token: str,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=REQUEST_TIMEOUT)
        self.auth = httpx.BasicAuth(username, api_token)

    def close(self) -> None:
        self.client.close()

    def _get(self, path: str) -> dict:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url}")
        try:
            response = self.client.get(
                url, auth=self.auth, headers={"Accept": "application/json"}
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise IssueTrackerError(
                f"Jira API error (status {e.response.status_code})",
                e.response.text,
            ) from e
        except httpx.RequestError as e:
            raise IssueTrackerError(f"Failed to reach Jira at {url}", str(e)) from e
        except ValueError as e:
            raise IssueTrackerError("Jira returned invalid JSON", str(e)) from e

    def get_comments(self, issue_key: str) -> list[JiraComment]:
        data = self._get(f"/rest/api/3/issue/{issue_key}/comment")
        return [
            JiraComment(
                author=_name(c.get("author")),
                created=c.get("created", ""),
                body=extract_text(c.get("body")),
            )
            for c in data.get("comments", [])
        ]

    def get_issue(self, issue_key: str) -> JiraIssue:
        data = self._get(f"/rest/api/3/issue/{issue_key}")
        fields = data.get("fields") or {}
        key = data.get("key") or issue_key

        issue = JiraIssue(
            key=key,
            summary=fields.get("summary") or "",
            description=extract_text(fields.get("description")),
            status=_name(fields.get("status"), "name"),
            issue_type=_name(fields.get("issuetype"), "name"),
            creator=_name(fields.get("creator")),
            reporter=_name(fields.get("reporter")),
            url=f"{self.base_url}/browse/{key}",
        )

        try:
            issue.comments = self.get_comments(issue_key)
        except IssueTrackerError as e:
            logger.warning(f"Failed to fetch comments for issue {issue_key}: {e.message}")

        return issue
