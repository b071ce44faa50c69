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

"""
Builds the issue/task context that is added to the prompt.

Several ids can be given comma separated; their descriptions are merged
under a single header in the order they were given.
"""

import httpx
from loguru import logger

from pullpoet.core.exceptions import ValidationError

from .clickup_client import ClickUpClient
from .jira_client import JiraClient

SECTION_RULE = "=" * 80
ITEM_RULE = "-" * 80


def split_ids(ids: str) -> list[str]:
    return [part.strip() for part in (ids or "").split(",") if part.strip()]


def merge_descriptions(descriptions: list[str], header: str, item_label: str) -> str:
    if len(descriptions) == 1:
        return descriptions[0]

    total = len(descriptions)
    text = f"{header}\n\n{SECTION_RULE}\n\n"
    for i, description in enumerate(descriptions, start=1):
        text += f"### {item_label} {i} of {total}\n\n{description}"
        if i < total:
            text += f"\n\n{ITEM_RULE}\n\n"
    return text


def fetch_jira_context(
    base_url: str,
    username: str,
    api_token: str,
    issue_keys: str,
    client: httpx.Client | None = None,
) -> str:
    keys = split_ids(issue_keys)
    if not keys:
        raise ValidationError("No valid Jira issue keys provided")

    logger.info(f"Fetching {len(keys)} issue(s) from Jira...")
    jira = JiraClient(base_url, username, api_token, client=client)
    descriptions = []
    try:
        for i, key in enumerate(keys, start=1):
            logger.debug(f"[{i}/{len(keys)}] Fetching issue: {key}")
            issue = jira.get_issue(key)
            descriptions.append(issue.format_description())
            logger.info(
                f"[green]Issue fetched:[/green] {issue.summary} ({len(issue.comments)} comments)"
            )
    finally:
        if client is None:
            jira.close()

    return merge_descriptions(
        descriptions, f"**Multiple Jira Issues ({len(descriptions)} issues)**", "Issue"
    )


def fetch_clickup_context(
    pat: str, task_ids: str, client: httpx.Client | None = None
) -> str:
    ids = split_ids(task_ids)
    if not ids:
        raise ValidationError("No valid ClickUp task ids provided")

    logger.info(f"Fetching {len(ids)} task(s) from ClickUp...")
    clickup = ClickUpClient(pat, client=client)
    descriptions = []
    try:
        for i, task_id in enumerate(ids, start=1):
            logger.debug(f"[{i}/{len(ids)}] Fetching task: {task_id}")
            task = clickup.get_task(task_id)
            descriptions.append(task.format_description())
            replies = sum(len(c.replies) for c in task.comments)
            logger.info(
                f"[green]Task fetched:[/green] {task.name} "
                f"({len(task.comments)} comments, {replies} replies)"
            )
    finally:
        if client is None:
            clickup.close()

    return merge_descriptions(
        descriptions, f"**Multiple ClickUp Tasks ({len(descriptions)} tasks)**", "Task"
    )


def resolve_issue_context(
    description: str | None = None,
    clickup_pat: str | None = None,
    clickup_task_id: str | None = None,
    jira_base_url: str | None = None,
    jira_username: str | None = None,
    jira_api_token: str | None = None,
    jira_task_id: str | None = None,
    client: httpx.Client | None = None,
) -> str:
    """ClickUp wins over Jira, which wins over the manual description."""
    if clickup_pat and clickup_task_id:
        return fetch_clickup_context(clickup_pat, clickup_task_id, client=client)

    if jira_task_id and jira_base_url and jira_username and jira_api_token:
        return fetch_jira_context(
            jira_base_url, jira_username, jira_api_token, jira_task_id, client=client
        )

    return description or ""
