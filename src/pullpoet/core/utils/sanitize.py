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

"""Utilities for sanitizing LLM outputs and repository URLs for display."""

import re

_SSH_URL_RE = re.compile(r"^ssh://(?:[^@/]+@)?([^:/]+)(?::\d+)?/(.+)$")
_SCP_RE = re.compile(r"^[\w.-]+@([^:/]+):(.+)$")


def sanitize_llm_text(text: str) -> str:
    """
    Sanitizes text output from LLMs by removing problematic characters.

    LLMs occasionally produce control characters like null bytes (\x00) which
    break file output and terminal rendering.

    Args:
        text: Raw text from LLM output.

    Returns:
        Sanitized text with problematic characters removed.
    """
    if not text:
        return text

    # Remove null bytes
    result = text.replace("\x00", "")

    # Strip leading/trailing whitespace that LLMs often include
    result = result.strip()

    return result


def sanitize_repo_url(url: str) -> str:
    """
    Turn a repository location into a browsable https URL.

    Credentials are removed, ssh form (git@host:owner/repo.git) is converted
    to https and a trailing .git is dropped. Only meant for display, the
    original location is what gets fetched.
    """
    if not url:
        return url

    result = url.strip()

    ssh_match = _SSH_URL_RE.match(result) or _SCP_RE.match(result)
    if ssh_match:
        result = f"https://{ssh_match.group(1)}/{ssh_match.group(2)}"

    if "://" in result:
        scheme, rest = result.split("://", 1)
        host_end = rest.find("/")
        authority = rest if host_end == -1 else rest[:host_end]
        if "@" in authority:
            rest = authority.rsplit("@", 1)[1] + rest[len(authority) :]
        result = f"{scheme}://{rest}"

    result = result.rstrip("/")
    if result.endswith(".git"):
        result = result[: -len(".git")]

    return result
