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

from pathlib import Path

from loguru import logger

from pullpoet.constants import PROMPT_FILENAME
from pullpoet.core.branch_diff.models import CommitRecord, DiffResult
from pullpoet.core.exceptions import ConfigurationError
from pullpoet.core.utils.sanitize import sanitize_repo_url

from .prompts import (
    COMMIT_HISTORY_HEADER,
    DEFAULT_TEMPLATE,
    DIFF_HEADER,
    ISSUE_CONTEXT_HEADER,
    LANGUAGE_INSTRUCTION,
    PR_FINAL_INSTRUCTION,
    PREVIEW_FINAL_INSTRUCTION,
    STAGED_DIFF_HEADER,
)

DEFAULT_LANGUAGE = "en"


def find_prompt_file(start_dir: Path | None = None) -> Path | None:
    """Find the nearest .prompt file, walking up from start_dir."""
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PROMPT_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_prompt_template(
    system_prompt: str | Path | None = None, start_dir: Path | None = None
) -> str:
    """
    Resolve the base prompt template.

    An explicit system prompt file wins, then the nearest .prompt file,
    then the built-in template.
    """
    if system_prompt:
        path = Path(system_prompt).expanduser()
        try:
            template = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read system prompt file: {path}", str(e)
            ) from e
        logger.info(f"Using custom system prompt from: [cyan]{path}[/cyan]")
        return template

    prompt_file = find_prompt_file(start_dir)
    if prompt_file is not None:
        try:
            template = prompt_file.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read {prompt_file}: {e}")
        else:
            logger.debug(f"Using prompt template from {prompt_file}")
            return template

    logger.debug("Using default embedded prompt template")
    return DEFAULT_TEMPLATE


def format_commit(commit: CommitRecord) -> str:
    return (
        f"- **{commit.short_hash}**: {commit.message}\n"
        f"  *By {commit.author_name} on {commit.authored_at.strftime('%Y-%m-%d %H:%M')}*\n"
    )


def build_prompt(
    diff_result: DiffResult,
    issue_context: str | None = None,
    repo_url: str | None = None,
    language: str = DEFAULT_LANGUAGE,
    pr_mode: bool = True,
    template: str = DEFAULT_TEMPLATE,
) -> str:
    """
    Assemble the full prompt sent to the model.

    Args:
        diff_result: Diff and commits to describe
        issue_context: Optional issue or task description
        repo_url: Repository location, sanitized before it is shown
        language: Output language, English needs no instruction
        pr_mode: Pull request mode, otherwise staged changes preview
        template: Base instructions

    Returns:
        The prompt text
    """
    parts = [template.rstrip(), "\n\n"]

    if language and language.lower() != DEFAULT_LANGUAGE:
        parts.append(LANGUAGE_INSTRUCTION.format(language=language))
        parts.append("\n\n")

    if issue_context:
        parts.append(f"{ISSUE_CONTEXT_HEADER}\n\n```\n{issue_context}\n```\n\n")

    if diff_result.commits:
        parts.append(f"{COMMIT_HISTORY_HEADER}\n\n")
        parts.extend(format_commit(c) for c in diff_result.commits)
        parts.append("\n")

    diff_header = DIFF_HEADER if pr_mode else STAGED_DIFF_HEADER
    parts.append(f"{diff_header}\n\n```diff\n{diff_result.diff_text}\n```\n\n")

    display_url = sanitize_repo_url(repo_url) if repo_url else ""
    if display_url:
        parts.append(f"**Repository**: {display_url}\n")
        parts.append(f"**Default Branch**: {diff_result.default_branch}\n\n")

    parts.append(PR_FINAL_INSTRUCTION if pr_mode else PREVIEW_FINAL_INSTRUCTION)

    prompt = "".join(parts)
    logger.debug(f"Prompt built ({len(prompt)} characters)")
    return prompt
