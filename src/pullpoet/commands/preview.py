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

import typer
from loguru import logger

from pullpoet.context import GlobalContext, validate_config
from pullpoet.core.branch_diff.models import DiffResult
from pullpoet.core.exceptions import (
    FileSystemError,
    handle_pullpoet_exception,
    not_git_repository,
)
from pullpoet.core.generator.pr_generator import PRGenerator
from pullpoet.core.issues.issue_context import resolve_issue_context
from pullpoet.core.output.writer import save_output
from pullpoet.core.ui.display import show_result
from pullpoet.runtimeutil import help_callback


def run_preview(global_context: GlobalContext) -> bool:
    config = global_context.config
    if not global_context.git_info.is_git_repo:
        raise not_git_repository(str(global_context.repo_path))
    validate_config(config, require_branches=False)

    logger.info("Analyzing staged changes...")
    staged_diff = global_context.local_repo.staged_diff()
    if not staged_diff.strip():
        logger.warning(
            "[yellow]No staged changes found. "
            "Please run 'git add' to stage your changes first.[/yellow]"
        )
        return False
    logger.info(f"Found staged changes ({len(staged_diff)} characters)")

    issue_context = resolve_issue_context(
        description=config.description,
        clickup_pat=config.clickup_pat,
        clickup_task_id=config.clickup_task_id,
        jira_base_url=config.jira_base_url,
        jira_username=config.jira_username,
        jira_api_token=config.jira_api_token,
        jira_task_id=config.jira_task_id,
    )

    diff_result = DiffResult(
        diff_text=staged_diff,
        default_branch=global_context.git_info.default_branch,
    )
    generator = PRGenerator(
        global_context.create_adapter(),
        system_prompt=config.system_prompt,
        language=config.language,
    )
    result = generator.generate(
        diff_result,
        issue_context=issue_context,
        repo_url=config.repo or global_context.git_info.repo_url,
        pr_mode=False,
    )

    show_result(result, "Preview of Changes (Staged)", silent=config.silent)

    if config.output:
        try:
            path = save_output(result, config.output)
            logger.info(f"Preview saved to: [cyan]{path}[/cyan]")
        except FileSystemError as e:
            logger.warning(f"[yellow]Failed to save preview to file:[/yellow] {e.message}")

    logger.info("You can use this as your commit message or PR description.")
    return True


def main(
    ctx: typer.Context,
    help: bool = typer.Option(
        False,
        "--help",
        callback=help_callback,
        is_eager=True,
        help="Show this message and exit.",
    ),
) -> None:
    """
    Previews a title and description for the currently staged changes.

    Examples:
        git add -p
        pullpoet --provider ollama --model llama3 preview
    """
    with handle_pullpoet_exception():
        global_context: GlobalContext = ctx.obj
        run_preview(global_context)
