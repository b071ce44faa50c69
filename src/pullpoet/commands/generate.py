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

from pullpoet.context import GlobalContext, apply_auto_detection, validate_config
from pullpoet.core.branch_diff.engine import analyze_branches
from pullpoet.core.exceptions import FileSystemError, handle_pullpoet_exception
from pullpoet.core.generator.pr_generator import PRGenerator
from pullpoet.core.issues.issue_context import resolve_issue_context
from pullpoet.core.logging.utils import time_block
from pullpoet.core.output.writer import save_output
from pullpoet.core.ui.display import show_analysis_summary, show_result
from pullpoet.runtimeutil import help_callback


def run_generate(global_context: GlobalContext) -> bool:
    config = apply_auto_detection(global_context.config, global_context.git_info)
    validate_config(config)

    logger.info(
        f"Repository: [cyan]{config.repo}[/cyan]  "
        f"[cyan]{config.source}[/cyan] -> [cyan]{config.target}[/cyan]"
    )

    issue_context = resolve_issue_context(
        description=config.description,
        clickup_pat=config.clickup_pat,
        clickup_task_id=config.clickup_task_id,
        jira_base_url=config.jira_base_url,
        jira_username=config.jira_username,
        jira_api_token=config.jira_api_token,
        jira_task_id=config.jira_task_id,
    )

    with time_block("Branch analysis"):
        diff_result = analyze_branches(
            config.repo,
            config.source,
            config.target,
            strategy=global_context.diff_strategy,
            has_local_branch=global_context.local_branch_probe,
        )
    show_analysis_summary(diff_result, silent=config.silent)

    if not diff_result.diff_text.strip():
        logger.warning(
            f"[yellow]No differences between {config.source} and {config.target}[/yellow]"
        )

    logger.info(
        f"Generating with {config.provider} ([cyan]{config.model}[/cyan]) "
        f"via {global_context.provider_base_url or 'default endpoint'}"
    )
    generator = PRGenerator(
        global_context.create_adapter(),
        system_prompt=config.system_prompt,
        language=config.language,
    )
    result = generator.generate(
        diff_result, issue_context=issue_context, repo_url=config.repo, pr_mode=True
    )

    show_result(result, "Generated PR Description", silent=config.silent)

    if config.output:
        try:
            path = save_output(result, config.output)
            logger.info(f"PR content saved to: [cyan]{path}[/cyan]")
        except FileSystemError as e:
            logger.warning(f"[yellow]Failed to save PR to file:[/yellow] {e.message}")

    logger.success("PR description generated successfully")
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
    Generates a pull request title and description for a remote branch.

    Repository, source and target are auto-detected from the current git
    repository when they are not given.

    Examples:
        # Describe the current branch against the default branch
        pullpoet --provider openai --model gpt-4o generate

        # Explicit repository and branches, native git for large repositories
        pullpoet --repo https://github.com/owner/repo.git --source feature/login --target main --fast generate
    """
    with handle_pullpoet_exception():
        global_context: GlobalContext = ctx.obj
        run_generate(global_context)
