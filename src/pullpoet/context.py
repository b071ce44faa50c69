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

from collections.abc import Callable
from dataclasses import dataclass, fields, replace
from pathlib import Path

import typer
from loguru import logger

from pullpoet.constants import (
    PROVIDER_DISPLAY_NAMES,
    PROVIDERS_REQUIRING_API_KEY,
    SUPPORTED_PROVIDERS,
)
from pullpoet.core.branch_diff.models import DiffStrategy
from pullpoet.core.branch_diff.engine import strategy_for
from pullpoet.core.exceptions import (
    ConfigurationError,
    ValidationError,
    api_key_missing,
    not_git_repository,
    unsupported_provider,
)
from pullpoet.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)
from pullpoet.core.llm import PullPoetAdapter, create_adapter, provider_base_url
from pullpoet.core.local_repo.git_info import GitInfo, LocalGitRepo

MAX_TEMPERATURE = 2.0


@dataclass
class GlobalConfig:
    repo: str | None = None
    source: str | None = None
    target: str | None = None
    description: str | None = None
    provider: str | None = None
    model: str | None = None
    api_key: str | None = None
    provider_base_url: str | None = None
    fast_mode: bool = False
    output: str | None = None
    system_prompt: str | None = None
    language: str = "en"
    temperature: float = 0.7
    clickup_pat: str | None = None
    clickup_task_id: str | None = None
    jira_base_url: str | None = None
    jira_username: str | None = None
    jira_api_token: str | None = None
    jira_task_id: str | None = None
    verbose: bool = False
    silent: bool = False

    descriptions = {
        "repo": "Git repository URL or path (auto-detected from origin inside a git repository)",
        "source": "Source branch name (auto-detected as the current branch)",
        "target": "Target branch name (auto-detected as the default branch)",
        "description": "Optional issue/task description used as context",
        "provider": "AI provider: openai, ollama, gemini or openwebui",
        "model": "AI model to use",
        "api_key": "API key for OpenAI, Gemini or OpenWebUI",
        "provider_base_url": "Base URL for the AI provider (e.g. a remote Ollama server)",
        "fast_mode": "Use native git commands instead of the git library (recommended for large repositories)",
        "output": "Save the generated content to this markdown file",
        "system_prompt": "Custom system prompt file path to override the default",
        "language": "Language for the generated description",
        "temperature": "Temperature for LLM responses (0.0-2.0)",
        "clickup_pat": "ClickUp Personal Access Token",
        "clickup_task_id": "ClickUp task id(s), comma separated for multiple tasks",
        "jira_base_url": "Jira base URL (e.g. https://yourcompany.atlassian.net)",
        "jira_username": "Jira username/email",
        "jira_api_token": "Jira API token",
        "jira_task_id": "Jira issue key(s), comma separated for multiple issues",
        "verbose": "Enable verbose logging output",
        "silent": "Do not output any text to the console, except for errors",
    }

    cli_names = {
        "fast_mode": "--fast",
    }

    @classmethod
    def get_cli_params(cls) -> dict:
        """
        Build typer options for every config field.

        All defaults are None so that only values given on the command line
        take part in the config merge.
        """
        params = {}
        for f in fields(cls):
            name = cls.cli_names.get(f.name, "--" + f.name.replace("_", "-"))
            base_type = f.type if f.type in (bool, float) else str
            params[f.name] = (
                base_type | None,
                typer.Option(None, name, help=cls.descriptions.get(f.name)),
            )
        return params


def apply_auto_detection(config: GlobalConfig, git_info: GitInfo) -> GlobalConfig:
    """Fill repo, source and target from the working repository when missing."""
    if config.repo and config.source and config.target:
        return config

    if not git_info.is_git_repo:
        if config.repo and config.source:
            return replace(config, target=config.target or git_info.default_branch)
        raise not_git_repository()

    updates = {}
    if not config.repo and git_info.repo_url:
        updates["repo"] = git_info.repo_url
        logger.debug(f"Auto-detected repository: {git_info.repo_url}")
    if not config.source and git_info.current_branch:
        updates["source"] = git_info.current_branch
        logger.debug(f"Auto-detected source branch: {git_info.current_branch}")
    if not config.target:
        updates["target"] = git_info.default_branch
        logger.debug(f"Auto-detected target branch: {git_info.default_branch}")

    return replace(config, **updates)


def validate_config(config: GlobalConfig, require_branches: bool = True) -> None:
    """Check the merged configuration, raising on the first problem found."""
    if require_branches:
        if not config.repo:
            raise ValidationError(
                "Repository URL is required", "Use --repo or run inside a git repository"
            )
        if not config.source:
            raise ValidationError(
                "Source branch is required",
                "Use --source or check out the branch you want to describe",
            )
        if not config.target:
            raise ValidationError("Target branch is required", "Use --target")

    if not config.provider:
        raise ConfigurationError(
            "Provider is required",
            "Use --provider, the config file or PULLPOET_PROVIDER",
        )
    provider = config.provider.lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise unsupported_provider(config.provider)
    if not config.model:
        raise ConfigurationError(
            "Model is required", "Use --model, the config file or PULLPOET_MODEL"
        )
    if provider in PROVIDERS_REQUIRING_API_KEY and not config.api_key:
        raise api_key_missing(PROVIDER_DISPLAY_NAMES[provider])

    if not 0.0 <= config.temperature <= MAX_TEMPERATURE:
        raise ConfigurationError(
            f"Temperature must be between 0 and {MAX_TEMPERATURE}"
        )

    if bool(config.clickup_pat) != bool(config.clickup_task_id):
        raise ValidationError(
            "ClickUp integration needs both a PAT and a task id",
            "Set both --clickup-pat and --clickup-task-id",
        )

    if config.jira_task_id:
        missing = [
            name
            for name, value in (
                ("--jira-base-url", config.jira_base_url),
                ("--jira-username", config.jira_username),
                ("--jira-api-token", config.jira_api_token),
            )
            if not value
        ]
        if missing:
            raise ValidationError(
                "Jira integration is missing settings",
                f"Set {', '.join(missing)} to fetch Jira issues",
            )


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    config: GlobalConfig
    local_repo: LocalGitRepo
    git_info: GitInfo

    @classmethod
    def from_global_config(cls, config: GlobalConfig, repo_path: Path = Path(".")):
        git_interface = SubprocessGitInterface(repo_path)
        local_repo = LocalGitRepo(repo_path, git_interface)
        git_info = local_repo.detect()
        return GlobalContext(repo_path, config, local_repo, git_info)

    @property
    def diff_strategy(self) -> DiffStrategy:
        return strategy_for(self.config.fast_mode)

    @property
    def provider_base_url(self) -> str:
        return provider_base_url(
            (self.config.provider or "").lower(), self.config.provider_base_url
        )

    def create_adapter(self) -> PullPoetAdapter:
        return create_adapter(
            self.config.provider,
            self.config.model,
            api_key=self.config.api_key,
            base_url=self.config.provider_base_url,
            temperature=self.config.temperature,
        )

    @property
    def local_branch_probe(self) -> Callable[[str], bool] | None:
        """Probe for unpushed branches, only available inside a git repository."""
        if not self.git_info.is_git_repo:
            return None
        return self.local_repo.has_local_branch
