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
Custom exception hierarchy for the pullpoet CLI application.

The git side distinguishes fatal acquisition/diff failures from the
non-fatal commit enumeration degradation; the generation side separates
LLM transport failures from a response that carried no text at all.
"""

import contextlib

import typer
from loguru import logger


class PullPoetError(Exception):
    """
    Base exception for all pullpoet-related errors.

    All pullpoet-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a PullPoetError.

        Args:
            message: Main error message for the user
            details: Actionable hint or underlying technical output
        """
        self.message = message
        self.details = details
        super().__init__(message)


class GitError(PullPoetError):
    """
    Errors related to git operations.

    Raised when git commands fail or when repository
    state is invalid for the requested operation.
    """

    pass


class RemoteAccessFailure(GitError):
    """Raised when cloning or fetching from the remote fails."""

    pass


class BranchNotFound(GitError):
    """Raised when a named branch does not exist on the remote."""

    def __init__(
        self, branch: str, details: str | None = None, message: str | None = None
    ):
        self.branch = branch
        super().__init__(
            message or f"Branch '{branch}' was not found on the remote", details
        )


class RemoteRefMissing(BranchNotFound):
    """Raised when a branch exists only locally and was never pushed."""

    def __init__(self, branch: str, transport_output: str | None = None):
        hint = (
            f"It looks like the branch '{branch}' exists only locally. "
            f"Run 'git push --set-upstream origin {branch}' to push it and try again."
        )
        if transport_output:
            hint = f"{hint}\n{transport_output}"
        super().__init__(
            branch,
            hint,
            message=f"Branch '{branch}' has not been pushed to the remote",
        )


class DiffGenerationFailure(GitError):
    """Raised when the diff between the two branch tips cannot be produced."""

    pass


class CommitEnumerationDegraded(GitError):
    """
    Raised internally when the unique commit list cannot be built.

    Never reaches the caller: the differencing engine logs it and
    continues with an empty commit list.
    """

    pass


class ValidationError(PullPoetError):
    """
    Input validation errors.

    Raised when user input fails validation checks,
    such as missing branches or malformed task ids.
    """

    pass


class ConfigurationError(PullPoetError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class AIServiceError(PullPoetError):
    """
    AI service related errors.

    Raised when AI API calls fail, timeout, or return
    invalid responses.
    """

    pass


class EmptyGeneratedResponse(AIServiceError):
    """Raised when the generated response contains no text at all."""

    def __init__(self):
        super().__init__(
            "Empty response from AI",
            "The model returned no content. Try again or pick a different model.",
        )


class IssueTrackerError(PullPoetError):
    """Raised when Jira or ClickUp cannot be queried."""

    pass


class FileSystemError(PullPoetError):
    """
    File system operation errors.

    Raised when file or directory operations fail,
    such as permission issues or missing files.
    """

    pass


# Convenience functions for creating common errors
def git_not_found() -> GitError:
    """Create a GitError for when git is not available."""
    return GitError(
        "Git is not installed or not in PATH",
        "Please install git and ensure it's available in your PATH environment variable",
    )


def not_git_repository(path: str = ".") -> ValidationError:
    """Create a ValidationError for when auto-detection runs outside a repository."""
    return ValidationError(
        f"Not a git repository: {path}",
        "Provide --repo, --source and --target or run pullpoet inside a git repository",
    )


def api_key_missing(provider: str) -> ConfigurationError:
    """Create a ConfigurationError for missing API keys."""
    return ConfigurationError(
        f"Missing API key for {provider}",
        "Set the API key with --api-key, the config file or PULLPOET_API_KEY",
    )


def unsupported_provider(provider: str) -> ConfigurationError:
    """Create a ConfigurationError for an unknown provider name."""
    return ConfigurationError(
        f"Unsupported provider: {provider}",
        "Provider must be 'openai', 'ollama', 'gemini', or 'openwebui'",
    )


@contextlib.contextmanager
def handle_pullpoet_exception(exit_on_fail: bool = True):
    """
    Log pullpoet errors in a user friendly way and turn them into an exit code.
    """
    try:
        yield
    except (typer.Exit, typer.Abort):
        raise
    except PullPoetError as e:
        logger.error(f"[red]Error:[/red] {e.message}")
        if e.details:
            logger.info(f"[yellow]{e.details}[/yellow]")
        if exit_on_fail:
            raise typer.Exit(1) from e
        raise
    except Exception as e:
        logger.opt(exception=e).debug("Unexpected error")
        logger.error(f"[red]Unexpected error:[/red] {e}")
        if exit_on_fail:
            raise typer.Exit(1) from e
        raise
