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

import pytest
import typer

from pullpoet.core.exceptions import (
    BranchNotFound,
    CommitEnumerationDegraded,
    EmptyGeneratedResponse,
    GitError,
    PullPoetError,
    RemoteRefMissing,
    ValidationError,
    api_key_missing,
    handle_pullpoet_exception,
    not_git_repository,
)


def test_hierarchy():
    assert issubclass(RemoteRefMissing, BranchNotFound)
    assert issubclass(BranchNotFound, GitError)
    assert issubclass(CommitEnumerationDegraded, GitError)
    assert issubclass(GitError, PullPoetError)


def test_remote_ref_missing_carries_push_hint():
    err = RemoteRefMissing("feature/x", "fatal: couldn't find remote ref")

    assert err.branch == "feature/x"
    assert "has not been pushed" in err.message
    assert err.details.startswith(
        "It looks like the branch 'feature/x' exists only locally."
    )
    assert err.details.endswith("fatal: couldn't find remote ref")


def test_branch_not_found_default_message():
    assert BranchNotFound("main").message == "Branch 'main' was not found on the remote"


def test_helpers():
    assert "Gemini" in api_key_missing("Gemini").message
    assert isinstance(not_git_repository("/tmp/x"), ValidationError)
    assert EmptyGeneratedResponse().message == "Empty response from AI"


def test_handler_turns_errors_into_exit_code():
    with pytest.raises(typer.Exit) as exc:
        with handle_pullpoet_exception():
            raise ValidationError("bad input", "fix it")
    assert exc.value.exit_code == 1


def test_handler_reraises_without_exit():
    with pytest.raises(ValidationError):
        with handle_pullpoet_exception(exit_on_fail=False):
            raise ValidationError("bad input")


def test_handler_wraps_unexpected_errors():
    with pytest.raises(typer.Exit):
        with handle_pullpoet_exception():
            raise KeyError("boom")


def test_handler_passes_exit_through():
    with pytest.raises(typer.Exit) as exc:
        with handle_pullpoet_exception():
            raise typer.Exit(0)
    assert exc.value.exit_code == 0
