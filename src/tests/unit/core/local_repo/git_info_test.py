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

from unittest.mock import Mock

import pytest

from pullpoet.core.git_interface.interface import GitInterface
from pullpoet.core.local_repo.git_info import LocalGitRepo

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def outputs():
    """git stdout keyed by the joined argument list, None means failure."""
    return {
        "rev-parse --is-inside-work-tree": "true\n",
        "rev-parse --abbrev-ref HEAD": "feature/x\n",
        "config --get remote.origin.url": "git@github.com:owner/repo.git\n",
        "symbolic-ref refs/remotes/origin/HEAD": "refs/remotes/origin/develop\n",
        "ls-remote --symref origin HEAD": None,
        "rev-parse --verify -q refs/heads/feature/x": "abc\n",
        "rev-parse --verify -q refs/heads/nope": None,
        "diff --cached": "diff --git a/f b/f\n",
    }


@pytest.fixture
def mock_git(outputs):
    git = Mock(spec=GitInterface)
    git.run_git_text_out.side_effect = lambda args, env=None, cwd=None: outputs[
        " ".join(args)
    ]
    return git


@pytest.fixture
def local_repo(mock_git):
    return LocalGitRepo(".", mock_git)


# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


def test_detect(local_repo):
    info = local_repo.detect()

    assert info.is_git_repo
    assert info.repo_url == "git@github.com:owner/repo.git"
    assert info.current_branch == "feature/x"
    assert info.default_branch == "develop"


def test_detect_outside_repository(local_repo, outputs, mock_git):
    outputs["rev-parse --is-inside-work-tree"] = None

    info = local_repo.detect()

    assert not info.is_git_repo
    assert info.repo_url is None
    assert info.default_branch == "main"
    assert mock_git.run_git_text_out.call_count == 1


def test_detached_head(local_repo, outputs):
    outputs["rev-parse --abbrev-ref HEAD"] = "HEAD\n"
    assert local_repo.current_branch() is None


def test_default_branch_from_ls_remote(local_repo, outputs):
    outputs["symbolic-ref refs/remotes/origin/HEAD"] = None
    outputs["ls-remote --symref origin HEAD"] = (
        "ref: refs/heads/trunk\tHEAD\n0123456789abcdef\tHEAD\n"
    )

    assert local_repo.default_branch() == "trunk"


def test_default_branch_fallback(local_repo, outputs):
    outputs["symbolic-ref refs/remotes/origin/HEAD"] = None
    assert local_repo.default_branch() == "main"


def test_has_local_branch(local_repo):
    assert local_repo.has_local_branch("feature/x")
    assert not local_repo.has_local_branch("nope")


def test_staged_diff(local_repo, outputs):
    assert local_repo.staged_diff() == "diff --git a/f b/f\n"
    outputs["diff --cached"] = None
    assert local_repo.staged_diff() == ""
