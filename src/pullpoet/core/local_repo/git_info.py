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

import re
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from pullpoet.constants import REMOTE_NAME
from pullpoet.core.branch_diff.default_branch import FALLBACK_DEFAULT_BRANCH
from pullpoet.core.git_interface.interface import GitInterface
from pullpoet.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)

_SYMREF_RE = re.compile(r"^ref:\s+refs/heads/(\S+)\s+HEAD$", re.MULTILINE)


@dataclass(frozen=True)
class GitInfo:
    repo_url: str | None
    current_branch: str | None
    default_branch: str
    is_git_repo: bool


class LocalGitRepo:
    """Reads branch and remote information from the working repository."""

    def __init__(self, path: str | Path = ".", git: GitInterface | None = None):
        self.path = Path(path)
        self.git = git if git is not None else SubprocessGitInterface(self.path)

    def _out(self, args: list[str]) -> str | None:
        output = self.git.run_git_text_out(args, cwd=self.path)
        if output is None:
            return None
        output = output.strip()
        return output or None

    def is_git_repo(self) -> bool:
        return self._out(["rev-parse", "--is-inside-work-tree"]) == "true"

    def current_branch(self) -> str | None:
        branch = self._out(["rev-parse", "--abbrev-ref", "HEAD"])
        # detached head
        if branch == "HEAD":
            return None
        return branch

    def remote_url(self) -> str | None:
        # kept as configured, ssh urls keep working with the user's keys
        return self._out(["config", "--get", f"remote.{REMOTE_NAME}.url"])

    def default_branch(self) -> str:
        symbolic = self._out(["symbolic-ref", f"refs/remotes/{REMOTE_NAME}/HEAD"])
        if symbolic:
            return symbolic.rsplit(f"refs/remotes/{REMOTE_NAME}/", 1)[-1]

        ls_remote = self._out(["ls-remote", "--symref", REMOTE_NAME, "HEAD"])
        if ls_remote:
            match = _SYMREF_RE.search(ls_remote)
            if match:
                return match.group(1)

        logger.debug(
            f"Could not determine the local default branch, using {FALLBACK_DEFAULT_BRANCH}"
        )
        return FALLBACK_DEFAULT_BRANCH

    def has_local_branch(self, name: str) -> bool:
        return (
            self._out(["rev-parse", "--verify", "-q", f"refs/heads/{name}"]) is not None
        )

    def staged_diff(self) -> str:
        return self.git.run_git_text_out(["diff", "--cached"], cwd=self.path) or ""

    def detect(self) -> GitInfo:
        if not self.is_git_repo():
            logger.debug(f"{self.path} is not a git repository")
            return GitInfo(None, None, FALLBACK_DEFAULT_BRANCH, False)

        info = GitInfo(
            repo_url=self.remote_url(),
            current_branch=self.current_branch(),
            default_branch=self.default_branch(),
            is_git_repo=True,
        )
        logger.debug(f"Detected local repository info: {info}")
        return info
