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
Branch differencing by shelling out to the git binary.

Equivalent to the library strategy but avoids the clone step entirely:
an empty repository is initialized, the remote is added and only the two
branches are fetched.
"""

from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path

from loguru import logger

from pullpoet.constants import REMOTE_NAME
from pullpoet.core.exceptions import (
    BranchNotFound,
    CommitEnumerationDegraded,
    DiffGenerationFailure,
    RemoteAccessFailure,
)
from pullpoet.core.git_interface.interface import GitInterface
from pullpoet.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)
from pullpoet.core.logging.utils import time_block

from .commit_walker import WalkResult, walk_unique_commits
from .default_branch import resolve_default_branch
from .interface import BranchDiffer
from .models import BranchRef, CommitRecord, DiffResult, DiffStrategy
from .refs import (
    REMOTE_TRACKING_PREFIX,
    classify_fetch_error,
    fetch_refspecs,
    remote_tracking_ref,
)
from .workspace import temporary_workspace

# unit separator between fields, record separator between commits
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
LOG_FORMAT = "%H%x1f%an%x1f%ae%x1f%aI%x1f%B%x1e"


def parse_log_output(output: str) -> Iterator[CommitRecord]:
    """Parse `git log --format=LOG_FORMAT` output into commit records."""
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record.strip():
            continue
        parts = record.split(_FIELD_SEP, 4)
        if len(parts) != 5:
            logger.debug(f"Skipping malformed log record: {record[:200]!r}")
            continue
        full_hash, name, email, date, message = parts
        yield CommitRecord(
            full_hash=full_hash.strip(),
            message=message.strip(),
            author_name=name,
            author_email=email,
            authored_at=datetime.fromisoformat(date.strip()),
        )


class NativeBranchDiffer(BranchDiffer):
    strategy = DiffStrategy.NATIVE

    def __init__(
        self,
        git: GitInterface | None = None,
        has_local_branch: Callable[[str], bool] | None = None,
    ):
        self.git = git if git is not None else SubprocessGitInterface()
        self.has_local_branch = has_local_branch

    def collect(
        self,
        location: str,
        source: str,
        target: str,
        depth: int,
        include_commits: bool = True,
    ) -> DiffResult:
        with temporary_workspace() as workdir:
            self._acquire(location, workdir, source, target, depth)
            source_ref = self._resolve(workdir, source)
            target_ref = self._resolve(workdir, target)

            with time_block("native diff"):
                diff_text = self._diff(workdir, source, target)

            commits: tuple[CommitRecord, ...] = ()
            degraded = None
            if include_commits:
                commits, degraded = self.enumerate_commits(
                    lambda: self._walk(workdir, source_ref, target_ref)
                )

            default_branch = self._default_branch(workdir)

        return DiffResult(
            diff_text=diff_text,
            commits=commits,
            default_branch=default_branch,
            commit_enumeration_error=degraded,
        )

    def _run_checked(self, args: list[str], workdir: Path, what: str) -> str:
        result = self.git.run_git_combined(args, cwd=workdir)
        if result.returncode != 0:
            raise RemoteAccessFailure(f"Failed to {what}", result.stdout.strip())
        return result.stdout

    def _acquire(
        self, location: str, workdir: Path, source: str, target: str, depth: int
    ) -> None:
        self._run_checked(["init", "-q"], workdir, "initialize a temporary repository")
        self._run_checked(
            ["remote", "add", REMOTE_NAME, location], workdir, "add the remote"
        )

        refspecs = fetch_refspecs(source, target)
        logger.debug(f"Fetching {refspecs} (depth={depth})")
        with time_block("native fetch"):
            result = self.git.run_git_combined(
                ["fetch", "--no-tags", f"--depth={depth}", REMOTE_NAME, *refspecs],
                cwd=workdir,
            )
        if result.returncode != 0:
            raise classify_fetch_error(
                result.stdout, source, target, self.has_local_branch
            )

        # lets the remote HEAD be read locally, best effort
        self.git.run_git_combined(
            ["remote", "set-head", REMOTE_NAME, "--auto"], cwd=workdir
        )

    def _resolve(self, workdir: Path, branch: str) -> BranchRef:
        commit_hash = self.git.run_git_text_out(
            ["rev-parse", "--verify", "-q", f"{remote_tracking_ref(branch)}^{{commit}}"],
            cwd=workdir,
        )
        if not commit_hash or not commit_hash.strip():
            raise BranchNotFound(branch)
        logger.debug(f"Resolved {branch} -> {commit_hash.strip()}")
        return BranchRef(branch, commit_hash.strip())

    def _diff(self, workdir: Path, source: str, target: str) -> str:
        attempts = [
            [f"{REMOTE_NAME}/{target}", f"{REMOTE_NAME}/{source}"],
            [remote_tracking_ref(target), remote_tracking_ref(source)],
        ]
        output = ""
        for refs in attempts:
            result = self.git.run_git_combined(
                ["diff", "--full-index", "--no-color", "--no-ext-diff", *refs, "--"],
                cwd=workdir,
            )
            if result.returncode == 0:
                return result.stdout
            output = result.stdout
            logger.debug(f"git diff {' '.join(refs)} failed, trying next ref form")

        raise DiffGenerationFailure(
            f"Failed to generate diff between '{target}' and '{source}'",
            output.strip(),
        )

    def _walk(
        self, workdir: Path, source_ref: BranchRef, target_ref: BranchRef
    ) -> WalkResult:
        ancestry = self.git.run_git_text_out(
            ["rev-list", target_ref.commit_hash], cwd=workdir
        )
        if ancestry is None:
            raise CommitEnumerationDegraded(
                f"Failed to list the history of '{target_ref.name}'"
            )
        target_ancestry = set(ancestry.split())

        log = self.git.run_git_text_out(
            ["log", f"--format={LOG_FORMAT}", source_ref.commit_hash], cwd=workdir
        )
        if log is None:
            raise CommitEnumerationDegraded(
                f"Failed to read the log of '{source_ref.name}'"
            )

        try:
            return walk_unique_commits(
                parse_log_output(log), target_ref.commit_hash, target_ancestry
            )
        except ValueError as e:
            raise CommitEnumerationDegraded(
                "Failed to parse the commit log", str(e)
            ) from e

    def _default_branch(self, workdir: Path) -> str:
        symbolic_head = self.git.run_git_text_out(
            ["symbolic-ref", "-q", f"{REMOTE_TRACKING_PREFIX}HEAD"], cwd=workdir
        )
        known = self.git.run_git_text_out(
            ["for-each-ref", "--format=%(refname)", REMOTE_TRACKING_PREFIX.rstrip("/")],
            cwd=workdir,
        )
        return resolve_default_branch(
            symbolic_head.strip() if symbolic_head else None,
            (known or "").split(),
        )
