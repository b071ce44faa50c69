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
Branch differencing through GitPython.

The remote is cloned without a checkout into a throwaway directory, both
branches are fetched with explicit refspecs, and the patch between the two
tips is serialized from GitPython's structured diff objects.
"""

from collections.abc import Callable, Iterator
from pathlib import Path

from git import Commit, Diff, Repo, SymbolicReference
from git.exc import BadName, GitCommandError
from loguru import logger

from pullpoet.constants import GIT_ENV_OVERRIDES, REMOTE_NAME
from pullpoet.core.exceptions import (
    BranchNotFound,
    CommitEnumerationDegraded,
    RemoteAccessFailure,
)
from pullpoet.core.logging.utils import time_block

from .commit_walker import WalkResult, walk_unique_commits
from .default_branch import resolve_default_branch
from .interface import BranchDiffer
from .models import BranchRef, CommitRecord, DiffResult, DiffStrategy
from .refs import classify_fetch_error, fetch_refspecs, remote_tracking_ref
from .workspace import temporary_workspace

NULL_SHA = "0" * 40


def _mode(mode: int | None) -> str | None:
    return f"{mode:06o}" if mode else None


def _blob_sha(blob) -> str:
    return blob.hexsha if blob is not None else NULL_SHA


def serialize_diff(d: Diff, similarity: int | None = None) -> str:
    """
    Render one GitPython Diff the way `git diff --full-index` prints it.

    GitPython does not capture the similarity of a rename or copy when
    parsing patch output, so it is passed in from the raw diff.
    """
    a_path = d.a_path or d.b_path
    b_path = d.b_path or d.a_path
    a_mode = _mode(d.a_mode)
    b_mode = _mode(d.b_mode)

    lines = [f"diff --git a/{a_path} b/{b_path}"]
    if d.new_file:
        lines.append(f"new file mode {b_mode}")
    elif d.deleted_file:
        lines.append(f"deleted file mode {a_mode}")
    elif a_mode and b_mode and a_mode != b_mode:
        lines.append(f"old mode {a_mode}")
        lines.append(f"new mode {b_mode}")

    if d.renamed_file or d.copied_file:
        if similarity is not None:
            lines.append(f"similarity index {similarity}%")
        if d.renamed_file:
            lines.append(f"rename from {d.rename_from}")
            lines.append(f"rename to {d.rename_to}")
        else:
            lines.append(f"copy from {a_path}")
            lines.append(f"copy to {b_path}")

    patch = d.diff or b""
    if isinstance(patch, bytes):
        patch = patch.decode("utf-8", errors="replace")

    a_sha, b_sha = _blob_sha(d.a_blob), _blob_sha(d.b_blob)
    if a_sha != b_sha:
        index = f"index {a_sha}..{b_sha}"
        if not d.new_file and not d.deleted_file and a_mode == b_mode and a_mode:
            index += f" {a_mode}"
        lines.append(index)

    if patch and not patch.startswith("Binary files"):
        lines.append("--- /dev/null" if d.new_file else f"--- a/{a_path}")
        lines.append("+++ /dev/null" if d.deleted_file else f"+++ b/{b_path}")

    text = "\n".join(lines) + "\n"
    if patch:
        text += patch if patch.endswith("\n") else patch + "\n"
    return text


def to_commit_record(commit: Commit) -> CommitRecord:
    message = commit.message
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    return CommitRecord(
        full_hash=commit.hexsha,
        message=message.strip(),
        author_name=commit.author.name or "",
        author_email=commit.author.email or "",
        authored_at=commit.authored_datetime,
    )


class LibraryBranchDiffer(BranchDiffer):
    strategy = DiffStrategy.LIBRARY

    def __init__(self, has_local_branch: Callable[[str], bool] | None = None):
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
            with self._acquire(location, workdir, source, target, depth) as repo:
                source_ref = self._resolve(repo, source)
                target_ref = self._resolve(repo, target)

                with time_block("library diff"):
                    diff_text = self._diff(repo, source_ref, target_ref)

                commits: tuple[CommitRecord, ...] = ()
                degraded = None
                if include_commits:
                    commits, degraded = self.enumerate_commits(
                        lambda: self._walk(repo, source_ref, target_ref)
                    )

                default_branch = self._default_branch(repo)

        return DiffResult(
            diff_text=diff_text,
            commits=commits,
            default_branch=default_branch,
            commit_enumeration_error=degraded,
        )

    def _acquire(
        self, location: str, workdir: Path, source: str, target: str, depth: int
    ) -> Repo:
        logger.debug(f"Cloning {location} (depth={depth}, no checkout)")
        try:
            with time_block("library clone"):
                repo = Repo.clone_from(
                    location,
                    workdir,
                    env=GIT_ENV_OVERRIDES,
                    no_checkout=True,
                    depth=depth,
                )
        except GitCommandError as e:
            raise RemoteAccessFailure(
                f"Failed to clone repository from {location}", str(e)
            ) from e

        repo.git.update_environment(**GIT_ENV_OVERRIDES)
        refspecs = fetch_refspecs(source, target)
        logger.debug(f"Fetching {refspecs} (depth={depth})")
        try:
            with time_block("library fetch"):
                repo.remote(REMOTE_NAME).fetch(
                    refspec=refspecs, depth=depth, no_tags=True
                )
        except GitCommandError as e:
            repo.close()
            raise classify_fetch_error(
                str(e), source, target, self.has_local_branch
            ) from e

        return repo

    def _resolve(self, repo: Repo, branch: str) -> BranchRef:
        try:
            commit = repo.commit(remote_tracking_ref(branch))
        except (BadName, ValueError, GitCommandError) as e:
            raise BranchNotFound(branch, str(e)) from e
        logger.debug(f"Resolved {branch} -> {commit.hexsha}")
        return BranchRef(branch, commit.hexsha)

    def _diff(self, repo: Repo, source_ref: BranchRef, target_ref: BranchRef) -> str:
        if source_ref.commit_hash == target_ref.commit_hash:
            return ""
        target_commit = repo.commit(target_ref.commit_hash)
        source_commit = repo.commit(source_ref.commit_hash)
        scores = {
            (d.a_path, d.b_path): d.score
            for d in target_commit.diff(source_commit)
            if d.score is not None
        }
        diffs = target_commit.diff(source_commit, create_patch=True)
        return "".join(
            serialize_diff(d, scores.get((d.a_path, d.b_path))) for d in diffs
        )

    def _walk(
        self, repo: Repo, source_ref: BranchRef, target_ref: BranchRef
    ) -> WalkResult:
        try:
            target_ancestry = {
                c.hexsha for c in repo.iter_commits(target_ref.commit_hash)
            }

            def history() -> Iterator[CommitRecord]:
                for commit in repo.iter_commits(source_ref.commit_hash):
                    yield to_commit_record(commit)

            return walk_unique_commits(
                history(), target_ref.commit_hash, target_ancestry
            )
        except (GitCommandError, BadName, ValueError) as e:
            raise CommitEnumerationDegraded(
                "Failed to walk the source branch history", str(e)
            ) from e

    def _default_branch(self, repo: Repo) -> str:
        symbolic_head = None
        try:
            head = SymbolicReference(repo, f"refs/remotes/{REMOTE_NAME}/HEAD")
            symbolic_head = head.reference.path
        except (ValueError, TypeError, OSError) as e:
            logger.debug(f"Remote HEAD not available: {e}")

        try:
            known = [ref.remote_head for ref in repo.remote(REMOTE_NAME).refs]
        except (ValueError, AssertionError) as e:
            logger.debug(f"Could not list remote refs: {e}")
            known = []

        return resolve_default_branch(symbolic_head, known)
