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

from abc import ABC, abstractmethod
from collections.abc import Callable

from loguru import logger

from pullpoet.core.exceptions import CommitEnumerationDegraded

from .commit_walker import WalkResult
from .models import CommitRecord, DiffResult, DiffStrategy


class BranchDiffer(ABC):
    """
    Interface for a strategy that acquires a remote repository and produces
    the diff, unique commits and default branch for two of its branches.
    """

    strategy: DiffStrategy

    @abstractmethod
    def collect(
        self,
        location: str,
        source: str,
        target: str,
        depth: int,
        include_commits: bool = True,
    ) -> DiffResult:
        """
        Args:
            location: Remote URL or path, passed to git unchanged
            source: Source branch name, already stripped of any remote prefix
            target: Target branch name, already stripped of any remote prefix
            depth: Shallow fetch depth
            include_commits: Whether to enumerate the commits unique to source

        Raises:
            RemoteAccessFailure, BranchNotFound, RemoteRefMissing,
            DiffGenerationFailure
        """

    @staticmethod
    def enumerate_commits(
        walk: Callable[[], WalkResult],
    ) -> tuple[tuple[CommitRecord, ...], str | None]:
        """
        Run a commit walk, degrading to an empty list on failure.

        Returns the commits and, when degraded, the reason.
        """
        try:
            return walk().commits, None
        except CommitEnumerationDegraded as e:
            reason = e.message if not e.details else f"{e.message}: {e.details}"
            logger.warning(
                f"[yellow]Could not list commits, continuing without them:[/yellow] {reason}"
            )
            return (), reason
