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

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from .models import COMMIT_LIMIT, CommitRecord


class WalkTermination(str, Enum):
    TARGET_REACHED = "target_reached"
    CAP_REACHED = "cap_reached"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class WalkResult:
    commits: tuple[CommitRecord, ...]
    termination: WalkTermination


def walk_unique_commits(
    source_history: Iterable[CommitRecord],
    target_hash: str,
    target_ancestry: set[str],
    limit: int = COMMIT_LIMIT,
) -> WalkResult:
    """
    Collect the commits that exist on the source branch but not on the target.

    Args:
        source_history: Commits reachable from the source tip, newest first
        target_hash: Commit hash of the target tip
        target_ancestry: Hashes reachable from the target tip (tip included)
        limit: Maximum number of commits to return

    Returns:
        The unique commits, newest first, and why the walk stopped.
    """
    collected: list[CommitRecord] = []

    if limit <= 0:
        return WalkResult((), WalkTermination.CAP_REACHED)

    for commit in source_history:
        if commit.full_hash == target_hash:
            termination = WalkTermination.TARGET_REACHED
            break

        # already merged or shared history
        if commit.full_hash in target_ancestry:
            continue

        collected.append(commit)
        if len(collected) >= limit:
            termination = WalkTermination.CAP_REACHED
            break
    else:
        termination = WalkTermination.EXHAUSTED

    logger.debug(
        f"Commit walk collected {len(collected)} commits, stopped: {termination.value}"
    )
    return WalkResult(tuple(collected), termination)
