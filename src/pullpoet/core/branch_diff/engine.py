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

from loguru import logger

from pullpoet.core.exceptions import ValidationError
from pullpoet.core.logging.utils import time_block

from .interface import BranchDiffer
from .library_differ import LibraryBranchDiffer
from .models import (
    COMMIT_HISTORY_DEPTH,
    DIFF_ONLY_DEPTH,
    DiffResult,
    DiffStrategy,
)
from .native_differ import NativeBranchDiffer
from .refs import strip_remote_prefix

LocalBranchProbe = Callable[[str], bool]

_DIFFERS: dict[DiffStrategy, Callable[[LocalBranchProbe | None], BranchDiffer]] = {
    DiffStrategy.LIBRARY: lambda probe: LibraryBranchDiffer(has_local_branch=probe),
    DiffStrategy.NATIVE: lambda probe: NativeBranchDiffer(has_local_branch=probe),
}


def create_differ(
    strategy: DiffStrategy, has_local_branch: LocalBranchProbe | None = None
) -> BranchDiffer:
    """Instantiate the differ registered for a strategy."""
    try:
        factory = _DIFFERS[DiffStrategy(strategy)]
    except (KeyError, ValueError) as e:
        raise ValidationError(f"Unknown diff strategy: {strategy}") from e
    return factory(has_local_branch)


def strategy_for(fast_mode: bool) -> DiffStrategy:
    return DiffStrategy.NATIVE if fast_mode else DiffStrategy.LIBRARY


def _normalize_inputs(location: str, source: str, target: str) -> tuple[str, str]:
    if not location or not location.strip():
        raise ValidationError("Repository location is required")
    source_name = strip_remote_prefix(source or "")
    target_name = strip_remote_prefix(target or "")
    if not source_name:
        raise ValidationError("Source branch is required")
    if not target_name:
        raise ValidationError("Target branch is required")
    return source_name, target_name


def analyze_branches(
    location: str,
    source: str,
    target: str,
    strategy: DiffStrategy = DiffStrategy.LIBRARY,
    has_local_branch: LocalBranchProbe | None = None,
) -> DiffResult:
    """
    Compute the diff, unique commits and default branch of a remote repository.

    Args:
        location: Remote URL (https, ssh or file) or local path
        source: Branch with the new work, optionally prefixed with origin/
        target: Branch the work would be merged into
        strategy: Acquisition strategy to use
        has_local_branch: Probe used to recognize branches that were never pushed

    Returns:
        DiffResult owned by the caller
    """
    source_name, target_name = _normalize_inputs(location, source, target)
    differ = create_differ(strategy, has_local_branch)

    logger.info(
        f"Analyzing [cyan]{source_name}[/cyan] against [cyan]{target_name}[/cyan] "
        f"({differ.strategy.value} strategy)"
    )
    with time_block(f"analyze_branches ({differ.strategy.value})"):
        result = differ.collect(
            location, source_name, target_name, COMMIT_HISTORY_DEPTH
        )

    logger.debug(
        f"Diff size={len(result.diff_text)} commits={len(result.commits)} "
        f"default_branch={result.default_branch}"
    )
    return result


def get_diff(
    location: str,
    source: str,
    target: str,
    strategy: DiffStrategy = DiffStrategy.LIBRARY,
    has_local_branch: LocalBranchProbe | None = None,
) -> str:
    """Only the unified diff between the two branch tips, with a shallower fetch."""
    source_name, target_name = _normalize_inputs(location, source, target)
    differ = create_differ(strategy, has_local_branch)
    with time_block(f"get_diff ({differ.strategy.value})"):
        result = differ.collect(
            location,
            source_name,
            target_name,
            DIFF_ONLY_DEPTH,
            include_commits=False,
        )
    return result.diff_text
