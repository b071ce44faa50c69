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
Branch name normalization, ref-spec construction and classification of
fetch failures into the git error taxonomy.
"""

import re
from collections.abc import Callable

from pullpoet.constants import REMOTE_NAME
from pullpoet.core.exceptions import (
    BranchNotFound,
    GitError,
    RemoteAccessFailure,
    RemoteRefMissing,
)

REMOTE_PREFIX = f"{REMOTE_NAME}/"
REMOTE_TRACKING_PREFIX = f"refs/remotes/{REMOTE_NAME}/"

_MISSING_REF_RE = re.compile(r"couldn't find remote ref\s+(?:refs/heads/)?(\S+)")


def strip_remote_prefix(branch: str) -> str:
    """Accept both 'feature/x' and 'origin/feature/x'."""
    branch = branch.strip()
    if branch.startswith(REMOTE_TRACKING_PREFIX):
        return branch[len(REMOTE_TRACKING_PREFIX) :]
    if branch.startswith("refs/heads/"):
        return branch[len("refs/heads/") :]
    if branch.startswith(REMOTE_PREFIX):
        return branch[len(REMOTE_PREFIX) :]
    return branch


def remote_tracking_ref(branch: str) -> str:
    return f"{REMOTE_TRACKING_PREFIX}{branch}"


def fetch_refspec(branch: str) -> str:
    return f"+refs/heads/{branch}:{remote_tracking_ref(branch)}"


def fetch_refspecs(source: str, target: str) -> list[str]:
    """One refspec per branch, deduplicated when source and target coincide."""
    specs = [fetch_refspec(source)]
    if target != source:
        specs.append(fetch_refspec(target))
    return specs


def find_missing_ref(output: str) -> str | None:
    match = _MISSING_REF_RE.search(output or "")
    if match is None:
        return None
    return match.group(1).strip("'\"")


def classify_fetch_error(
    output: str,
    source: str,
    target: str,
    has_local_branch: Callable[[str], bool] | None = None,
) -> GitError:
    """
    Turn the transport output of a failed fetch into the matching error.

    A missing remote ref that exists in the caller's local repository was
    simply never pushed, which gets an actionable hint. Without a local
    probe the source branch is assumed to be the unpushed one.
    """
    missing = find_missing_ref(output)
    if missing is None:
        return RemoteAccessFailure(
            "Failed to fetch branches from the remote repository", output.strip()
        )

    branch = strip_remote_prefix(missing)
    if branch not in (source, target):
        # git reports the ref it was asked for, fall back to the source name
        branch = source

    if has_local_branch is not None:
        exists_locally = has_local_branch(branch)
    else:
        exists_locally = branch == source

    if exists_locally:
        return RemoteRefMissing(branch, output.strip())
    return BranchNotFound(branch, output.strip())
