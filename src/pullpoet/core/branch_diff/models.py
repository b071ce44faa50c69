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

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

# fetch depths: a diff alone only needs the two tips, the walker must reach the merge base
DIFF_ONLY_DEPTH = 50
COMMIT_HISTORY_DEPTH = 100

COMMIT_LIMIT = 20
SHORT_HASH_LENGTH = 8


class DiffStrategy(str, Enum):
    """How the remote is acquired and diffed."""

    LIBRARY = "library"
    NATIVE = "native"


@dataclass(frozen=True)
class BranchRef:
    name: str
    commit_hash: str


@dataclass(frozen=True)
class CommitRecord:
    full_hash: str
    message: str
    author_name: str
    author_email: str
    authored_at: datetime

    @property
    def short_hash(self) -> str:
        return self.full_hash[:SHORT_HASH_LENGTH]

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        return self.message.strip().splitlines()[0] if self.message.strip() else ""


@dataclass(frozen=True)
class DiffResult:
    """
    Output of one branch differencing call.

    commit_enumeration_error is set when the unique commit list could not be
    built; commits is then empty but diff_text is still valid.
    """

    diff_text: str
    commits: tuple[CommitRecord, ...] = field(default_factory=tuple)
    default_branch: str = "main"
    commit_enumeration_error: str | None = None

    @property
    def commits_degraded(self) -> bool:
        return self.commit_enumeration_error is not None
