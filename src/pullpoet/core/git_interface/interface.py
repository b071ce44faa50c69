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
from pathlib import Path
from subprocess import CompletedProcess


class GitInterface(ABC):
    """
    Abstract interface for running git commands.
    This abstracts away the details of how git commands are executed.
    """

    @abstractmethod
    def run_git_text_out(
        self,
        args: list[str],
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> str | None:
        """Run a git command and return stdout. Returns None on error."""

    @abstractmethod
    def run_git_text(
        self,
        args: list[str],
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> CompletedProcess[str] | None:
        """Run a git command with text response output. Returns None on error."""

    @abstractmethod
    def run_git_combined(
        self,
        args: list[str],
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> CompletedProcess[str]:
        """
        Run a git command with stderr folded into stdout.
        Never raises on a non-zero exit; callers inspect the return code.
        """
