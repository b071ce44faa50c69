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

import os
import subprocess
from pathlib import Path

from loguru import logger

from pullpoet.constants import GIT_ENV_OVERRIDES
from pullpoet.core.exceptions import git_not_found

from .interface import GitInterface

_LOG_LIMIT = 2000


def _truncate(text: str) -> str:
    return text[:_LOG_LIMIT] + ("...(truncated)" if len(text) > _LOG_LIMIT else "")


class SubprocessGitInterface(GitInterface):
    def __init__(self, repo_path: str | Path | None = None) -> None:
        # Ensure repo_path is a Path object for consistency
        if repo_path is None:
            self.repo_path = Path.cwd()
        elif isinstance(repo_path, Path):
            self.repo_path = repo_path
        else:
            self.repo_path = Path(repo_path)

    def _effective_env(self, env: dict | None) -> dict:
        merged = dict(os.environ)
        merged.update(GIT_ENV_OVERRIDES)
        if env:
            merged.update(env)
        return merged

    def _effective_cwd(self, cwd: str | Path | None) -> str:
        return str(cwd) if cwd is not None else str(self.repo_path)

    def run_git_text_out(
        self,
        args: list[str],
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> str | None:
        result = self.run_git_text(args, env, cwd)
        return result.stdout if result else None

    def run_git_text(
        self,
        args: list[str],
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> subprocess.CompletedProcess[str] | None:
        effective_cwd = self._effective_cwd(cwd)
        cmd = ["git"] + args
        logger.debug(f"Running git text command: {' '.join(cmd)} cwd={effective_cwd}")
        try:
            result = subprocess.run(
                cmd,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=True,
                env=self._effective_env(env),
                cwd=effective_cwd,
            )
        except FileNotFoundError as e:
            raise git_not_found() from e
        except subprocess.CalledProcessError as e:
            logger.debug(
                f"Git text command failed: {' '.join(e.cmd)} code={e.returncode} stderr={e.stderr}"
            )
            return None

        if result.stdout:
            logger.debug(f"git stdout (text): {_truncate(result.stdout)}")
        if result.stderr:
            logger.debug(f"git stderr (text): {_truncate(result.stderr)}")
        logger.debug(f"git returncode: {result.returncode}")
        return result

    def run_git_combined(
        self,
        args: list[str],
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> subprocess.CompletedProcess[str]:
        effective_cwd = self._effective_cwd(cwd)
        cmd = ["git"] + args
        logger.debug(
            f"Running git combined command: {' '.join(cmd)} cwd={effective_cwd}"
        )
        try:
            result = subprocess.run(
                cmd,
                text=True,
                encoding="utf-8",
                errors="replace",
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
                env=self._effective_env(env),
                cwd=effective_cwd,
            )
        except FileNotFoundError as e:
            raise git_not_found() from e

        if result.stdout:
            logger.debug(f"git output (combined): {_truncate(result.stdout)}")
        logger.debug(f"git returncode: {result.returncode}")
        return result
