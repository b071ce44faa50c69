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

import contextlib
import shutil
import tempfile
from collections.abc import Iterator
from pathlib import Path

from loguru import logger


@contextlib.contextmanager
def temporary_workspace(prefix: str = "pullpoet-") -> Iterator[Path]:
    """
    Allocate a private temporary directory for one differencing call.

    The directory is removed on every exit path, including errors.
    """
    workdir = Path(tempfile.mkdtemp(prefix=prefix))
    logger.debug(f"Created temporary workspace {workdir}")
    try:
        yield workdir
    finally:
        try:
            shutil.rmtree(workdir)
            logger.debug(f"Removed temporary workspace {workdir}")
        except OSError as e:
            logger.warning(f"Failed to remove temporary workspace {workdir}: {e}")
