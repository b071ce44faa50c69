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

from loguru import logger

from .refs import strip_remote_prefix

DEFAULT_BRANCH_CANDIDATES: tuple[str, ...] = ("main", "master", "dev", "develop")
FALLBACK_DEFAULT_BRANCH = "main"


def resolve_default_branch(
    symbolic_head: str | None,
    known_branches: Iterable[str],
    candidates: tuple[str, ...] = DEFAULT_BRANCH_CANDIDATES,
) -> str:
    """
    Resolve the remote's default branch.

    Args:
        symbolic_head: Target of the remote HEAD symbolic ref
            (e.g. refs/remotes/origin/main), or None when it is unavailable
        known_branches: Branch names present on the remote as far as we know
        candidates: Ordered names to probe when HEAD is unavailable

    Returns:
        The default branch name. Never raises.
    """
    if symbolic_head:
        name = strip_remote_prefix(symbolic_head)
        if name and name != "HEAD":
            logger.debug(f"Default branch from symbolic HEAD: {name}")
            return name

    known = {strip_remote_prefix(b) for b in known_branches if b}
    for candidate in candidates:
        if candidate in known:
            logger.debug(f"Default branch from candidate probe: {candidate}")
            return candidate

    logger.debug(f"Default branch unresolved, using {FALLBACK_DEFAULT_BRANCH}")
    return FALLBACK_DEFAULT_BRANCH
