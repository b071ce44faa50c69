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

import pytest

from pullpoet.core.branch_diff.workspace import temporary_workspace


def test_workspace_removed_after_use():
    with temporary_workspace() as workdir:
        (workdir / "file.txt").write_text("data")
        assert workdir.is_dir()
        assert workdir.name.startswith("pullpoet-")
    assert not workdir.exists()


def test_workspace_removed_on_error():
    with pytest.raises(RuntimeError):
        with temporary_workspace(prefix="pullpoet-test-") as workdir:
            (workdir / "nested").mkdir()
            raise RuntimeError("boom")
    assert not workdir.exists()


def test_workspaces_are_private():
    with temporary_workspace() as first, temporary_workspace() as second:
        assert first != second
