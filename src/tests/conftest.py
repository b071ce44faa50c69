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

import shutil
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass
class RemoteRepo:
    path: Path
    url: str
    main_hashes: list[str]
    feature_hashes: list[str]


def _commit(repo, path: Path, name: str, content: str, message: str) -> str:
    (path / name).write_text(content, encoding="utf-8")
    repo.git.add(name)
    repo.git.commit("-m", message)
    return repo.head.commit.hexsha


@pytest.fixture
def remote_repo(tmp_path) -> RemoteRepo:
    """
    A repository reachable through a file:// url.

    main: A -> B -> C
    feature: A -> B -> C -> D -> E (also renames notes.txt and edits app.py)
    """
    if shutil.which("git") is None:
        pytest.skip("git binary is not available")

    from git import Repo

    path = tmp_path / "remote"
    path.mkdir()
    repo = Repo.init(path)
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test Author")
        cw.set_value("user", "email", "author@example.com")
        cw.set_value("commit", "gpgsign", "false")

    main_hashes = [
        _commit(repo, path, "app.py", "print('a')\n", "A: initial commit"),
        _commit(repo, path, "notes.txt", "first notes\nsecond line\n", "B: add notes"),
        _commit(repo, path, "app.py", "print('a')\nprint('c')\n", "C: extend app"),
    ]
    repo.git.branch("-M", "main")

    repo.git.checkout("-b", "feature/login")
    d = _commit(
        repo, path, "login.py", "def login():\n    return True\n", "D: add login"
    )
    repo.git.mv("notes.txt", "docs.txt")
    (path / "app.py").write_text("print('a')\nprint('e')\n", encoding="utf-8")
    repo.git.add("app.py")
    repo.git.commit("-m", "E: rename notes and edit app\n\nLonger body line")
    e = repo.head.commit.hexsha

    repo.git.checkout("main")
    repo.close()

    return RemoteRepo(
        path=path,
        url=path.as_uri(),
        main_hashes=main_hashes,
        feature_hashes=[*main_hashes, d, e],
    )


@pytest.fixture
def long_remote_repo(tmp_path) -> RemoteRepo:
    """main has one commit, feature adds 25 more on top of it."""
    if shutil.which("git") is None:
        pytest.skip("git binary is not available")

    from git import Repo

    path = tmp_path / "long-remote"
    path.mkdir()
    repo = Repo.init(path)
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test Author")
        cw.set_value("user", "email", "author@example.com")
        cw.set_value("commit", "gpgsign", "false")

    base = _commit(repo, path, "counter.txt", "0\n", "base")
    repo.git.branch("-M", "main")
    repo.git.checkout("-b", "feature/long")
    feature = [
        _commit(repo, path, "counter.txt", f"{i}\n", f"step {i}") for i in range(1, 26)
    ]
    repo.git.checkout("main")
    repo.close()

    return RemoteRepo(path, path.as_uri(), [base], [base, *feature])
