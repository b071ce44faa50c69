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

from unittest.mock import Mock

import pytest

from pullpoet.core.branch_diff.refs import (
    classify_fetch_error,
    fetch_refspec,
    fetch_refspecs,
    find_missing_ref,
    strip_remote_prefix,
)
from pullpoet.core.exceptions import (
    BranchNotFound,
    RemoteAccessFailure,
    RemoteRefMissing,
)

MISSING_FEATURE = "fatal: couldn't find remote ref refs/heads/feature/x\n"
MISSING_MAIN = "fatal: couldn't find remote ref refs/heads/main\n"

# -----------------------------------------------------------------------------
# Name normalization
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "branch,expected",
    [
        ("feature/x", "feature/x"),
        ("origin/feature/x", "feature/x"),
        ("refs/remotes/origin/feature/x", "feature/x"),
        ("refs/heads/main", "main"),
        ("  main  ", "main"),
        ("originals", "originals"),
    ],
)
def test_strip_remote_prefix(branch, expected):
    assert strip_remote_prefix(branch) == expected


def test_fetch_refspec_maps_into_remote_tracking_namespace():
    assert fetch_refspec("feature/x") == "+refs/heads/feature/x:refs/remotes/origin/feature/x"


def test_fetch_refspecs_deduplicates_same_branch():
    assert fetch_refspecs("main", "main") == [fetch_refspec("main")]
    assert fetch_refspecs("dev", "main") == [fetch_refspec("dev"), fetch_refspec("main")]


def test_find_missing_ref():
    assert find_missing_ref(MISSING_FEATURE) == "feature/x"
    assert find_missing_ref("fatal: couldn't find remote ref nope") == "nope"
    assert find_missing_ref("fatal: repository not found") is None
    assert find_missing_ref("") is None


# -----------------------------------------------------------------------------
# Fetch error classification
# -----------------------------------------------------------------------------


def test_transport_failure_is_remote_access_failure():
    err = classify_fetch_error(
        "fatal: unable to access 'https://example.com/': Could not resolve host",
        "feature/x",
        "main",
    )
    assert isinstance(err, RemoteAccessFailure)
    assert "Could not resolve host" in err.details


def test_missing_source_without_probe_is_assumed_unpushed():
    err = classify_fetch_error(MISSING_FEATURE, "feature/x", "main")
    assert isinstance(err, RemoteRefMissing)
    assert err.branch == "feature/x"
    assert "git push --set-upstream origin feature/x" in err.details


def test_missing_target_without_probe_is_branch_not_found():
    err = classify_fetch_error(MISSING_MAIN, "feature/x", "main")
    assert type(err) is BranchNotFound
    assert err.branch == "main"


def test_probe_decides_between_missing_and_unpushed():
    probe = Mock(return_value=False)
    err = classify_fetch_error(MISSING_FEATURE, "feature/x", "main", probe)
    assert type(err) is BranchNotFound
    probe.assert_called_once_with("feature/x")

    probe = Mock(return_value=True)
    err = classify_fetch_error(MISSING_MAIN, "feature/x", "main", probe)
    assert isinstance(err, RemoteRefMissing)
    assert err.branch == "main"


def test_unknown_missing_ref_falls_back_to_source():
    err = classify_fetch_error(
        "fatal: couldn't find remote ref something-else", "feature/x", "main"
    )
    assert isinstance(err, RemoteRefMissing)
    assert err.branch == "feature/x"
