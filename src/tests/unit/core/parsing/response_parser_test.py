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

from pullpoet.core.exceptions import EmptyGeneratedResponse
from pullpoet.core.parsing.response_parser import (
    MAX_TITLE_LENGTH,
    ParsedOutput,
    clean_title,
    parse_bare_json,
    parse_fenced_json,
    parse_legacy_format,
    parse_markdown_heading,
    parse_response,
)

# -----------------------------------------------------------------------------
# Title cleaning
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Title: Add login", "Add login"),
        ("**Title:** Add login", "Add login"),
        ("📋 **Title:** Add login", "Add login"),
        ("PR Title: Add login", "Add login"),
        ("pull request title: Add login", "Add login"),
        ("Başlık: Giriş ekle", "Giriş ekle"),
        ("**Add login**", "Add login"),
        ("Title: **Add login**", "Add login"),
        ("Add **bold** login", "Add **bold** login"),
        ("   Add login   ", "Add login"),
    ],
)
def test_clean_title(raw, expected):
    assert clean_title(raw) == expected


def test_long_title_is_truncated_to_limit():
    title = "x" * 90

    cleaned = clean_title(title)

    assert len(cleaned) == MAX_TITLE_LENGTH == 80
    assert cleaned.endswith("...")
    assert cleaned[:77] == "x" * 77


def test_title_at_limit_is_kept():
    assert clean_title("y" * 80) == "y" * 80


# -----------------------------------------------------------------------------
# Individual strategies
# -----------------------------------------------------------------------------


def test_fenced_json():
    text = '```json\n{"title":"Fix bug","body":"Details"}\n```'
    assert parse_fenced_json(text) == ParsedOutput("Fix bug", "Details")


def test_fenced_json_with_surrounding_text():
    text = 'Here you go:\n```JSON\n{"title": "Fix bug", "body": "a\\nb"}\n```\nThanks'
    assert parse_fenced_json(text) == ParsedOutput("Fix bug", "a\nb")


def test_fenced_json_rejects_invalid_payloads():
    assert parse_fenced_json("```json\nnot json\n```") is None
    assert parse_fenced_json('```json\n{"body": "no title"}\n```') is None
    assert parse_fenced_json('```json\n{"title": "  "}\n```') is None
    assert parse_fenced_json('```json\n["title"]\n```') is None
    assert parse_fenced_json("no fence") is None


def test_bare_json():
    text = 'Sure! {"title": "Title: Add cache", "body": "Adds caching"} Done.'
    assert parse_bare_json(text) == ParsedOutput("Add cache", "Adds caching")


def test_bare_json_missing_body():
    assert parse_bare_json('{"title": "Only title"}') == ParsedOutput("Only title", "")


def test_markdown_heading():
    assert parse_markdown_heading("intro\n# Add login\n\nImplements OAuth\n") == (
        ParsedOutput("Add login", "Implements OAuth")
    )
    assert parse_markdown_heading("## Not a top heading") is None


def test_legacy_format():
    text = "TITLE: Update deps\nBODY:\nBumps versions\n"
    assert parse_legacy_format(text) == ParsedOutput("Update deps", "Bumps versions")
    assert parse_legacy_format("TITLE: Only title") == ParsedOutput("Only title", "")
    assert parse_legacy_format("Title without marker") is None


# -----------------------------------------------------------------------------
# Cascade
# -----------------------------------------------------------------------------


def test_cascade_prefers_fenced_json():
    text = '# Heading\n```json\n{"title":"From JSON","body":"B"}\n```'
    assert parse_response(text) == ParsedOutput("From JSON", "B")


def test_cascade_markdown_heading_without_json():
    assert parse_response("# Add login\n\nImplements OAuth") == ParsedOutput(
        "Add login", "Implements OAuth"
    )


def test_cascade_invalid_json_falls_through():
    text = "{not really json}\nsecond line"
    assert parse_response(text) == ParsedOutput("{not really json}", "second line")


def test_cascade_first_line_fallback():
    text = "\n\nRefactor config loader\nMoves parsing into one place\nand adds tests"

    assert parse_response(text) == ParsedOutput(
        "Refactor config loader", "Moves parsing into one place\nand adds tests"
    )


def test_cascade_first_line_skips_decoration():
    assert parse_response("**\nReal title\nbody") == ParsedOutput("Real title", "body")


def test_cascade_single_line():
    assert parse_response("Just a title") == ParsedOutput("Just a title", "")


@pytest.mark.parametrize("text", ["", "   ", "\n\t\n", None])
def test_empty_input_fails(text):
    with pytest.raises(EmptyGeneratedResponse):
        parse_response(text)
