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

from pullpoet.constants import PROJECT_URL
from pullpoet.core.branch_diff.models import DiffResult
from pullpoet.core.exceptions import EmptyGeneratedResponse
from pullpoet.core.generator.pr_generator import PRGenerator, signature

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def adapter():
    fake = Mock()
    fake.invoke.return_value = (
        '\x00```json\n{"title": "Title: Add login", "body": "Implements OAuth"}\n```  '
    )
    fake.provider_info.return_value = ("OpenAI", "gpt-4o")
    return fake


@pytest.fixture
def diff_result():
    return DiffResult(diff_text="diff --git a/a b/a\n+x\n", default_branch="main")


# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


def test_signature_names_provider_and_model():
    text = signature("Ollama", "llama3")
    assert text.startswith("\n\n---\n\n")
    assert f"[pullpoet]({PROJECT_URL})" in text
    assert "using Ollama (llama3)" in text


def test_pr_mode_appends_signature(adapter, diff_result, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = PRGenerator(adapter).generate(diff_result, repo_url="git@github.com:o/r.git")

    assert result.title == "Add login"
    assert result.body == "Implements OAuth" + signature("OpenAI", "gpt-4o")
    prompt = adapter.invoke.call_args.args[0]
    assert "+x" in prompt
    assert "https://github.com/o/r" in prompt


def test_preview_mode_has_no_signature(adapter, diff_result, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = PRGenerator(adapter).generate(diff_result, pr_mode=False)

    assert result.body == "Implements OAuth"
    adapter.provider_info.assert_not_called()


def test_custom_prompt_and_language(adapter, diff_result, tmp_path):
    prompt_file = tmp_path / "prompt.md"
    prompt_file.write_text("Write like a pirate.", encoding="utf-8")

    PRGenerator(adapter, system_prompt=str(prompt_file), language="German").generate(
        diff_result
    )

    prompt = adapter.invoke.call_args.args[0]
    assert prompt.startswith("Write like a pirate.")
    assert "German" in prompt


def test_empty_model_response(adapter, diff_result, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    adapter.invoke.return_value = " \x00 \n"

    with pytest.raises(EmptyGeneratedResponse):
        PRGenerator(adapter).generate(diff_result)
