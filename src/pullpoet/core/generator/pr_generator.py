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

from typing import Protocol

from loguru import logger

from pullpoet.constants import PROJECT_URL
from pullpoet.core.branch_diff.models import DiffResult
from pullpoet.core.logging.utils import time_block
from pullpoet.core.parsing.response_parser import ParsedOutput, parse_response
from pullpoet.core.prompt.prompt_builder import (
    DEFAULT_LANGUAGE,
    build_prompt,
    load_prompt_template,
)
from pullpoet.core.utils.sanitize import sanitize_llm_text


class TextGenerator(Protocol):
    def invoke(self, prompt: str) -> str: ...

    def provider_info(self) -> tuple[str, str]: ...


def signature(provider: str, model: str) -> str:
    return (
        "\n\n---\n\n"
        f"*🤖 This PR description was generated by [pullpoet]({PROJECT_URL}) "
        f"using {provider} ({model}) - an AI-powered tool for creating "
        "professional pull request descriptions.*"
    )


class PRGenerator:
    """Turns a diff into a pull request title and description."""

    def __init__(
        self,
        adapter: TextGenerator,
        system_prompt: str | None = None,
        language: str = DEFAULT_LANGUAGE,
    ):
        self.adapter = adapter
        self.system_prompt = system_prompt
        self.language = language

    def generate(
        self,
        diff_result: DiffResult,
        issue_context: str | None = None,
        repo_url: str | None = None,
        pr_mode: bool = True,
    ) -> ParsedOutput:
        template = load_prompt_template(self.system_prompt)
        prompt = build_prompt(
            diff_result,
            issue_context=issue_context,
            repo_url=repo_url,
            language=self.language,
            pr_mode=pr_mode,
            template=template,
        )
        logger.info(f"Prompt built ({len(prompt)} characters), waiting for the model...")

        with time_block("LLM generation"):
            response = self.adapter.invoke(prompt)

        logger.debug(f"AI response length: {len(response or '')} characters")
        parsed = parse_response(sanitize_llm_text(response or ""))

        if not pr_mode:
            return parsed

        provider, model = self.adapter.provider_info()
        return ParsedOutput(parsed.title, parsed.body + signature(provider, model))
