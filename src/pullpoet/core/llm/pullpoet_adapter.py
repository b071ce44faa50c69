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

import logging
import os
from dataclasses import dataclass

import litellm
from loguru import logger

from pullpoet.core.exceptions import AIServiceError
from pullpoet.core.prompt.prompts import SYSTEM_MESSAGE

# Disable LiteLLM logging at module level to prevent any logging worker errors
os.environ["LITELLM_LOG"] = "CRITICAL"
litellm.success_callback = []
litellm.failure_callback = []
litellm.callbacks = []
litellm.set_verbose = False
litellm.suppress_debug_info = True
litellm.drop_params = True


logging.getLogger("LiteLLM").setLevel(logging.CRITICAL)
logging.getLogger("LiteLLM Router").setLevel(logging.CRITICAL)
logging.getLogger("httpx").setLevel(logging.CRITICAL)


@dataclass
class ModelConfig:
    """
    Configuration for the LLM Adapter.
    model_string format: "provider/model_name" (e.g. "openai/gpt-4o")
    """

    model_string: str
    api_key: str | None = None
    api_base: str | None = None
    temperature: float = 0.7
    max_tokens: int | None = None
    provider_name: str = ""
    model_name: str = ""


class PullPoetAdapter:
    """
    Thin wrapper around litellm used to generate pull request text.
    Supports all LiteLLM providers via the provider/model format.
    """

    def __init__(self, config: ModelConfig):
        self.config = config
        self.model_string = config.model_string

    def provider_info(self) -> tuple[str, str]:
        """Display name of the provider and the model, used in the signature."""
        provider = self.config.provider_name or self.model_string.partition("/")[0]
        model = self.config.model_name or self.model_string.partition("/")[2]
        return provider, model

    def build_messages(self, prompt: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_MESSAGE},
            {"role": "user", "content": prompt},
        ]

    def invoke(self, prompt: str | list[dict[str, str]]) -> str:
        """Send the prompt and return the content string (possibly empty)."""
        messages = self.build_messages(prompt) if isinstance(prompt, str) else prompt

        logger.debug(f"Invoking {self.model_string} (sync)")

        try:
            response = litellm.completion(
                model=self.model_string,
                messages=messages,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                api_key=self.config.api_key,
                api_base=self.config.api_base,
            )
        except litellm.AuthenticationError as e:
            provider = self.model_string.partition("/")[0]
            raise AIServiceError(
                f"Authentication failed for {provider}",
                f"Please check your API key is set correctly. Error: {str(e)}",
            ) from e
        except litellm.NotFoundError as e:
            raise AIServiceError(
                f"Model {self.model_string} not found",
                f"Please check the model name is correct. Error: {str(e)}",
            ) from e
        except litellm.RateLimitError as e:
            raise AIServiceError(
                f"Rate limit exceeded for {self.model_string}",
                f"Please try again later. Error: {str(e)}",
            ) from e
        except litellm.APIConnectionError as e:
            raise AIServiceError(
                f"Failed to connect to API for {self.model_string}",
                f"Please check the provider base URL and your connection. Error: {str(e)}",
            ) from e
        except Exception as e:
            raise AIServiceError(
                f"LLM request failed for {self.model_string}", str(e)
            ) from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
