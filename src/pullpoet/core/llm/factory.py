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

"""Factory for creating the litellm adapter from pullpoet provider settings."""

from loguru import logger

from pullpoet.constants import (
    DEFAULT_PROVIDER_BASE_URLS,
    PROVIDER_DISPLAY_NAMES,
    PROVIDERS_REQUIRING_API_KEY,
    SUPPORTED_PROVIDERS,
)

from ..exceptions import api_key_missing, unsupported_provider
from .pullpoet_adapter import ModelConfig, PullPoetAdapter

# OpenWebUI serves an OpenAI compatible API under /api
OPENWEBUI_API_PATH = "/api"
OPENWEBUI_PLACEHOLDER_KEY = "not-needed"


def provider_base_url(provider: str, base_url: str | None = None) -> str:
    """Explicit base URL if given, otherwise the provider default."""
    if base_url:
        return base_url.rstrip("/")
    return DEFAULT_PROVIDER_BASE_URLS.get(provider, "")


def model_string_for(provider: str, model: str) -> str:
    """
    Map a pullpoet provider to a litellm model string.

    OpenWebUI is reached through litellm's OpenAI client.
    """
    if provider == "openwebui":
        return f"openai/{model}"
    return f"{provider}/{model}"


def create_model_config(
    provider: str,
    model: str,
    api_key: str | None = None,
    base_url: str | None = None,
    temperature: float = 0.7,
) -> ModelConfig:
    provider = (provider or "").lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise unsupported_provider(provider)
    if provider in PROVIDERS_REQUIRING_API_KEY and not api_key:
        raise api_key_missing(PROVIDER_DISPLAY_NAMES[provider])

    api_base = None
    if provider == "ollama":
        api_base = provider_base_url(provider, base_url)
    elif provider == "openwebui":
        api_base = provider_base_url(provider, base_url) + OPENWEBUI_API_PATH
        api_key = api_key or OPENWEBUI_PLACEHOLDER_KEY
    elif base_url:
        # hosted providers only get an api base when explicitly overridden
        api_base = base_url.rstrip("/")

    config = ModelConfig(
        model_string=model_string_for(provider, model),
        api_key=api_key,
        api_base=api_base,
        temperature=temperature,
        provider_name=PROVIDER_DISPLAY_NAMES[provider],
        model_name=model,
    )
    logger.debug(
        f"Creating LLM adapter: model={config.model_string}, api_base={config.api_base}"
    )
    return config


def create_adapter(
    provider: str,
    model: str,
    api_key: str | None = None,
    base_url: str | None = None,
    temperature: float = 0.7,
) -> PullPoetAdapter:
    return PullPoetAdapter(
        create_model_config(provider, model, api_key, base_url, temperature)
    )
