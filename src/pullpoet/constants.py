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

from pathlib import Path

from platformdirs import user_config_dir, user_log_path

APP_NAME = "pullpoet"
ENV_APP_PREFIX = APP_NAME.upper() + "_"
LOG_DIR = Path(user_log_path(appname=APP_NAME))

CONFIG_FILENAME = "pullpoet.toml"
LOCAL_CONFIG_FILENAME = ".pullpoet.toml"

GLOBAL_CONFIG_FILE = Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME
LOCAL_CONFIG_FILE = Path(LOCAL_CONFIG_FILENAME)

PROMPT_FILENAME = ".prompt"

REMOTE_NAME = "origin"

# never let git block on an interactive credential prompt
GIT_ENV_OVERRIDES = {"GIT_TERMINAL_PROMPT": "0"}

SUPPORTED_PROVIDERS = ("openai", "ollama", "gemini", "openwebui")

PROVIDERS_REQUIRING_API_KEY = {"openai", "gemini"}

DEFAULT_PROVIDER_BASE_URLS = {
    "openai": "https://api.openai.com",
    "gemini": "https://generativelanguage.googleapis.com",
    "ollama": "http://localhost:11434",
    "openwebui": "http://localhost:3000",
}

PROVIDER_DISPLAY_NAMES = {
    "openai": "OpenAI",
    "gemini": "Gemini",
    "ollama": "Ollama",
    "openwebui": "OpenWebUI",
}

PROJECT_URL = "https://github.com/erkineren/pullpoet"
