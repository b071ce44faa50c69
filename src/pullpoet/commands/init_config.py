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

import inquirer
import typer
from colorama import Fore, Style, init

from pullpoet.constants import APP_NAME, ENV_APP_PREFIX, LOCAL_CONFIG_FILE
from pullpoet.core.exceptions import FileSystemError, handle_pullpoet_exception
from pullpoet.runtimeutil import help_callback

# Initialize colorama
init(autoreset=True)

EXAMPLE_CONFIG = f"""# {APP_NAME} configuration
# Values of the form ${{VAR}} are read from the environment.
# Command line options always take priority over this file.

# Git settings (auto-detected inside a git repository)
# repo = "https://github.com/owner/repo.git"
# source = "feature/my-branch"
# target = "main"

# AI provider: openai, ollama, gemini or openwebui
provider = "openai"
model = "gpt-4o"
api_key = "${{{ENV_APP_PREFIX}API_KEY}}"
# provider_base_url = "http://localhost:11434"
temperature = 0.7

# Use native git commands for large repositories
fast_mode = false

# Language for the generated description
language = "en"

# Custom prompt file overriding the built-in template
# system_prompt = "./custom-prompt.md"

# Save generated content to a markdown file
# output = "pr-description.md"

# ClickUp integration
# clickup_pat = "${{{ENV_APP_PREFIX}CLICKUP_PAT}}"
# clickup_task_id = "abc123,def456"

# Jira integration
# jira_base_url = "${{{ENV_APP_PREFIX}JIRA_BASE_URL}}"
# jira_username = "${{{ENV_APP_PREFIX}JIRA_USERNAME}}"
# jira_api_token = "${{{ENV_APP_PREFIX}JIRA_API_TOKEN}}"
# jira_task_id = "PROJ-123"
"""


def write_example_config(path: Path, force: bool = False) -> bool:
    """Write the example config to path. Returns False when the user keeps an existing file."""
    if path.exists() and not force:
        overwrite = inquirer.confirm(
            f"{path} already exists. Overwrite it?",
            default=False,
        )
        if not overwrite:
            print(f"{Fore.YELLOW}Info:{Style.RESET_ALL} Kept existing config at {path}")
            return False

    try:
        path.write_text(EXAMPLE_CONFIG, encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Failed to write config file {path}", str(e)) from e

    print(f"{Fore.GREEN}Example config written to {path}{Style.RESET_ALL}")
    print(
        f"{Fore.WHITE}Edit it to set your provider and model, "
        f"then run '{APP_NAME} generate'.{Style.RESET_ALL}"
    )
    return True


def main(
    ctx: typer.Context,
    help: bool = typer.Option(
        False,
        "--help",
        callback=help_callback,
        is_eager=True,
        help="Show this message and exit.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file without asking",
    ),
) -> None:
    """
    Writes an example .pullpoet.toml to the current directory.

    Examples:
        pullpoet init-config
        pullpoet init-config --force
    """
    with handle_pullpoet_exception():
        write_example_config(LOCAL_CONFIG_FILE, force=force)
