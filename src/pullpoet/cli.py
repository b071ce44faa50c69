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

import inspect
import sys
from pathlib import Path

import typer
from colorama import init
from dotenv import load_dotenv
from loguru import logger

from pullpoet.commands import generate, init_config, preview
from pullpoet.constants import APP_NAME
from pullpoet.context import GlobalConfig, GlobalContext
from pullpoet.core.config.config_loader import ConfigLoader
from pullpoet.core.exceptions import handle_pullpoet_exception
from pullpoet.core.logging.logging import setup_logger
from pullpoet.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# Initialize colorama (colored output in terminal)
init(autoreset=True)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: AI-generated pull request titles and descriptions from your git branches",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# Main cli commands
app.command(name="generate")(generate.main)
app.command(name="preview")(preview.main)
app.command(name="init-config")(init_config.main)

# which commands do not require a global context
no_context_commands = {"init-config"}


def load_global_config(custom_config_path: str | None, **input_args):
    # input args are the "runtime overrides" for configs
    config_args = {}

    for key, item in input_args.items():
        if item is not None:
            config_args[key] = item

    return ConfigLoader.get_full_config(
        GlobalConfig,
        config_args,
        custom_config_path=Path(custom_config_path)
        if custom_config_path is not None
        else None,
    )


def create_global_callback():
    """
    Dynamically creates the main callback function with GlobalConfig parameters.
    This allows the CLI arguments to be automatically synced with GlobalConfig fields.
    """
    cli_params = GlobalConfig.get_cli_params()

    def callback(
        ctx: typer.Context,
        version: bool = typer.Option(
            False,
            "--version",
            "-V",
            callback=version_callback,
            help="Show version and exit",
        ),
        log_path: bool = typer.Option(
            False,
            "--log-dir",
            "-LD",
            callback=get_log_dir_callback,
            help="Show log path (where logs for pullpoet live) and exit",
        ),
        custom_config: str | None = typer.Option(
            None,
            "--custom-config",
            help="Path to a custom config file",
        ),
        **kwargs,  # Dynamic GlobalConfig params injected here
    ) -> None:
        """
        Global setup callback. Initialize global context/config used by commands
        """
        with handle_pullpoet_exception(exit_on_fail=True):
            if ctx.invoked_subcommand is None:
                print(ctx.get_help())
                raise typer.Exit()

            # skip --help in subcommands
            if any(arg in ctx.help_option_names for arg in sys.argv):
                return

            if ctx.invoked_subcommand in no_context_commands:
                return

            config, used_config_sources, used_default = load_global_config(
                custom_config,
                **kwargs,
            )

            setup_logger(
                ctx.invoked_subcommand, debug=config.verbose, silent=config.silent
            )

            logger.debug(f"Used {used_config_sources} to build global context.")
            if used_default:
                logger.debug("Some settings fell back to their defaults")

            global_context = GlobalContext.from_global_config(config)

            setup_signal_handlers()

            ctx.obj = global_context

    # Dynamically add GlobalConfig parameters to function signature
    # This is necessary for typer to recognize them
    sig = inspect.signature(callback)
    params = [p for p in sig.parameters.values() if p.name != "kwargs"]
    for param_name, (param_type, param_default) in cli_params.items():
        params.append(
            inspect.Parameter(
                param_name,
                inspect.Parameter.KEYWORD_ONLY,
                default=param_default,
                annotation=param_type,
            )
        )

    callback.__signature__ = sig.replace(parameters=params)
    return callback


# Register the dynamically created callback
main = create_global_callback()
app.callback(invoke_without_command=True)(main)


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    run_app()
