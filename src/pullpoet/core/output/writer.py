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

from loguru import logger

from pullpoet.core.exceptions import FileSystemError
from pullpoet.core.parsing.response_parser import ParsedOutput


def format_markdown(result: ParsedOutput) -> str:
    return f"# {result.title}\n\n{result.body}\n"


def save_output(result: ParsedOutput, path: str | Path) -> Path:
    """Write the title and body as a markdown document, creating parent directories."""
    output_path = Path(path).expanduser()
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(format_markdown(result), encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Failed to save output to {output_path}", str(e)) from e

    logger.debug(f"Saved output to {output_path}")
    return output_path
