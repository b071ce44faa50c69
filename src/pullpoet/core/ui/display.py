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

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from pullpoet.core.branch_diff.models import DiffResult
from pullpoet.core.parsing.response_parser import ParsedOutput

_console = Console()


def show_analysis_summary(diff_result: DiffResult, silent: bool = False) -> None:
    if silent:
        return
    _console.print(
        f"[green]Git analysis completed[/green] "
        f"({len(diff_result.diff_text)} characters diff, "
        f"{len(diff_result.commits)} commits, "
        f"default branch [cyan]{diff_result.default_branch}[/cyan])"
    )
    if diff_result.commits_degraded:
        _console.print("[yellow]Commit history is unavailable for this run[/yellow]")


def show_result(result: ParsedOutput, heading: str, silent: bool = False) -> None:
    """Render the generated title and description."""
    if silent:
        return
    _console.print()
    _console.print(
        Panel(result.title, title=f"[bold]{heading}[/bold]", subtitle="Title", expand=True)
    )
    _console.print(Panel(Markdown(result.body), title="Description", expand=True))
