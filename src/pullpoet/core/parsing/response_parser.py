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

"""
Normalization of free-form LLM output into a title and a body.

The model is asked for JSON but nothing enforces it, so the text is run
through an ordered list of strategies. Each strategy is a pure function that
either returns a ParsedOutput or None; the first hit wins.
"""

import json
import re
from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from pullpoet.core.exceptions import EmptyGeneratedResponse

MAX_TITLE_LENGTH = 80
ELLIPSIS = "..."

TITLE_PREFIXES = (
    "📋 **Title:**",
    "**Title:**",
    "Pull Request Title:",
    "PR Title:",
    "Title:",
    "Başlık:",
    "Titre:",
    "Título:",
    "Titel:",
    "Titolo:",
)

_FENCED_JSON_RE = re.compile(r"```json\s*\n?(.*?)```", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class ParsedOutput:
    title: str
    body: str


def clean_title(title: str) -> str:
    """Strip known prefixes and bold markers, then cap the length."""
    result = title.strip()

    stripped = True
    while stripped:
        stripped = False
        for prefix in TITLE_PREFIXES:
            if result.lower().startswith(prefix.lower()):
                result = result[len(prefix) :].strip()
                stripped = True

    result = result.removeprefix("**").removesuffix("**").strip()
    return _truncate(result)


def _truncate(title: str) -> str:
    if len(title) > MAX_TITLE_LENGTH:
        return title[: MAX_TITLE_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    return title


def _from_json_text(text: str) -> ParsedOutput | None:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None

    if not isinstance(data, dict):
        return None
    title = data.get("title")
    if not isinstance(title, str):
        return None
    title = clean_title(title)
    if not title:
        return None

    body = data.get("body", "")
    if not isinstance(body, str):
        body = "" if body is None else str(body)
    return ParsedOutput(title, body.strip())


def parse_fenced_json(text: str) -> ParsedOutput | None:
    match = _FENCED_JSON_RE.search(text)
    if match is None:
        return None
    return _from_json_text(match.group(1).strip())


def parse_bare_json(text: str) -> ParsedOutput | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return _from_json_text(text[start : end + 1])


def parse_markdown_heading(text: str) -> ParsedOutput | None:
    lines = text.splitlines()
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("# "):
            title = clean_title(stripped[2:])
            if not title:
                return None
            body = "\n".join(lines[i + 1 :]).strip()
            return ParsedOutput(title, body)
    return None


def parse_legacy_format(text: str) -> ParsedOutput | None:
    stripped = text.strip()
    if not stripped.startswith("TITLE:"):
        return None

    first_line, _, rest = stripped.partition("\n")
    title = clean_title(first_line[len("TITLE:") :])
    if not title:
        return None

    body_index = rest.find("BODY:")
    body = rest[body_index + len("BODY:") :] if body_index != -1 else rest
    return ParsedOutput(title, body.strip())


def parse_first_line(text: str) -> ParsedOutput | None:
    lines = text.splitlines()
    non_blank = [i for i, line in enumerate(lines) if line.strip()]
    if not non_blank:
        return None

    for i in non_blank:
        title = clean_title(lines[i])
        if title:
            return ParsedOutput(title, "\n".join(lines[i + 1 :]).strip())

    # only decoration like "**" survived, keep it verbatim
    first = non_blank[0]
    return ParsedOutput(
        _truncate(lines[first].strip()), "\n".join(lines[first + 1 :]).strip()
    )


STRATEGIES: tuple[tuple[str, Callable[[str], ParsedOutput | None]], ...] = (
    ("fenced json", parse_fenced_json),
    ("bare json", parse_bare_json),
    ("markdown heading", parse_markdown_heading),
    ("legacy TITLE/BODY", parse_legacy_format),
    ("first line", parse_first_line),
)


def parse_response(text: str | None) -> ParsedOutput:
    """
    Extract a ParsedOutput from model output.

    Raises:
        EmptyGeneratedResponse: if the text has no non-blank content
    """
    if text is None or not text.strip():
        raise EmptyGeneratedResponse()

    for name, strategy in STRATEGIES:
        parsed = strategy(text)
        if parsed is not None:
            logger.debug(f"Parsed model response with the {name} strategy")
            return parsed

    # every non-blank input matches the last strategy
    raise EmptyGeneratedResponse()
