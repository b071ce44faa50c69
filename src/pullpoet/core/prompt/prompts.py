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
Prompts for pull request generation.
"""

# -----------------------------------------------------------------------------
# System Message
# -----------------------------------------------------------------------------

SYSTEM_MESSAGE = (
    "You are a helpful assistant that generates pull request titles and descriptions. "
    "Respond with a JSON object containing 'title' and 'body' fields. "
    "The title should be a concise one-line summary, and the body should be a "
    "detailed markdown description explaining the changes."
)


# -----------------------------------------------------------------------------
# Default Template
# -----------------------------------------------------------------------------

DEFAULT_TEMPLATE = """You are an expert software engineer writing a pull request description for a code review.

You will receive the git diff of the branch, the commits that are new on it and, when available, the issue or task the work belongs to.

Rules:
- The title is a single line, max 80 characters, imperative mood
- The body is markdown with these sections: ## Summary, ## Changes, ## Testing
- Describe what changed and why, grouped by area, not file by file
- Mention breaking changes, migrations or new configuration explicitly
- Refer to files with links to the repository when a repository URL is given
- Do not invent changes that are not in the diff

Output format:
Respond ONLY with a JSON object, optionally inside a ```json block:
{"title": "<pull request title>", "body": "<markdown description>"}"""


# -----------------------------------------------------------------------------
# Section Headers
# -----------------------------------------------------------------------------

LANGUAGE_INSTRUCTION = """**IMPORTANT: Write the title and the body in the following language: {language}. Keep the JSON keys in English.**"""

ISSUE_CONTEXT_HEADER = "## 📋 Issue/Task Context"

COMMIT_HISTORY_HEADER = "## 📝 Commit History"

DIFF_HEADER = "## 🔍 Git Diff to Analyze"

STAGED_DIFF_HEADER = "## 🔍 Staged Changes to Analyze"


# -----------------------------------------------------------------------------
# Final Instructions
# -----------------------------------------------------------------------------

PR_FINAL_INSTRUCTION = "**Analyze the above information and create a professional PR description following the JSON format specified above.**"

PREVIEW_FINAL_INSTRUCTION = "**Analyze the staged changes above and create a preview of the commit/PR title and description following the JSON format specified above.**"
