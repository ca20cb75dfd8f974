"""Shared constants for chatplan."""

import re

ROOT_ENV_VAR = "CHATPLAN_ROOT"
CONTENT_DIR = "src/content"
EXTENSION = ".mdx"

SAFE_FILENAME_RE = re.compile(r"^[\w.-]+\.mdx$")

DIFFICULTIES = ("beginner", "intermediate", "advanced")
MILESTONE_STATUSES = ("not-started", "in-progress", "complete")
DEFAULT_STATUS = "not-started"

# Frontmatter fields that hold lists of records rather than lists of strings
RECORD_FIELDS = ("milestones", "action_items")

ROLE_HEADINGS = {"user": "User", "ai": "AI"}

NEW_SECTION_TITLES = {2: "New Section", 3: "New Subsection"}
NEW_MILESTONE_TITLE = "New Milestone"
NEW_MILESTONE_WEEKS = "Week ?"
