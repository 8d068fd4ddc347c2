"""Markdown catalog table of skills for the README."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from oracle_skills.discovery import Skill
from oracle_skills.validation import parse_frontmatter

# Skills that spawn subagents through the Task tool
SUBAGENT_SKILLS = frozenset({"context-finder", "learn", "rrr", "trace"})

# Hand-written short descriptions, preferred over the manifest text
SHORT_DESCRIPTIONS = {
    "learn": "Explore codebases with parallel agents",
    "recap": "Fresh-start context summary",
    "context-finder": "Fast codebase search",
    "rrr": "Session retrospective with AI diary",
    "trace": "Find projects across git history and Oracle",
    "project": "Clone and track external repos",
    "schedule": "Query schedule.md with DuckDB",
    "physical": "Location awareness from FindMy",
    "watch": "Learn from YouTube videos",
    "skill-creator": "Create new Oracle skills",
    "standup": "Daily standup check",
    "where-we-are": "Session awareness",
    "feel": "Log emotions",
    "forward": "Session handoff",
    "fyi": "Log info for future reference",
    "oracle-family-scan": "Scan Oracle family repos",
}

SCRIPT_SUFFIXES = (".ts", ".js")
USE_WHEN = re.compile(r"\. Use when|Use when")

GROUPS = (
    ("Subagent", "subagent"),
    ("Prompt + Scripts", "scripts"),
    ("Prompt", "prompt"),
)


@dataclass(frozen=True)
class TableRow:
    """One skill as it appears in the catalog table."""

    name: str
    kind: str
    description: str
    script_count: int

    @property
    def type_label(self) -> str:
        if self.kind == "scripts":
            return f"prompt + scripts ({self.script_count})"
        return self.kind


def count_scripts(skill_dir: Path) -> int:
    """Count TypeScript/JavaScript files anywhere under a skill."""
    return sum(1 for p in skill_dir.rglob("*") if p.is_file() and p.suffix in SCRIPT_SUFFIXES)


def short_description(skill: Skill) -> str:
    """Pick the table description for a skill.

    Uses the hand-written override when there is one, otherwise the part of
    the manifest description before "Use when".
    """
    if skill.name in SHORT_DESCRIPTIONS:
        return SHORT_DESCRIPTIONS[skill.name]
    if not skill.description:
        return f"{skill.name} skill"
    return re.sub(r"\.$", "", USE_WHEN.split(skill.description)[0]).strip()


def build_row(skill: Skill) -> TableRow | None:
    """Build a table row, or None if the manifest lacks frontmatter."""
    manifest = skill.path / "SKILL.md"
    if not parse_frontmatter(manifest.read_text(encoding="utf-8", errors="replace")).success:
        return None

    scripts = count_scripts(skill.path)
    if skill.name in SUBAGENT_SKILLS:
        kind = "subagent"
    elif scripts:
        kind = "scripts"
    else:
        kind = "prompt"
    return TableRow(
        name=skill.name,
        kind=kind,
        description=short_description(skill),
        script_count=scripts,
    )


def render_table(skills: list[Skill]) -> str:
    """Render the grouped markdown table.

    Skills whose names start with "_" are left out. Within each group,
    rows are sorted by name and numbered continuously across groups.

    Args:
        skills: Discovered skills.

    Returns:
        Markdown table text.
    """
    rows = [
        row
        for row in (build_row(s) for s in skills if not s.name.startswith("_"))
        if row is not None
    ]

    lines = [
        "| # | Skill | Type | Description |",
        "|---|-------|------|-------------|",
    ]
    num = 1
    for title, kind in GROUPS:
        lines.append(f"|   | **— {title} —** |  |  |")
        for row in sorted((r for r in rows if r.kind == kind), key=lambda r: r.name):
            lines.append(f"| {num} | **{row.name}** | {row.type_label} | {row.description} |")
            num += 1
    return "\n".join(lines)
