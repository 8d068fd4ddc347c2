"""Front matter parsing for SKILL.md manifests."""

from __future__ import annotations

import re
from dataclasses import dataclass

import yaml

DESCRIPTION_PATTERN = re.compile(r"^description:\s*(.+)$", re.MULTILINE)
DELIMITER = "---"


@dataclass(frozen=True)
class Frontmatter:
    """Raw YAML header of a manifest, or why it could not be found.

    Attributes:
        block: Text between the opening and closing delimiters.
        error: Reason the header is missing, None when found.
    """

    block: str = ""
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def parse_frontmatter(content: str) -> Frontmatter:
    """Extract the YAML header block from markdown content.

    The header must open on the first line. The block ends at the first line
    that starts with the delimiter.

    Args:
        content: The full markdown content.

    Returns:
        Frontmatter holding the raw block or an error.

    Example:
        >>> parse_frontmatter("---\\nname: test\\n---\\nBody").block
        'name: test'
    """
    content = content.lstrip("\ufeff")
    if not content.startswith(DELIMITER):
        return Frontmatter(error="Content must have YAML frontmatter")

    end = content.find("\n" + DELIMITER, len(DELIMITER))
    if end == -1:
        return Frontmatter(error="Invalid frontmatter: missing closing ---")
    return Frontmatter(block=content[len(DELIMITER):end].strip())


def extract_description(content: str) -> str:
    """Get the description field from a manifest's frontmatter.

    The block is loaded as YAML. When it is not valid YAML, the first
    `description:` line is used as-is. A missing or non-string value gives
    an empty string.

    Args:
        content: Full SKILL.md content.

    Returns:
        The description, or "".
    """
    result = parse_frontmatter(content)
    if not result.success:
        return ""

    try:
        data = yaml.safe_load(result.block)
    except yaml.YAMLError:
        match = DESCRIPTION_PATTERN.search(result.block)
        return match.group(1).strip() if match else ""

    if not isinstance(data, dict):
        return ""
    description = data.get("description")
    if not isinstance(description, str):
        return ""
    return description.strip()
