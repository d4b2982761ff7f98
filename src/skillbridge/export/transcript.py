"""Plain-text transcript of a gap analysis, for copy and download."""

from __future__ import annotations

import re

from skillbridge.models.analysis import AnalysisResult

TITLE = "Skillbridge - Resume Gap Analysis"
ROLE_LABEL = "Target Role"
ITEM_MARKER = "- "
# Continuation lines of a multi-line list item
ITEM_INDENT = "  "
EMPTY_LIST = "(none)"

# (label, result field), in transcript order
SECTIONS: tuple[tuple[str, str], ...] = (
    ("Gap Summary", "gap_summary"),
    ("Missing Skills", "missing_skills"),
    ("Certifications", "certifications"),
    ("Learning Resources", "learning_resources"),
)

_HEADER = re.compile(r"^== (.+) ==$")


def _header(label: str) -> str:
    return f"== {label} =="


def format_transcript(role: str, result: AnalysisResult) -> str:
    """Render labeled sections; list items get a ``- `` marker.

    Further lines of a multi-line item are indented by two spaces.
    """
    lines = [TITLE, "", _header(ROLE_LABEL), role.strip()]
    for label, field in SECTIONS:
        lines += ["", _header(label)]
        value = getattr(result, field)
        if isinstance(value, str):
            lines.append(value)
        elif value:
            for item in value:
                first, *rest = item.split("\n")
                lines.append(f"{ITEM_MARKER}{first}")
                lines.extend(f"{ITEM_INDENT}{line}" for line in rest)
        else:
            lines.append(EMPTY_LIST)
    return "\n".join(lines) + "\n"


def parse_transcript(text: str) -> tuple[str, AnalysisResult]:
    """Recover (role, result) from ``format_transcript`` output.

    Raises:
        ValueError: a section is missing.
    """
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None
    # Split on "\n" only so "\r" and other separators inside fields survive
    for line in text.split("\n"):
        m = _HEADER.match(line)
        if m:
            current = sections.setdefault(m.group(1), [])
        elif current is not None:
            current.append(line)

    def body(label: str) -> list[str]:
        if label not in sections:
            raise ValueError(f"Transcript is missing the '{label}' section")
        lines = sections[label]
        # Sections are separated by one blank line
        if lines and lines[-1] == "":
            lines = lines[:-1]
        return lines

    role = "\n".join(body(ROLE_LABEL))
    fields: dict[str, str | list[str]] = {}
    for label, field in SECTIONS:
        lines = body(label)
        if field == "gap_summary":
            fields[field] = "\n".join(lines)
        elif lines == [EMPTY_LIST]:
            fields[field] = []
        else:
            fields[field] = _items(lines)
    return role, AnalysisResult(**fields)


def _items(lines: list[str]) -> list[str]:
    items: list[str] = []
    for line in lines:
        if line.startswith(ITEM_MARKER):
            items.append(line[len(ITEM_MARKER):])
        elif line.startswith(ITEM_INDENT) and items:
            items[-1] += "\n" + line[len(ITEM_INDENT):]
    return items


def transcript_filename(role: str) -> str:
    """File name for a downloaded transcript, e.g. ``gap_analysis_Data_Scientist.txt``."""
    slug = re.sub(r"[^A-Za-z0-9]+", "_", role.strip()).strip("_")
    return f"gap_analysis_{slug or 'report'}.txt"
