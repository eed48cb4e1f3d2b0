from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from .fields import ChartLine

SECTION_PATTERN = re.compile(r"^\[([A-Za-z]+)\]$")
LINE_ENDING = "\r\n"

VERSION_SECTION = "version"
CANONICAL_ORDER = (
    VERSION_SECTION,
    "General",
    "Editor",
    "Metadata",
    "Difficulty",
    "Events",
    "TimingPoints",
    "Colours",
    "HitObjects",
)
# Header lookup is case-insensitive; the version section has no header.
_CANONICAL_NAMES = {name.lower(): name for name in CANONICAL_ORDER[1:]}


def canonical_name(header: str) -> str:
    """Return the canonical spelling of a section name, or ``header`` unchanged."""

    return _CANONICAL_NAMES.get(header.lower(), header)


@dataclass(frozen=True)
class Chart:
    """A chart file split into sections of non-blank lines.

    Only the line terminator is removed from each line; indentation and
    trailing text are kept as written.  Lines before the first
    ``[Header]`` form the ``version`` section.
    Repeated headers append to the same section.
    """

    sections: Dict[str, List[ChartLine]]

    @classmethod
    def from_text(cls, text: str) -> "Chart":
        sections: Dict[str, List[ChartLine]] = {}
        current = VERSION_SECTION
        for number, raw in enumerate(text.split("\n"), start=1):
            # Storyboard commands in [Events] nest by leading indentation.
            line = raw.rstrip("\r\n")
            stripped = line.strip(" ")
            if not stripped:
                continue
            match = SECTION_PATTERN.match(stripped)
            if match:
                current = canonical_name(match.group(1))
                sections.setdefault(current, [])
                continue
            sections.setdefault(current, []).append(ChartLine(number, line))
        return cls(sections=sections)

    def has_section(self, name: str) -> bool:
        return name in self.sections

    def lines(self, name: str) -> List[ChartLine]:
        return self.sections.get(name, [])

    @property
    def extra_sections(self) -> List[str]:
        """Sections that are not part of the canonical layout."""

        return [name for name in self.sections if name not in CANONICAL_ORDER]

    def to_text(self, overrides: Optional[Mapping[str, Sequence[str]]] = None) -> str:
        """Emit canonical sections in canonical order with CRLF line endings.

        ``overrides`` replaces the lines of a present section; it never adds
        a section the chart does not have.
        """
        overrides = overrides or {}
        out: List[str] = []
        for name in CANONICAL_ORDER:
            if name not in self.sections:
                continue
            if name != VERSION_SECTION:
                out.append(f"{LINE_ENDING}[{name}]{LINE_ENDING}")
            if name in overrides:
                lines = list(overrides[name])
            else:
                lines = [line.text for line in self.sections[name]]
            for line in lines:
                out.append(line + LINE_ENDING)
        return "".join(out)
